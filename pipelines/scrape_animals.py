from __future__ import annotations

import sqlite3
from typing import Callable, Optional

from models import AnimalRecord
from pipelines.runner import ErrorPolicy, Pipeline, RunContext
from pipelines.steps import CrawlListings, EnrichAnimals, PersistAnimals
from sources.base import ListingSource
from sqlite_storage import SQLiteStorage


def scrape_animals(
    conn: sqlite3.Connection,
    source: ListingSource,
    table_name: str = "data",
    error_policy: ErrorPolicy = "abort",
    max_pages: Optional[int] = None,
    refresh: bool = False,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> RunContext:
    """Crawl, enrich and save in one pass.

    Under the abort policy any failure propagates before PersistAnimals runs,
    so a failed run writes nothing.
    """
    pipeline = Pipeline([
        CrawlListings(source, max_pages=max_pages, error_policy=error_policy),
        EnrichAnimals(source, error_policy=error_policy, on_progress=on_progress),
        PersistAnimals(
            SQLiteStorage(conn),
            table_name=table_name,
            keys=["URL"],
            schema=AnimalRecord.SCHEMA,
            refresh=refresh,
        ),
    ])
    return pipeline.run(RunContext())
