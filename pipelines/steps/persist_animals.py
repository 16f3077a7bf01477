from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from models import AnimalRecord, animals_to_data
from pipelines.runner import RunContext
from sqlite_storage import SQLiteStorage


logger = logging.getLogger(__name__)


class PersistAnimals:
    def __init__(
        self,
        storage: SQLiteStorage,
        table_name: str = "data",
        keys: Sequence[str] = ("URL",),
        schema: Optional[Dict[str, str]] = None,
        refresh: bool = False,
    ) -> None:
        self.storage = storage
        self.table_name = table_name
        self.keys = list(keys)
        self.schema = schema
        self.refresh = refresh

    def run(self, ctx: RunContext) -> RunContext:
        animals: List[AnimalRecord] = ctx.animals or []
        logger.info(f"Saving {len(animals)} records", extra={"step": "persist"})
        data = animals_to_data(animals)
        inserted = self.storage.save(self.keys, data, self.table_name, schema=self.schema, refresh=self.refresh)
        ctx.meta["rows_inserted"] = inserted
        logger.info(f"Saved {inserted} rows to {self.table_name}", extra={"step": "persist", "status": "ok"})
        return ctx
