from __future__ import annotations

import logging
import time
from typing import List, Optional

from errors import FetchError
from models import AnimalRecord
from pipelines.runner import ErrorPolicy, RunContext
from sources.base import ListingSource


logger = logging.getLogger(__name__)


class CrawlListings:
    """Walk search-result pages from page 1 until a page yields no listings."""

    def __init__(self, source: ListingSource, max_pages: Optional[int] = None, error_policy: ErrorPolicy = "abort") -> None:
        self.source = source
        self.max_pages = max_pages
        self.error_policy = error_policy

    def run(self, ctx: RunContext) -> RunContext:
        started = time.monotonic()
        animals: List[AnimalRecord] = []
        page = 1
        fetched = 0
        while True:
            if self.max_pages is not None and page > self.max_pages:
                logger.warning(
                    f"Stopping crawl at max_pages={self.max_pages}",
                    extra={"step": "crawl", "status": "max_pages", "page": page},
                )
                break
            url = self.source.page_url(page)
            logger.info(f"Fetching page {page}", extra={"step": "crawl", "page": page})
            try:
                found = self.source.scrape_search_results_page(url)
            except FetchError as e:
                if self.error_policy != "skip":
                    raise
                # A failed page cannot be told apart from running off the end
                logger.warning(
                    f"Page {page} failed, ending crawl with {len(animals)} animals",
                    extra={"step": "crawl", "status": "skipped", "page": page, "error": str(e)},
                )
                ctx.record_error("crawl", url, e)
                break
            fetched += 1
            if not found:
                break
            animals.extend(found)
            page += 1

        ctx.animals = animals
        ctx.meta["pages_fetched"] = fetched
        logger.info(
            f"Crawled {len(animals)} animals from {fetched} pages",
            extra={"step": "crawl", "status": "ok", "duration_ms": int((time.monotonic() - started) * 1000)},
        )
        return ctx
