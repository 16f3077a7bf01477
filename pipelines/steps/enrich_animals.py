from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from errors import FetchError
from models import AnimalRecord
from pipelines.runner import ErrorPolicy, RunContext
from sources.base import ListingSource


logger = logging.getLogger(__name__)


class EnrichAnimals:
    """Fetch each animal's detail page in turn and fill in its breed."""

    def __init__(
        self,
        source: ListingSource,
        error_policy: ErrorPolicy = "abort",
        on_progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> None:
        self.source = source
        self.error_policy = error_policy
        self.on_progress = on_progress

    def run(self, ctx: RunContext) -> RunContext:
        started = time.monotonic()
        animals: List[AnimalRecord] = ctx.animals or []
        total = len(animals)
        enriched: List[AnimalRecord] = []

        for idx, animal in enumerate(animals, start=1):
            if self.on_progress:
                self.on_progress(idx, total, animal.url)
            try:
                self.source.scrape_animal(animal)
            except FetchError as e:
                if self.error_policy != "skip":
                    raise
                logger.warning(
                    f"Skipping {animal.name or animal.url!r}: detail page failed",
                    extra={"step": "enrich", "status": "skipped", "error": str(e)},
                )
                ctx.record_error("enrich", animal.url, e)
                continue
            enriched.append(animal)

        ctx.animals = enriched
        ctx.meta["animals_enriched"] = len(enriched)
        logger.info(
            f"Enriched {len(enriched)}/{total} animals",
            extra={"step": "enrich", "status": "ok", "duration_ms": int((time.monotonic() - started) * 1000)},
        )
        return ctx
