from __future__ import annotations

from typing import List, Protocol

from models import AnimalRecord


class ListingSource(Protocol):
    source_name: str

    def page_url(self, page: int) -> str:
        ...

    def scrape_search_results_page(self, url: str) -> List[AnimalRecord]:
        ...

    def scrape_animal(self, animal: AnimalRecord) -> None:
        ...
