from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlencode

from data_extractor import extract_breed, extract_listing_cards
from models import AnimalRecord
from petrescue_fetcher import PetRescueFetcher
from sources.base import ListingSource


SEARCH_BASE_URL = "https://www.petrescue.com.au/listings/search/dogs"

# Fixed search filters: 60 per page, within 50km of postcode 2256, NSW, interstate included
SEARCH_PARAMS = {
    "interstate": "true",
    "per_page": "60",
    "postcode[distance]": "50",
    "postcode[postcode]": "2256",
    "state_id[]": "1",
}


def search_url(page: int) -> str:
    params = dict(SEARCH_PARAMS)
    params["page"] = str(page)
    return f"{SEARCH_BASE_URL}?{urlencode(sorted(params.items()))}"


class PetRescueDogsSource(ListingSource):
    source_name = "petrescue_dogs"

    def __init__(self, fetcher: Optional[PetRescueFetcher] = None):
        self.fetcher = fetcher or PetRescueFetcher()

    def page_url(self, page: int) -> str:
        return search_url(page)

    def scrape_search_results_page(self, url: str) -> List[AnimalRecord]:
        soup = self.fetcher.get_document(url)
        return extract_listing_cards(soup)

    def scrape_animal(self, animal: AnimalRecord) -> None:
        """Fill in ``animal.breed`` from its detail page. The url is used as extracted."""
        soup = self.fetcher.get_document(animal.url)
        animal.breed = extract_breed(soup)

    def close(self) -> None:
        self.fetcher.close()
