"""
Markup extraction for PetRescue search-result and detail pages.

Selector misses are never errors: a missing element yields an empty string.
"""
import logging
from typing import List

from bs4 import BeautifulSoup, Tag

from models import AnimalRecord


LISTING_CARD_SELECTOR = "div.search-results article.cards-listings-preview"
LISTING_NAME_SELECTOR = "header h3"
LISTING_LINK_SELECTOR = "a.cards-listings-preview__content"
DETAIL_BREED_SELECTOR = "h3.pet-listing__content__breed"


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return element.get_text().strip()


def extract_listing_card(card: Tag) -> AnimalRecord:
    name = _text(card.select_one(LISTING_NAME_SELECTOR))
    link = card.select_one(LISTING_LINK_SELECTOR)
    href = link.get("href", "") if link is not None else ""
    if not href:
        logging.warning(f"Listing card {name!r} has no detail link")
    return AnimalRecord(url=href, name=name)


def extract_listing_cards(soup: BeautifulSoup) -> List[AnimalRecord]:
    """Return one partial record (url + name) per listing card, in document order."""
    return [extract_listing_card(card) for card in soup.select(LISTING_CARD_SELECTOR)]


def extract_breed(soup: BeautifulSoup) -> str:
    return _text(soup.select_one(DETAIL_BREED_SELECTOR))
