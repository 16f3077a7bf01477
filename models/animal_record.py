from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field


class AnimalRecord(BaseModel):
    """One listing card: scraped from the search results, enriched from the detail page."""

    # Column names and SQLite types used when the record is stored.
    SCHEMA: ClassVar[Dict[str, str]] = {
        "URL": "TEXT",
        "Name": "TEXT",
        "Breed": "TEXT",
    }

    url: str = Field(default="", alias="URL")
    name: str = Field(default="", alias="Name")
    breed: str = Field(default="", alias="Breed")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def to_data(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def animals_to_data(animals: Iterable[AnimalRecord]) -> List[Dict[str, Any]]:
    return [a.to_data() for a in animals]
