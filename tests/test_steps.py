from __future__ import annotations

from typing import Dict, List

import pytest

from errors import FetchError
from models import AnimalRecord
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import CrawlListings, EnrichAnimals


class _StubSource:
    source_name = "stub"

    def __init__(self, pages: Dict[int, List[str]], breeds: Dict[str, str] = None, failing: tuple = ()):
        self.pages = pages
        self.breeds = breeds or {}
        self.failing = set(failing)
        self.page_calls: List[str] = []
        self.detail_calls: List[str] = []

    def page_url(self, page: int) -> str:
        return f"page-{page}"

    def scrape_search_results_page(self, url: str) -> List[AnimalRecord]:
        self.page_calls.append(url)
        if url in self.failing:
            raise FetchError(url, status_code=503, reason="Service Unavailable")
        page = int(url.split("-")[1])
        return [AnimalRecord(url=f"https://site/{n}", name=n) for n in self.pages.get(page, [])]

    def scrape_animal(self, animal: AnimalRecord) -> None:
        self.detail_calls.append(animal.url)
        if animal.url in self.failing:
            raise FetchError(animal.url, status_code=404, reason="Not Found")
        animal.breed = self.breeds.get(animal.url, "")


def test_crawl_stops_at_first_empty_page():
    src = _StubSource({1: ["a", "b"], 2: ["c"], 4: ["never"]})
    ctx = CrawlListings(src).run(RunContext())
    assert src.page_calls == ["page-1", "page-2", "page-3"]
    assert [a.name for a in ctx.animals] == ["a", "b", "c"]
    assert ctx.meta["pages_fetched"] == 3


def test_crawl_empty_first_page():
    src = _StubSource({})
    ctx = CrawlListings(src).run(RunContext())
    assert src.page_calls == ["page-1"]
    assert ctx.animals == []


def test_crawl_respects_max_pages():
    src = _StubSource({n: [str(n)] for n in range(1, 10)})
    ctx = CrawlListings(src, max_pages=2).run(RunContext())
    assert src.page_calls == ["page-1", "page-2"]
    assert [a.name for a in ctx.animals] == ["1", "2"]


def test_crawl_abort_policy_propagates_page_failure():
    src = _StubSource({1: ["a"], 2: ["b"]}, failing=("page-2",))
    with pytest.raises(FetchError):
        CrawlListings(src).run(RunContext())


def test_crawl_skip_policy_ends_crawl_on_page_failure():
    src = _StubSource({1: ["a"], 2: ["b"], 3: ["c"]}, failing=("page-2",))
    ctx = CrawlListings(src, error_policy="skip").run(RunContext())
    assert [a.name for a in ctx.animals] == ["a"]
    assert ctx.errors == [{"step": "crawl", "url": "page-2", "error": str(FetchError("page-2", 503, "Service Unavailable"))}]


def test_enrich_sets_breeds_in_order():
    src = _StubSource({1: ["a", "b", "c"]}, breeds={"https://site/a": "Kelpie", "https://site/c": "Pug"})
    progress = []
    ctx = Pipeline([
        CrawlListings(src),
        EnrichAnimals(src, on_progress=lambda cur, total, url: progress.append((cur, total, url))),
    ]).run(RunContext())
    assert [(a.name, a.breed) for a in ctx.animals] == [("a", "Kelpie"), ("b", ""), ("c", "Pug")]
    assert src.detail_calls == ["https://site/a", "https://site/b", "https://site/c"]
    assert progress[0] == (1, 3, "https://site/a")
    assert ctx.meta["animals_enriched"] == 3


def test_enrich_abort_policy_stops_at_first_failure():
    src = _StubSource({}, failing=("https://site/b",))
    ctx = RunContext()
    ctx.animals = [AnimalRecord(url=f"https://site/{n}", name=n) for n in ("a", "b", "c")]
    with pytest.raises(FetchError):
        EnrichAnimals(src).run(ctx)
    assert src.detail_calls == ["https://site/a", "https://site/b"]


def test_enrich_skip_policy_drops_failing_animal():
    src = _StubSource({}, breeds={"https://site/a": "Kelpie", "https://site/c": "Pug"}, failing=("https://site/b",))
    ctx = RunContext()
    ctx.animals = [AnimalRecord(url=f"https://site/{n}", name=n) for n in ("a", "b", "c")]
    ctx = EnrichAnimals(src, error_policy="skip").run(ctx)
    assert [a.name for a in ctx.animals] == ["a", "c"]
    assert [e["url"] for e in ctx.errors] == ["https://site/b"]
