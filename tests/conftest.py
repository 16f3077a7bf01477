from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'pipelines.steps'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", reason: str = "OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """Stands in for requests.Session; unknown urls answer 404."""

    def __init__(self) -> None:
        self.routes: Dict[str, Union[str, FakeResponse, Exception]] = {}
        self.headers: Dict[str, str] = {}
        self.calls: List[str] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(url)
        resp = self.routes.get(url)
        if resp is None:
            return FakeResponse(404, "", "Not Found")
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, str):
            return FakeResponse(200, resp)
        return resp

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_http(monkeypatch):
    import requests

    session = FakeSession()
    monkeypatch.setattr(requests, "Session", lambda: session)
    return session


def _card(name: Optional[str], href: Optional[str]) -> str:
    header = f"<header><h3>{name}</h3></header>" if name is not None else ""
    anchor = (
        f'<a class="cards-listings-preview__content" href="{href}">more</a>'
        if href is not None else ""
    )
    return f'<article class="cards-listings-preview">{header}{anchor}</article>'


@pytest.fixture
def listing_html():
    """Build a search-results page from (name, href) pairs; None omits that element."""

    def _build(*cards) -> str:
        body = "".join(_card(name, href) for name, href in cards)
        return f'<html><body><div class="search-results">{body}</div></body></html>'

    return _build


@pytest.fixture
def detail_html():
    def _build(breed: Optional[str]) -> str:
        heading = f'<h3 class="pet-listing__content__breed">{breed}</h3>' if breed is not None else ""
        return f"<html><body><h1>Dog</h1>{heading}</body></html>"

    return _build
