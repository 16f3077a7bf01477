"""
Blocking HTTP fetches for PetRescue pages, returned as parsed documents.
"""
import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from config.settings import get_settings, Settings
from errors import FetchError


class PetRescueFetcher:
    """Fetches one page per call and parses it with BeautifulSoup."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or self._setup_session()
        self.requests_made = 0

    def _setup_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'User-Agent': self.settings.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-AU,en;q=0.5',
        })
        return session

    def get_document(self, url: str) -> BeautifulSoup:
        """GET ``url`` and parse the body. Any transport error or non-200 status raises FetchError."""
        logging.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.settings.request_timeout_seconds)
        except requests.exceptions.RequestException as e:
            logging.error(f"Request error for {url}: {e}", extra={"error": type(e).__name__})
            raise FetchError(url, reason=str(e)) from e
        self.requests_made += 1

        if response.status_code != 200:
            logging.error(
                f"Request failed with status {response.status_code} for {url}",
                extra={"status": response.status_code},
            )
            raise FetchError(url, status_code=response.status_code, reason=response.reason)

        return BeautifulSoup(response.text, 'html.parser')

    def close(self) -> None:
        self.session.close()
