"""
Error types raised by the scraper components.

Components raise; only the CLI maps an error to a process exit code.
"""

from __future__ import annotations

from typing import Optional


class ScrapeError(Exception):
    """Base class for every failure the scraper surfaces."""


class FetchError(ScrapeError):
    def __init__(self, url: str, status_code: Optional[int] = None, reason: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        if status_code is not None:
            message = f"status code error: {status_code} {reason or ''}".rstrip() + f" ({url})"
        else:
            message = f"request failed for {url!r}: {reason}"
        super().__init__(message)


class SchemaInferenceError(ScrapeError):
    pass


class StorageError(ScrapeError):
    pass
