from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


ERROR_POLICIES = ("abort", "skip")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Storage
    db_path: str
    table_name: str

    # HTTP
    request_timeout_seconds: int
    user_agent: str

    # Run behaviour
    error_policy: str  # abort | skip
    refresh_table: bool
    max_pages: int | None

    log_level: str
    run_env: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    error_policy = os.getenv("ERROR_POLICY", "abort").lower()
    if error_policy not in ERROR_POLICIES:
        raise RuntimeError(
            f"ERROR_POLICY must be one of {', '.join(ERROR_POLICIES)} (got {error_policy!r})"
        )
    return Settings(
        db_path=os.getenv("DB_PATH", "data.sqlite"),
        table_name=os.getenv("TABLE_NAME", "data"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT", "30")),
        user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        error_policy=error_policy,
        refresh_table=_env_flag("REFRESH_TABLE"),
        max_pages=_env_optional_int("MAX_PAGES"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
    )
