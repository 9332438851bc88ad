"""
Where the sitio store lives and how to connect to it.

The tracker runs against a local SQLite file unless a server URL is given.
PostgreSQL URLs are rewritten to the psycopg driver installed by the
``postgres`` extra.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SQLITE_URL = "sqlite:///sitio_tracker.db"

# Checked in order; the first non-empty value wins.
DATABASE_URL_ENV_VARS: tuple[str, ...] = ("SITIO_DATABASE_URL", "DATABASE_URL")

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_POSTGRES_PREFIXES = ("postgres://", "postgresql://")


@dataclass(frozen=True)
class DatabaseSettings:
    url: str
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


def load_env_files() -> None:
    """
    Read ``.env`` then ``.env.local`` from the project root without
    overriding variables already set in the process.
    """

    for name in (".env", ".env.local"):
        env_path = _PROJECT_ROOT / name
        if env_path.is_file():
            load_dotenv(env_path, override=False)


def normalize_postgres_url(url: str) -> str:
    for prefix in _POSTGRES_PREFIXES:
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def resolve_database_url() -> str:
    load_env_files()
    for name in DATABASE_URL_ENV_VARS:
        value = (os.getenv(name) or "").strip()
        if value:
            return normalize_postgres_url(value)
    return DEFAULT_SQLITE_URL


def get_database_settings() -> DatabaseSettings:
    """
    Resolve the store URL plus ``SITIO_SQL_ECHO`` from the environment.
    """

    url = resolve_database_url()
    echo = (os.getenv("SITIO_SQL_ECHO") or "").strip().lower() in {"1", "true", "yes", "on"}
    return DatabaseSettings(url=url, echo=echo)
