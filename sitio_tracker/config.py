"""
sitio_tracker/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ImportSettings:
    """
    Runtime settings for spreadsheet imports.
    """

    max_file_size_bytes: int = 10 * 1024 * 1024
    max_validation_errors: int = 500
    error_preview_limit: int = 10
    log_validation_errors: bool = True
    require_core_mapping: bool = False


@dataclass(frozen=True)
class PlanningSettings:
    """
    Defaults for monthly target planning.
    """

    default_strategy: str = "even"
    percentage_tolerance: float = 0.01


@lru_cache(maxsize=1)
def get_import_settings() -> ImportSettings:
    """
    Return cached import settings from environment variables.
    """

    return ImportSettings(
        max_file_size_bytes=max(1, _get_int_env("SITIO_IMPORT_MAX_FILE_SIZE_BYTES", 10 * 1024 * 1024)),
        max_validation_errors=max(1, _get_int_env("SITIO_IMPORT_MAX_VALIDATION_ERRORS", 500)),
        error_preview_limit=max(1, _get_int_env("SITIO_IMPORT_ERROR_PREVIEW_LIMIT", 10)),
        log_validation_errors=_get_bool_env("SITIO_IMPORT_LOG_VALIDATION_ERRORS", True),
        require_core_mapping=_get_bool_env("SITIO_IMPORT_REQUIRE_CORE_MAPPING", False),
    )


@lru_cache(maxsize=1)
def get_planning_settings() -> PlanningSettings:
    """
    Return cached planning settings from environment variables.
    """

    strategy = _get_str_env("PLANNING_DEFAULT_STRATEGY", "even").lower()
    if strategy not in {"even", "weighted"}:
        strategy = "even"
    return PlanningSettings(
        default_strategy=strategy,
        percentage_tolerance=max(0.0, _get_float_env("PLANNING_PERCENTAGE_TOLERANCE", 0.01)),
    )
