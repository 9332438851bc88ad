"""
Repository-layer exceptions for sitio storage.
"""

from __future__ import annotations


class SitioRepositoryError(Exception):
    """Base exception for sitio repository failures."""


class SitioPersistenceError(SitioRepositoryError):
    """Raised when sitio records cannot be written."""
