"""
Repository layer exports.
"""

from db.repositories.errors import SitioPersistenceError, SitioRepositoryError
from db.repositories.sitio_repository import SitioRepository

__all__ = [
    "SitioPersistenceError",
    "SitioRepository",
    "SitioRepositoryError",
]
