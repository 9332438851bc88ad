"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.sitio_record import SitioRecord

__all__ = [
    "SitioRecord",
]
