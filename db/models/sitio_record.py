"""
db/models/sitio_record.py

Stored sitio profiles. The full record lives in ``payload_json``; the
natural-key columns are duplicated for lookups.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class SitioRecord(Base, TimestampMixin):
    __tablename__ = "sitio_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    municipality: Mapped[str] = mapped_column(String(120), nullable=False)
    barangay: Mapped[str] = mapped_column(String(120), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    payload_json: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Full sitio profile as plain JSON",
    )

    __table_args__ = (
        Index("ix_sitio_records_municipality", "municipality"),
        Index("ix_sitio_records_natural_key", "municipality", "barangay", "name"),
    )
