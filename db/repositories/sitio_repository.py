"""
db/repositories/sitio_repository.py

Load/save access to stored sitio profiles.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from db.models.sitio_record import SitioRecord
from sitio_tracker.domain.serialization import sitio_from_dict, sitio_to_dict
from sitio_tracker.domain.sitio import Sitio


class SitioRepository:
    """
    Repository for sitio records. Callers own the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def load(self) -> list[Sitio]:
        """
        Return every stored sitio ordered by id.
        """

        stmt = select(SitioRecord).order_by(SitioRecord.id)
        records = self._session.execute(stmt).scalars().all()
        return [replace(sitio_from_dict(record.payload_json), id=record.id) for record in records]

    def next_id(self) -> int:
        current = self._session.execute(select(func.max(SitioRecord.id))).scalar()
        return int(current or 0) + 1

    def save_all(self, sitios: Sequence[Sitio]) -> list[Sitio]:
        """
        Insert *sitios*, assigning ids to records that have none, and flush.
        """

        if not sitios:
            return []

        next_id = self.next_id()
        saved: list[Sitio] = []
        for sitio in sitios:
            if sitio.id is None:
                sitio = replace(sitio, id=next_id)
                next_id += 1
            else:
                next_id = max(next_id, sitio.id + 1)
            self._session.add(
                SitioRecord(
                    id=sitio.id,
                    municipality=str(sitio.municipality or "").strip(),
                    barangay=str(sitio.barangay or "").strip(),
                    name=str(sitio.name or "").strip(),
                    payload_json=sitio_to_dict(sitio),
                )
            )
            saved.append(sitio)

        self._session.flush()
        return saved
