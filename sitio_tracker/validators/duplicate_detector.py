"""
sitio_tracker/validators/duplicate_detector.py

Natural-key duplicate detection between an import batch and stored records.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from sitio_tracker.domain.import_result import DuplicateRecord
from sitio_tracker.domain.sitio import Sitio


def _key_part(value: object) -> str:
    if value is None:
        return ""
    return str(value).lower().strip()


def build_duplicate_key(sitio: Sitio) -> str:
    """
    Return the ``municipality-barangay-name`` key, lower-cased and trimmed per part.
    """

    return "-".join(_key_part(part) for part in (sitio.municipality, sitio.barangay, sitio.name))


def is_keyable(sitio: Sitio) -> bool:
    return bool(sitio.municipality and sitio.barangay and sitio.name)


def find_duplicates(
    incoming: Iterable[Sitio],
    existing: Sequence[Sitio],
) -> list[DuplicateRecord]:
    """
    Pair each keyable incoming record with the first stored record sharing its key.

    Incoming records missing municipality, barangay or name are skipped.
    """

    existing_by_key: dict[str, Sitio] = {}
    for stored in existing:
        existing_by_key.setdefault(build_duplicate_key(stored), stored)

    duplicates: list[DuplicateRecord] = []
    for candidate in incoming:
        if not is_keyable(candidate):
            continue
        key = build_duplicate_key(candidate)
        match = existing_by_key.get(key)
        if match is not None:
            duplicates.append(DuplicateRecord(existing=match, incoming=candidate, key=key))
    return duplicates
