"""
sitio_tracker/domain/serialization.py

Plain-dict conversion for sitio records (storage payloads, API bodies).
"""

from __future__ import annotations

from dataclasses import asdict, fields
from typing import Any, Mapping

from sitio_tracker.domain.sitio import TAGGED_LIST, Sitio


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _listify(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(item) for item in value]
    return value


def sitio_to_dict(sitio: Sitio, *, drop_absent: bool = False) -> dict[str, Any]:
    """
    Convert a record into JSON-ready primitives.
    """

    payload = _listify(asdict(sitio))
    if drop_absent:
        payload = {key: value for key, value in payload.items() if value is not None}
    return payload


def _section_from_dict(section_type: type, raw: Any) -> Any:
    if not isinstance(raw, Mapping):
        return None

    values: dict[str, Any] = {}
    for item in fields(section_type):
        if item.name not in raw:
            continue
        value = raw[item.name]
        if item.metadata.get("kind") == TAGGED_LIST:
            entry_type = item.metadata["entry_type"]
            value = tuple(
                entry_type(**{
                    item.metadata["key"]: entry.get(item.metadata["key"]),
                    item.metadata["amount"]: entry.get(item.metadata["amount"], 0),
                })
                for entry in value or ()
                if isinstance(entry, Mapping)
            )
        elif isinstance(value, list):
            value = tuple(value)
        values[item.name] = value
    return section_type(**values)


def sitio_from_dict(raw: Mapping[str, Any]) -> Sitio:
    """
    Rebuild a record from :func:`sitio_to_dict` output. Unknown keys are ignored.
    """

    values: dict[str, Any] = {}
    for item in fields(Sitio):
        if item.name not in raw:
            continue
        value = raw[item.name]
        section_type = Sitio.SECTION_TYPES.get(item.name)
        if section_type is not None:
            value = _section_from_dict(section_type, value)
        elif isinstance(value, list):
            value = tuple(value)
        values[item.name] = value
    return Sitio(**values)
