"""
sitio_tracker/mappers/row_transformer.py

Turns one raw spreadsheet row into a sitio record.
"""

from __future__ import annotations

import math
from functools import reduce
from typing import Any, Iterator, Mapping, Sequence

from sitio_tracker.domain.sitio import STRING_LIST, TAGGED_LIST, ScalarValue, Sitio, create_default_sitio
from sitio_tracker.mappers.column_mapper import ColumnMapping
from sitio_tracker.mappers.field_catalog import FIELD_SLOTS, FieldSlot

RawCell = Any
RawRow = Mapping[str, RawCell]

TRUE_LITERALS = frozenset({"Yes", "yes", "TRUE", "true"})
FALSE_LITERALS = frozenset({"No", "no", "FALSE", "false"})


def is_blank_cell(value: RawCell) -> bool:
    """
    Return True for cells that must not overwrite a default.
    """

    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def cell_text(value: RawCell) -> str:
    """
    Render a cell the way it reads in the sheet (``224`` rather than ``224.0``).
    """

    if is_number(value) and float(value).is_integer():
        return str(int(value))
    return str(value).strip()


def coerce_scalar(value: RawCell) -> ScalarValue:
    """
    Coerce a raw cell into a scalar field value.
    """

    if isinstance(value, bool) or is_number(value):
        return value

    if value in TRUE_LITERALS:
        return True
    if value in FALSE_LITERALS:
        return False

    raw_value = str(value).strip()
    if "_" not in raw_value:
        try:
            return int(raw_value)
        except ValueError:
            pass

        try:
            parsed = float(raw_value)
        except ValueError:
            parsed = None
        if parsed is not None and math.isfinite(parsed):
            return parsed

    return raw_value


class RowTransformer:
    """
    Applies column mappings to raw rows.

    A row is folded onto :func:`create_default_sitio` one mapped cell at a
    time. Unmapped columns, paths outside the record shape and blank cells
    leave the defaults untouched.
    """

    def __init__(self, slots: Mapping[str, FieldSlot] | None = None) -> None:
        self._slots = dict(slots or FIELD_SLOTS)

    def transform(self, row: RawRow, mappings: Sequence[ColumnMapping]) -> Sitio:
        sitio = reduce(
            lambda acc, cell: self._apply_cell(acc, cell[0], cell[1]),
            self._mapped_cells(row, mappings),
            create_default_sitio(),
        )
        return self._derive_totals(sitio)

    def _mapped_cells(
        self,
        row: RawRow,
        mappings: Sequence[ColumnMapping],
    ) -> Iterator[tuple[FieldSlot, RawCell]]:
        for mapping in mappings:
            if not mapping.sitio_field:
                continue
            slot = self._slots.get(mapping.sitio_field)
            if slot is None:
                continue
            value = row.get(mapping.csv_header)
            if is_blank_cell(value):
                continue
            yield slot, value

    def _apply_cell(self, sitio: Sitio, slot: FieldSlot, value: RawCell) -> Sitio:
        if slot.section is None:
            if slot.kind == STRING_LIST:
                return sitio.with_list_item(slot.attribute, cell_text(value))
            return sitio.assign(slot.attribute, coerce_scalar(value))

        section = sitio.section(slot.section)
        if slot.kind == STRING_LIST:
            updated = section.with_list_item(slot.attribute, cell_text(value))
        elif slot.kind == TAGGED_LIST:
            updated = section.with_tagged_entry(slot.attribute, cell_text(value))
        else:
            updated = section.assign(slot.attribute, coerce_scalar(value))
        return sitio.assign(slot.section, updated)

    @staticmethod
    def _derive_totals(sitio: Sitio) -> Sitio:
        demographics = sitio.demographics
        if (
            demographics is not None
            and not demographics.total
            and is_number(demographics.male)
            and is_number(demographics.female)
            and demographics.male
            and demographics.female
        ):
            demographics = demographics.assign("total", demographics.male + demographics.female)
            sitio = sitio.assign("demographics", demographics)

        if not sitio.population and demographics is not None and demographics.total:
            sitio = sitio.assign("population", demographics.total)

        animals = sitio.domestic_animals
        if animals is not None:
            total_count = sum(value for value in (animals.dogs, animals.cats) if is_number(value))
            sitio = sitio.assign("domestic_animals", animals.assign("total_count", total_count))

        return sitio


_default_transformer = RowTransformer()


def transform_row_to_sitio(row: RawRow, mappings: Sequence[ColumnMapping]) -> Sitio:
    """
    Transform one raw row using the default field slots.
    """

    return _default_transformer.transform(row, mappings)
