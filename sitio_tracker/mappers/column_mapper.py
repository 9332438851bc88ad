"""
sitio_tracker/mappers/column_mapper.py

Column mapping from arbitrary spreadsheet headers to canonical sitio fields.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from sitio_tracker.mappers.field_catalog import SITIO_FIELD_DEFINITIONS, FieldDefinition


@dataclass(frozen=True)
class ColumnMapping:
    """
    Mapping decision for one source column. An empty ``sitio_field`` means unmapped.
    """

    csv_header: str
    sitio_field: str = ""
    is_required: bool = False
    auto_matched: bool = False


@dataclass(frozen=True)
class MappingStats:
    """
    Mapping quality counters shown before an import is confirmed.
    """

    total: int
    auto_mapped: int
    manually_mapped: int
    unmapped: int
    required_unmapped: int


class ColumnMapper:
    """
    Matches source headers against the field catalog.

    Matching runs in two passes per header: an exact, case-insensitive
    comparison with each definition's expected header, then a substring
    comparison (either direction) with each definition's label. Catalog
    order breaks ties in both passes.
    """

    def __init__(self, definitions: Sequence[FieldDefinition] | None = None) -> None:
        self._definitions: tuple[FieldDefinition, ...] = tuple(definitions or SITIO_FIELD_DEFINITIONS)

    @property
    def definitions(self) -> tuple[FieldDefinition, ...]:
        return self._definitions

    def auto_map_columns(self, headers: Sequence[str]) -> list[ColumnMapping]:
        """
        Propose one mapping per header, in header order.
        """

        return [self._map_header(header) for header in headers]

    def remap_column(
        self,
        mappings: Sequence[ColumnMapping],
        csv_header: str,
        sitio_field: str,
    ) -> list[ColumnMapping]:
        """
        Return *mappings* with a manual choice applied to *csv_header*.
        """

        is_required = any(
            definition.required and definition.field == sitio_field
            for definition in self._definitions
        )
        return [
            replace(
                mapping,
                sitio_field=sitio_field,
                is_required=is_required,
                auto_matched=False,
            )
            if mapping.csv_header == csv_header
            else mapping
            for mapping in mappings
        ]

    def get_unmapped_required_fields(self, mappings: Sequence[ColumnMapping]) -> list[str]:
        mapped_fields = {mapping.sitio_field for mapping in mappings if mapping.sitio_field}
        required: list[str] = []
        for definition in self._definitions:
            if definition.required and definition.field not in required:
                required.append(definition.field)
        return [field_path for field_path in required if field_path not in mapped_fields]

    def get_mapping_stats(self, mappings: Sequence[ColumnMapping]) -> MappingStats:
        return MappingStats(
            total=len(mappings),
            auto_mapped=sum(1 for m in mappings if m.auto_matched and m.sitio_field),
            manually_mapped=sum(1 for m in mappings if not m.auto_matched and m.sitio_field),
            unmapped=sum(1 for m in mappings if not m.sitio_field),
            required_unmapped=len(self.get_unmapped_required_fields(mappings)),
        )

    def _map_header(self, header: str) -> ColumnMapping:
        match = self._find_exact_match(header) or self._find_label_match(header)
        if match is None:
            return ColumnMapping(csv_header=header)
        return ColumnMapping(
            csv_header=header,
            sitio_field=match.field,
            is_required=match.required,
            auto_matched=True,
        )

    def _find_exact_match(self, header: str) -> FieldDefinition | None:
        lowered = header.lower()
        for definition in self._definitions:
            if definition.csv_header.lower() == lowered:
                return definition
        return None

    def _find_label_match(self, header: str) -> FieldDefinition | None:
        lowered = header.lower()
        if not lowered.strip():
            return None
        for definition in self._definitions:
            label = definition.label.lower()
            if label in lowered or lowered in label:
                return definition
        return None


_default_mapper = ColumnMapper()


def auto_map_columns(headers: Sequence[str]) -> list[ColumnMapping]:
    """
    Map *headers* against the default field catalog.
    """

    return _default_mapper.auto_map_columns(headers)


def remap_column(
    mappings: Sequence[ColumnMapping],
    csv_header: str,
    sitio_field: str,
) -> list[ColumnMapping]:
    return _default_mapper.remap_column(mappings, csv_header, sitio_field)


def get_unmapped_required_fields(mappings: Sequence[ColumnMapping]) -> list[str]:
    return _default_mapper.get_unmapped_required_fields(mappings)


def get_mapping_stats(mappings: Sequence[ColumnMapping]) -> MappingStats:
    return _default_mapper.get_mapping_stats(mappings)
