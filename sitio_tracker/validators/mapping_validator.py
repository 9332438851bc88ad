"""
sitio_tracker/validators/mapping_validator.py

Validation for column mapping decisions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection, Sequence

from sitio_tracker.mappers.column_mapper import ColumnMapping


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class SchemaMappingError(ValueError):
    """
    Raised when a mapping is rejected for an import run.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "canonical_field": error.canonical_field,
                    "source_column": error.source_column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Checks column mappings against the canonical field set.
    """

    def __init__(
        self,
        *,
        required_fields: Sequence[str],
        canonical_fields: Collection[str],
    ) -> None:
        self._required_fields = tuple(required_fields)
        self._canonical_set = set(canonical_fields)

    def validate(self, mappings: Sequence[ColumnMapping]) -> list[MappingErrorDetail]:
        """
        Return every problem found; an empty list means the mapping is usable.
        """

        errors: list[MappingErrorDetail] = []
        mapped_fields: set[str] = set()
        source_headers = [mapping.csv_header for mapping in mappings]

        for mapping in mappings:
            if not mapping.sitio_field:
                continue
            if mapping.sitio_field not in self._canonical_set:
                errors.append(
                    MappingErrorDetail(
                        code="invalid_canonical_field",
                        message="Column is mapped to an unknown sitio field.",
                        canonical_field=mapping.sitio_field,
                        source_column=mapping.csv_header,
                    )
                )
                continue
            mapped_fields.add(mapping.sitio_field)

        for required in self._required_fields:
            if required not in mapped_fields:
                errors.append(
                    MappingErrorDetail(
                        code="required_field_unmapped",
                        message="Required sitio field is not mapped.",
                        canonical_field=required,
                        context={"source_headers": source_headers},
                    )
                )

        return errors

    def raise_for_errors(self, mappings: Sequence[ColumnMapping]) -> None:
        """
        Validate mapping and raise structured errors if invalid.
        """

        errors = self.validate(mappings)
        if not errors:
            return

        missing_required = [
            error.canonical_field
            for error in errors
            if error.code == "required_field_unmapped" and error.canonical_field
        ]
        missing_csv = ", ".join(sorted(set(missing_required))) or "none"
        raise SchemaMappingError(
            message=f"Column mapping validation failed. Missing required fields: {missing_csv}.",
            errors=errors,
        )
