"""
sitio_tracker/domain/import_result.py

Value objects produced by the import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from sitio_tracker.domain.sitio import Sitio


@dataclass(frozen=True)
class ValidationError:
    """
    One row-scoped validation problem. ``row`` is 1-based.
    """

    row: int
    field: str
    message: str


@dataclass(frozen=True)
class BatchValidationResult:
    """
    Records split by whether they produced any validation error.
    """

    valid: list[Sitio] = field(default_factory=list)
    invalid: list[Sitio] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)


@dataclass(frozen=True)
class FieldErrorCount:
    field: str
    count: int


@dataclass(frozen=True)
class ErrorSummary:
    """
    Frequency tables over a list of validation errors.
    """

    total_errors: int
    errors_by_field: dict[str, int]
    errors_by_row: dict[int, int]
    most_common_errors: list[FieldErrorCount]


@dataclass(frozen=True)
class DuplicateRecord:
    """
    An incoming record whose natural key collides with a stored record.
    """

    existing: Sitio
    incoming: Sitio
    key: str


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run counts shown to the user.
    """

    total: int
    successful: int
    failed: int
    duplicates: int
    error_messages: list[str] = field(default_factory=list)
