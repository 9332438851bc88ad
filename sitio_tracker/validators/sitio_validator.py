"""
sitio_tracker/validators/sitio_validator.py

Field-level and cross-field validation for transformed sitio records.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from sitio_tracker.domain.import_result import (
    BatchValidationResult,
    ErrorSummary,
    FieldErrorCount,
    ValidationError,
)
from sitio_tracker.domain.sitio import Sitio
from sitio_tracker.mappers.row_transformer import is_number

# Allowed gap between male + female and the stated total.
SEX_TOTAL_TOLERANCE = 1
# Allowed gap between the three age bands and the stated total.
AGE_TOTAL_TOLERANCE = 2

OPTIONAL_SECTIONS: tuple[str, ...] = (
    "social_services",
    "economic_condition",
    "agriculture",
    "water_sanitation",
    "livestock_poultry",
    "food_security",
    "housing",
    "domestic_animals",
    "community_empowerment",
    "utilities",
)

DEMOGRAPHIC_FIELDS: tuple[str, ...] = (
    "male",
    "female",
    "total",
    "age_0_14",
    "age_15_64",
    "age_65_above",
)


class SitioValidator:
    """
    Validates sitio records. Every rule runs; problems are returned, never raised.
    """

    def validate(self, sitio: Sitio, row_index: int) -> list[ValidationError]:
        errors: list[ValidationError] = []

        self._check_required(sitio.municipality, "municipality", "Municipality is required", row_index, errors)
        self._check_required(sitio.barangay, "barangay", "Barangay is required", row_index, errors)
        self._check_required(sitio.name, "name", "Sitio name is required", row_index, errors)

        self._check_non_negative(
            sitio.population,
            "population",
            "Population must be a non-negative number",
            row_index,
            errors,
        )
        self._check_non_negative(
            sitio.households,
            "households",
            "Households must be a non-negative number",
            row_index,
            errors,
        )

        if sitio.coordinates is not None:
            self._check_range(
                sitio.coordinates.lat,
                -90,
                90,
                "coordinates.lat",
                "Latitude must be between -90 and 90",
                row_index,
                errors,
            )
            self._check_range(
                sitio.coordinates.lng,
                -180,
                180,
                "coordinates.lng",
                "Longitude must be between -180 and 180",
                row_index,
                errors,
            )

        # Reported through the same channel as hard errors; only the text says "Warning".
        self._check_range(
            sitio.need_score,
            1,
            10,
            "need_score",
            "Warning: Need score should be between 1 and 10",
            row_index,
            errors,
        )

        self._check_demographics(sitio, row_index, errors)
        return errors

    def validate_batch(self, sitios: Sequence[Sitio]) -> BatchValidationResult:
        result = BatchValidationResult()
        for index, sitio in enumerate(sitios):
            sitio_errors = self.validate(sitio, index + 1)
            if sitio_errors:
                result.invalid.append(sitio)
                result.errors.extend(sitio_errors)
            else:
                result.valid.append(sitio)
        return result

    def _check_demographics(
        self,
        sitio: Sitio,
        row_index: int,
        errors: list[ValidationError],
    ) -> None:
        demographics = sitio.demographics
        if demographics is None:
            return

        total = demographics.total
        if all(is_number(value) for value in (demographics.male, demographics.female, total)):
            sex_sum = demographics.male + demographics.female
            if abs(sex_sum - total) > SEX_TOTAL_TOLERANCE:
                errors.append(
                    ValidationError(
                        row=row_index,
                        field="demographics",
                        message=f"Male + Female ({_fmt(sex_sum)}) does not equal Total ({_fmt(total)})",
                    )
                )

        bands = (demographics.age_0_14, demographics.age_15_64, demographics.age_65_above)
        # All-zero bands are the row defaults, i.e. no age breakdown was reported.
        if all(is_number(value) for value in (*bands, total)) and any(bands):
            age_sum = sum(bands)
            if abs(age_sum - total) > AGE_TOTAL_TOLERANCE:
                errors.append(
                    ValidationError(
                        row=row_index,
                        field="demographics",
                        message=f"Age groups sum ({_fmt(age_sum)}) does not match Total ({_fmt(total)})",
                    )
                )

    @staticmethod
    def _check_required(
        value: Any,
        field_name: str,
        message: str,
        row_index: int,
        errors: list[ValidationError],
    ) -> None:
        if not value or str(value).strip() == "":
            errors.append(ValidationError(row=row_index, field=field_name, message=message))

    @staticmethod
    def _check_non_negative(
        value: Any,
        field_name: str,
        message: str,
        row_index: int,
        errors: list[ValidationError],
    ) -> None:
        if value is None:
            return
        if not is_number(value) or value < 0:
            errors.append(ValidationError(row=row_index, field=field_name, message=message))

    @staticmethod
    def _check_range(
        value: Any,
        low: float,
        high: float,
        field_name: str,
        message: str,
        row_index: int,
        errors: list[ValidationError],
    ) -> None:
        if value is None:
            return
        if not is_number(value) or value < low or value > high:
            errors.append(ValidationError(row=row_index, field=field_name, message=message))


def _fmt(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


_default_validator = SitioValidator()


def validate_sitio(sitio: Sitio, row_index: int) -> list[ValidationError]:
    """
    Validate one record; *row_index* is reported as-is (1-based by convention).
    """

    return _default_validator.validate(sitio, row_index)


def validate_batch(sitios: Sequence[Sitio]) -> BatchValidationResult:
    """
    Split *sitios* into valid and invalid records, numbering rows from 1.
    """

    return _default_validator.validate_batch(sitios)


def has_minimum_data(sitio: Sitio) -> bool:
    return bool(sitio.municipality and sitio.barangay and sitio.name)


def calculate_completeness(sitio: Sitio) -> int:
    """
    Weighted share of populated fields, 0-100.

    Core fields weigh 2, demographic counts 1, optional sections 0.5.
    """

    core_present = [
        sitio.name,
        sitio.municipality,
        sitio.barangay,
        sitio.province,
        sitio.population,
        sitio.households,
        sitio.coordinates is not None and sitio.coordinates.lat and sitio.coordinates.lng,
    ]
    total_weight = len(core_present) * 2 + len(DEMOGRAPHIC_FIELDS) * 1 + len(OPTIONAL_SECTIONS) * 0.5

    filled = sum(2 for present in core_present if present)
    if sitio.demographics is not None:
        filled += sum(1 for name in DEMOGRAPHIC_FIELDS if getattr(sitio.demographics, name))
    filled += sum(0.5 for name in OPTIONAL_SECTIONS if getattr(sitio, name) is not None)

    return _round_half_up(filled / total_weight * 100)


def get_error_summary(errors: Sequence[ValidationError]) -> ErrorSummary:
    """
    Count errors per field and per row, plus the five most frequent fields.
    """

    errors_by_field: dict[str, int] = {}
    errors_by_row: dict[int, int] = {}
    for error in errors:
        errors_by_field[error.field] = errors_by_field.get(error.field, 0) + 1
        errors_by_row[error.row] = errors_by_row.get(error.row, 0) + 1

    # sorted() is stable, so equal counts keep first-seen order.
    most_common = sorted(
        (FieldErrorCount(field=name, count=count) for name, count in errors_by_field.items()),
        key=lambda item: item.count,
        reverse=True,
    )[:5]

    return ErrorSummary(
        total_errors=len(errors),
        errors_by_field=errors_by_field,
        errors_by_row=errors_by_row,
        most_common_errors=most_common,
    )
