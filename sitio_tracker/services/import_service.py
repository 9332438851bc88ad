"""
sitio_tracker/services/import_service.py

Service layer for spreadsheet import orchestration.

One run goes mapper -> transformer (per row) -> validator (per batch) ->
duplicate detector (against stored records). Nothing is written unless the
caller asks for it; saving only ever covers valid, non-duplicate records.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Mapping, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.repositories.errors import SitioPersistenceError
from db.repositories.sitio_repository import SitioRepository
from sitio_tracker.config import get_import_settings
from sitio_tracker.domain.import_result import DuplicateRecord, ImportSummary, ValidationError
from sitio_tracker.domain.sitio import Sitio
from sitio_tracker.logging_utils import log_import_run
from sitio_tracker.mappers.column_mapper import ColumnMapper, ColumnMapping, MappingStats
from sitio_tracker.mappers.field_catalog import FIELD_SLOTS, REQUIRED_FIELDS
from sitio_tracker.mappers.row_transformer import RowTransformer
from sitio_tracker.services.file_parser import ParsedFile, check_upload, parse_file
from sitio_tracker.validators.duplicate_detector import build_duplicate_key, find_duplicates
from sitio_tracker.validators.mapping_validator import MappingValidator
from sitio_tracker.validators.sitio_validator import SitioValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportReport:
    """
    Everything one import run produced.

    ``errors`` is capped at the configured maximum; ``summary.failed`` still
    counts every invalid row.
    """

    mappings: list[ColumnMapping]
    mapping_stats: MappingStats
    valid: list[Sitio]
    invalid: list[Sitio]
    errors: list[ValidationError]
    duplicates: list[DuplicateRecord]
    summary: ImportSummary
    saved: list[Sitio] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class SitioImportService:
    """
    Coordinates mapping, transformation, validation, duplicate checks and saving.
    """

    def __init__(
        self,
        *,
        max_file_size_bytes: int,
        max_validation_errors: int,
        error_preview_limit: int,
        log_validation_errors: bool,
        require_core_mapping: bool = False,
        mapper: ColumnMapper | None = None,
        transformer: RowTransformer | None = None,
        validator: SitioValidator | None = None,
    ) -> None:
        self._max_file_size_bytes = max(1, max_file_size_bytes)
        self._max_validation_errors = max(1, max_validation_errors)
        self._error_preview_limit = max(1, error_preview_limit)
        self._log_validation_errors = log_validation_errors
        self._require_core_mapping = require_core_mapping
        self._mapper = mapper or ColumnMapper()
        self._transformer = transformer or RowTransformer()
        self._validator = validator or SitioValidator()
        self._mapping_validator = MappingValidator(
            required_fields=REQUIRED_FIELDS,
            canonical_fields=FIELD_SLOTS.keys(),
        )

    @property
    def mapper(self) -> ColumnMapper:
        return self._mapper

    def build_mappings(
        self,
        headers: Sequence[str],
        overrides: Mapping[str, str] | None = None,
    ) -> list[ColumnMapping]:
        """
        Auto-map *headers*, then apply manual ``{header: field}`` overrides.

        An empty override value unmaps the column.
        """

        mappings = self._mapper.auto_map_columns(headers)
        for csv_header, sitio_field in (overrides or {}).items():
            mappings = self._mapper.remap_column(mappings, csv_header, sitio_field.strip())
        return mappings

    def run_import(
        self,
        parsed: ParsedFile,
        mappings: Sequence[ColumnMapping] | None = None,
        existing: Sequence[Sitio] | None = None,
        *,
        overrides: Mapping[str, str] | None = None,
    ) -> ImportReport:
        """
        Transform and validate every parsed row without writing anything.

        Raises:
            SchemaMappingError: when strict mapping is enabled and a required
                field is unmapped or a column names an unknown field.
        """

        resolved = list(mappings) if mappings is not None else self.build_mappings(parsed.headers, overrides)
        if self._require_core_mapping:
            self._mapping_validator.raise_for_errors(resolved)

        sitios = [self._transformer.transform(row, resolved) for row in parsed.rows]
        batch = self._validator.validate_batch(sitios)
        duplicates = find_duplicates(batch.valid, existing or [])

        captured_errors = batch.errors[: self._max_validation_errors]
        if self._log_validation_errors:
            for error in captured_errors:
                logger.warning(
                    "Sitio row rejected row=%s field=%s message=%s",
                    error.row,
                    error.field,
                    error.message,
                )
            if len(batch.errors) > len(captured_errors):
                logger.warning(
                    "Validation error log truncated captured=%d total=%d",
                    len(captured_errors),
                    len(batch.errors),
                )

        summary = ImportSummary(
            total=len(sitios),
            successful=len(batch.valid) - len(duplicates),
            failed=len(batch.invalid),
            duplicates=len(duplicates),
            error_messages=[
                f"Row {error.row}: {error.message}"
                for error in batch.errors[: self._error_preview_limit]
            ],
        )

        return ImportReport(
            mappings=resolved,
            mapping_stats=self._mapper.get_mapping_stats(resolved),
            valid=batch.valid,
            invalid=batch.invalid,
            errors=captured_errors,
            duplicates=duplicates,
            summary=summary,
        )

    def import_file(
        self,
        *,
        file_name: str,
        content: bytes,
        db: Session | None = None,
        overrides: Mapping[str, str] | None = None,
        commit: bool = False,
    ) -> ImportReport:
        """
        Parse an uploaded file and run the import pipeline over it.

        When *db* is given, stored records are loaded for duplicate checks.
        With ``commit=True`` valid, non-duplicate records are saved and the
        transaction committed; the caller still owns the session.

        Raises:
            FileParseError: for rejected or unreadable files.
            SchemaMappingError: see :meth:`run_import`.
            SitioPersistenceError: when saving fails (the session is rolled back).
        """

        check_upload(file_name, len(content), max_size_bytes=self._max_file_size_bytes)
        parsed = parse_file(file_name, content)

        existing: list[Sitio] = []
        if db is not None:
            existing = SitioRepository(db).load()

        report = self.run_import(parsed, existing=existing, overrides=overrides)

        saved: list[Sitio] = []
        if commit and db is not None:
            saved = self._persist(db, report)
            report = replace(report, saved=saved)

        log_import_run(
            logger,
            file_name=file_name,
            header_count=len(parsed.headers),
            summary=report.summary,
            mapping_stats=report.mapping_stats,
            saved_count=len(saved),
        )
        return report

    def _persist(self, db: Session, report: ImportReport) -> list[Sitio]:
        stored_keys = {duplicate.key for duplicate in report.duplicates}
        batch_keys: set[str] = set()
        to_save: list[Sitio] = []
        repeated = 0
        for sitio in report.valid:
            key = build_duplicate_key(sitio)
            if key in stored_keys:
                continue
            # First row wins when the same key repeats inside one upload.
            if key in batch_keys:
                repeated += 1
                continue
            batch_keys.add(key)
            to_save.append(sitio)
        if repeated:
            logger.warning("Repeated sitio keys within upload skipped=%d", repeated)
        if not to_save:
            return []

        try:
            saved = SitioRepository(db).save_all(to_save)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Sitio import persistence failed records=%d", len(to_save))
            raise SitioPersistenceError("Unable to save imported sitio records.") from exc
        return saved


@lru_cache(maxsize=1)
def get_sitio_import_service() -> SitioImportService:
    """
    Return a cached import service configured from environment variables.
    """

    settings = get_import_settings()
    return SitioImportService(
        max_file_size_bytes=settings.max_file_size_bytes,
        max_validation_errors=settings.max_validation_errors,
        error_preview_limit=settings.error_preview_limit,
        log_validation_errors=settings.log_validation_errors,
        require_core_mapping=settings.require_core_mapping,
    )
