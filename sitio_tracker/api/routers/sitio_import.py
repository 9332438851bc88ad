"""
sitio_tracker/api/routers/sitio_import.py

Sitio spreadsheet import HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from db.repositories.errors import SitioPersistenceError
from db.session import get_db
from sitio_tracker.api.dependencies import get_spreadsheet_upload
from sitio_tracker.domain.serialization import sitio_to_dict
from sitio_tracker.mappers.column_mapper import ColumnMapping, MappingStats
from sitio_tracker.schemas.sitio_import import (
    ColumnMappingResponse,
    DuplicateRecordResponse,
    ImportReportResponse,
    ImportSummaryResponse,
    MappingPreviewRequest,
    MappingPreviewResponse,
    MappingStatsResponse,
    ValidationErrorResponse,
)
from sitio_tracker.services.file_parser import FileParseError, FileTooLargeError
from sitio_tracker.services.import_service import (
    ImportReport,
    SitioImportService,
    get_sitio_import_service,
)
from sitio_tracker.validators.mapping_validator import SchemaMappingError

router = APIRouter(prefix="/sitios", tags=["sitios"])


@router.post("/mapping", response_model=MappingPreviewResponse)
def preview_mapping(
    payload: MappingPreviewRequest,
    import_service: SitioImportService = Depends(get_sitio_import_service),
) -> MappingPreviewResponse:
    """
    Auto-map spreadsheet headers so the user can review them before importing.
    """

    mappings = import_service.build_mappings(payload.headers, payload.overrides)
    return MappingPreviewResponse(
        mappings=[_mapping_response(mapping) for mapping in mappings],
        stats=_stats_response(import_service.mapper.get_mapping_stats(mappings)),
        unmapped_required_fields=import_service.mapper.get_unmapped_required_fields(mappings),
    )


@router.post("/import", response_model=ImportReportResponse)
def import_sitios(
    file: UploadFile = Depends(get_spreadsheet_upload),
    commit: bool = Query(default=False, description="Save valid, non-duplicate records"),
    db: Session = Depends(get_db),
    import_service: SitioImportService = Depends(get_sitio_import_service),
) -> ImportReportResponse:
    """
    Import one CSV or Excel file of sitio profiles.
    """

    try:
        content = file.file.read()
        report = import_service.import_file(
            file_name=file.filename or "",
            content=content,
            db=db,
            commit=commit,
        )
    except FileTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except FileParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except SchemaMappingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except SitioPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save imported sitio records.",
        ) from exc
    finally:
        file.file.close()

    return _report_response(report)


def _mapping_response(mapping: ColumnMapping) -> ColumnMappingResponse:
    return ColumnMappingResponse(
        csv_header=mapping.csv_header,
        sitio_field=mapping.sitio_field,
        is_required=mapping.is_required,
        auto_matched=mapping.auto_matched,
    )


def _stats_response(stats: MappingStats) -> MappingStatsResponse:
    return MappingStatsResponse(
        total=stats.total,
        auto_mapped=stats.auto_mapped,
        manually_mapped=stats.manually_mapped,
        unmapped=stats.unmapped,
        required_unmapped=stats.required_unmapped,
    )


def _report_response(report: ImportReport) -> ImportReportResponse:
    return ImportReportResponse(
        summary=ImportSummaryResponse(
            total=report.summary.total,
            successful=report.summary.successful,
            failed=report.summary.failed,
            duplicates=report.summary.duplicates,
            error_messages=report.summary.error_messages,
        ),
        mappings=[_mapping_response(mapping) for mapping in report.mappings],
        mapping_stats=_stats_response(report.mapping_stats),
        errors=[
            ValidationErrorResponse(row=error.row, field=error.field, message=error.message)
            for error in report.errors
        ],
        duplicates=[
            DuplicateRecordResponse(
                key=duplicate.key,
                existing_id=duplicate.existing.id,
                incoming=sitio_to_dict(duplicate.incoming, drop_absent=True),
            )
            for duplicate in report.duplicates
        ],
        valid=[sitio_to_dict(sitio, drop_absent=True) for sitio in report.valid],
        saved_ids=[sitio.id for sitio in report.saved if sitio.id is not None],
    )
