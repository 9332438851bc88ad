"""
sitio_tracker/schemas/sitio_import.py

Request and response schemas for sitio import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ColumnMappingResponse(BaseModel):
    """
    One source column and the sitio field it resolves to.
    """

    csv_header: str
    sitio_field: str = ""
    is_required: bool = False
    auto_matched: bool = False


class MappingStatsResponse(BaseModel):
    total: int = Field(..., ge=0)
    auto_mapped: int = Field(..., ge=0)
    manually_mapped: int = Field(..., ge=0)
    unmapped: int = Field(..., ge=0)
    required_unmapped: int = Field(..., ge=0)


class MappingPreviewRequest(BaseModel):
    """
    Headers to auto-map plus optional manual overrides keyed by header.
    """

    headers: list[str] = Field(default_factory=list)
    overrides: dict[str, str] = Field(default_factory=dict)


class MappingPreviewResponse(BaseModel):
    mappings: list[ColumnMappingResponse] = Field(default_factory=list)
    stats: MappingStatsResponse
    unmapped_required_fields: list[str] = Field(default_factory=list)


class ValidationErrorResponse(BaseModel):
    """
    API response model for one row-level validation error.
    """

    row: int = Field(..., ge=1)
    field: str
    message: str


class DuplicateRecordResponse(BaseModel):
    key: str
    existing_id: int | None = None
    incoming: dict[str, Any]


class ImportSummaryResponse(BaseModel):
    total: int = Field(..., ge=0)
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    duplicates: int = Field(..., ge=0)
    error_messages: list[str] = Field(default_factory=list)


class ImportReportResponse(BaseModel):
    """
    API response model for one import run.
    """

    summary: ImportSummaryResponse
    mappings: list[ColumnMappingResponse] = Field(default_factory=list)
    mapping_stats: MappingStatsResponse
    errors: list[ValidationErrorResponse] = Field(default_factory=list)
    duplicates: list[DuplicateRecordResponse] = Field(default_factory=list)
    valid: list[dict[str, Any]] = Field(default_factory=list)
    saved_ids: list[int] = Field(default_factory=list)
