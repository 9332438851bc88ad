"""
sitio_tracker/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import File, HTTPException, UploadFile, status

from sitio_tracker.services.file_parser import SUPPORTED_EXTENSIONS, file_extension

SPREADSHEET_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def get_spreadsheet_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the upload looks like a CSV or Excel file by extension or MIME type.
    """

    filename = (file.filename or "").strip()
    content_type = (file.content_type or "").strip().lower()

    has_spreadsheet_extension = file_extension(filename) in SUPPORTED_EXTENSIONS
    has_spreadsheet_content_type = content_type in SPREADSHEET_CONTENT_TYPES

    if not has_spreadsheet_extension and not has_spreadsheet_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload a CSV or Excel file (.csv, .xlsx, .xls)",
        )

    return file
