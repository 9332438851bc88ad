"""
sitio_tracker/services package marker.
"""

from sitio_tracker.services.file_parser import (
    EmptyFileError,
    FileParseError,
    FileTooLargeError,
    ParsedFile,
    UnsupportedFileTypeError,
    parse_file,
    validate_upload,
)
from sitio_tracker.services.import_service import ImportReport, SitioImportService, get_sitio_import_service

__all__ = [
    "EmptyFileError",
    "FileParseError",
    "FileTooLargeError",
    "ImportReport",
    "ParsedFile",
    "SitioImportService",
    "UnsupportedFileTypeError",
    "get_sitio_import_service",
    "parse_file",
    "validate_upload",
]
