"""
sitio_tracker/domain package marker.
"""

from sitio_tracker.domain.import_result import (
    BatchValidationResult,
    DuplicateRecord,
    ErrorSummary,
    FieldErrorCount,
    ImportSummary,
    ValidationError,
)
from sitio_tracker.domain.sitio import Sitio, create_default_sitio

__all__ = [
    "BatchValidationResult",
    "DuplicateRecord",
    "ErrorSummary",
    "FieldErrorCount",
    "ImportSummary",
    "Sitio",
    "ValidationError",
    "create_default_sitio",
]
