"""
sitio_tracker/validators package marker.
"""

from sitio_tracker.validators.duplicate_detector import build_duplicate_key, find_duplicates
from sitio_tracker.validators.mapping_validator import MappingErrorDetail, MappingValidator, SchemaMappingError
from sitio_tracker.validators.sitio_validator import (
    SitioValidator,
    calculate_completeness,
    get_error_summary,
    has_minimum_data,
    validate_batch,
    validate_sitio,
)

__all__ = [
    "MappingErrorDetail",
    "MappingValidator",
    "SchemaMappingError",
    "SitioValidator",
    "build_duplicate_key",
    "calculate_completeness",
    "find_duplicates",
    "get_error_summary",
    "has_minimum_data",
    "validate_batch",
    "validate_sitio",
]
