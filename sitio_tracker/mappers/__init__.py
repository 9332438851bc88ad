"""
sitio_tracker/mappers package marker.
"""

from sitio_tracker.mappers.column_mapper import (
    ColumnMapper,
    ColumnMapping,
    MappingStats,
    auto_map_columns,
    get_mapping_stats,
    get_unmapped_required_fields,
    remap_column,
)
from sitio_tracker.mappers.field_catalog import (
    FIELD_SLOTS,
    REQUIRED_FIELDS,
    SITIO_FIELD_DEFINITIONS,
    FieldDefinition,
    FieldSlot,
)
from sitio_tracker.mappers.row_transformer import RowTransformer, transform_row_to_sitio

__all__ = [
    "FIELD_SLOTS",
    "REQUIRED_FIELDS",
    "SITIO_FIELD_DEFINITIONS",
    "ColumnMapper",
    "ColumnMapping",
    "FieldDefinition",
    "FieldSlot",
    "MappingStats",
    "RowTransformer",
    "auto_map_columns",
    "get_mapping_stats",
    "get_unmapped_required_fields",
    "remap_column",
    "transform_row_to_sitio",
]
