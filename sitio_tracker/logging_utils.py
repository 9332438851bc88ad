"""
One JSON line per finished import, so runs can be grepped and compared.
"""

from __future__ import annotations

import json
import logging

from sitio_tracker.domain.import_result import ImportSummary
from sitio_tracker.mappers.column_mapper import MappingStats

IMPORT_COMPLETED_EVENT = "sitio_import_completed"


def log_import_run(
    logger: logging.Logger,
    *,
    file_name: str,
    header_count: int,
    summary: ImportSummary,
    mapping_stats: MappingStats,
    saved_count: int,
) -> None:
    payload = {
        "event": IMPORT_COMPLETED_EVENT,
        "file_name": file_name,
        "headers": header_count,
        "rows": summary.total,
        "successful": summary.successful,
        "failed": summary.failed,
        "duplicates": summary.duplicates,
        "auto_mapped": mapping_stats.auto_mapped,
        "unmapped": mapping_stats.unmapped,
        "required_unmapped": mapping_stats.required_unmapped,
        "saved": saved_count,
    }
    logger.info(json.dumps(payload, sort_keys=True))
