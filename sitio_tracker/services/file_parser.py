"""
sitio_tracker/services/file_parser.py

Reads uploaded CSV/Excel files into headers and raw row mappings.

This is the only place that touches file bytes. Everything downstream
works on :class:`ParsedFile` values.
"""

from __future__ import annotations

import io
import math
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

import pandas as pd

Cell = str | int | float | bool | None

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".csv", ".xlsx", ".xls")
DEFAULT_MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

_EXCEL_ENGINES = {
    ".xlsx": "openpyxl",
    ".xls": "xlrd",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FileParseError(ValueError):
    """
    Raised when an uploaded file cannot be turned into rows.
    """


class UnsupportedFileTypeError(FileParseError):
    """
    Raised for extensions other than .csv, .xlsx and .xls.
    """


class EmptyFileError(FileParseError):
    """
    Raised when a file has no bytes or no header row.
    """


class FileTooLargeError(FileParseError):
    """
    Raised when a file exceeds the configured size limit.
    """


@dataclass(frozen=True)
class ParsedFile:
    """
    Header order plus one mapping per data row.
    """

    headers: list[str]
    rows: list[dict[str, Cell]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Upload checks
# ---------------------------------------------------------------------------


def file_extension(file_name: str) -> str:
    return PurePath(file_name.strip()).suffix.lower()


def validate_upload(
    file_name: str,
    size_bytes: int,
    *,
    max_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
) -> str | None:
    """
    Return a user-facing error message, or None when the upload is acceptable.
    """

    if file_extension(file_name) not in SUPPORTED_EXTENSIONS:
        return "Invalid file type. Please upload a CSV or Excel file (.csv, .xlsx, .xls)"

    if size_bytes > max_size_bytes:
        limit_mb = max_size_bytes / (1024 * 1024)
        return f"File is too large. Maximum file size is {limit_mb:g}MB."

    if size_bytes == 0:
        return "File is empty."

    return None


def check_upload(
    file_name: str,
    size_bytes: int,
    *,
    max_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
) -> None:
    """
    Raise the matching :class:`FileParseError` subclass for a rejected upload.
    """

    message = validate_upload(file_name, size_bytes, max_size_bytes=max_size_bytes)
    if message is None:
        return
    if file_extension(file_name) not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(message)
    if size_bytes == 0:
        raise EmptyFileError(message)
    raise FileTooLargeError(message)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_file(file_name: str, content: bytes) -> ParsedFile:
    """
    Parse *content* according to *file_name*'s extension.
    """

    extension = file_extension(file_name)
    if extension == ".csv":
        return _parse_csv(content)
    if extension in _EXCEL_ENGINES:
        return _parse_excel(content, engine=_EXCEL_ENGINES[extension])
    raise UnsupportedFileTypeError("Unsupported file type. Please upload CSV or Excel files.")


def _parse_csv(content: bytes) -> ParsedFile:
    try:
        frame = pd.read_csv(
            io.BytesIO(content),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptyFileError("CSV file is empty.") from exc
    except UnicodeDecodeError as exc:
        raise FileParseError("CSV must be UTF-8 encoded.") from exc
    except (pd.errors.ParserError, ValueError) as exc:
        raise FileParseError(f"CSV parsing error: {exc}") from exc

    return _grid_to_parsed(frame.values.tolist(), typed_text=True)


def _parse_excel(content: bytes, *, engine: str) -> ParsedFile:
    try:
        frame = pd.read_excel(
            io.BytesIO(content),
            sheet_name=0,
            header=None,
            dtype=object,
            engine=engine,
        )
    except Exception as exc:  # noqa: BLE001
        raise FileParseError(f"Excel parsing error: {exc}") from exc

    grid = frame.values.tolist()
    if not grid:
        raise EmptyFileError("Excel file is empty")
    return _grid_to_parsed(grid, typed_text=False)


def _grid_to_parsed(grid: list[list[Any]], *, typed_text: bool) -> ParsedFile:
    if not grid:
        raise EmptyFileError("File has no header row.")

    columns: list[tuple[int, str]] = []
    taken: set[str] = set()
    for index, raw_header in enumerate(grid[0]):
        header = "" if _is_missing(raw_header) else str(raw_header).strip()
        if header:
            header = _unique_header(header, taken)
            taken.add(header)
            columns.append((index, header))

    rows: list[dict[str, Cell]] = []
    for raw_row in grid[1:]:
        row = {
            header: _normalize_cell(raw_row[index] if index < len(raw_row) else None, typed_text=typed_text)
            for index, header in columns
        }
        if any(value is not None for value in row.values()):
            rows.append(row)

    return ParsedFile(headers=[header for _, header in columns], rows=rows)


def _unique_header(header: str, taken: set[str]) -> str:
    """
    Suffix repeated headers ``.1``, ``.2``, ... as pandas does for duplicate columns.
    """

    if header not in taken:
        return header
    suffix = 1
    while f"{header}.{suffix}" in taken:
        suffix += 1
    return f"{header}.{suffix}"


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _normalize_cell(value: Any, *, typed_text: bool) -> Cell:
    if _is_missing(value):
        return None

    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        value = value.item()

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value

    text = str(value).strip()
    if not text:
        return None
    if typed_text:
        return _dynamic_type(text)
    return text


def _dynamic_type(text: str) -> Cell:
    """
    Turn numeric-looking CSV text into numbers, leave everything else as text.
    """

    if "_" in text:
        return text
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError:
        return text
    return parsed if math.isfinite(parsed) else text
