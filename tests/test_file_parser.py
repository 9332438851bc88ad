from __future__ import annotations

import io
import unittest

from openpyxl import Workbook

from sitio_tracker.services.file_parser import (
    EmptyFileError,
    FileParseError,
    FileTooLargeError,
    UnsupportedFileTypeError,
    check_upload,
    parse_file,
    validate_upload,
)


def _xlsx_bytes(rows: list[list[object]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class TestValidateUpload(unittest.TestCase):
    def test_accepts_supported_extensions(self) -> None:
        for name in ("sitios.csv", "SITIOS.XLSX", "legacy.xls"):
            self.assertIsNone(validate_upload(name, 1024))

    def test_rejects_other_extensions(self) -> None:
        self.assertEqual(
            validate_upload("report.pdf", 1024),
            "Invalid file type. Please upload a CSV or Excel file (.csv, .xlsx, .xls)",
        )

    def test_rejects_oversized_and_empty_files(self) -> None:
        self.assertEqual(
            validate_upload("sitios.csv", 10 * 1024 * 1024 + 1),
            "File is too large. Maximum file size is 10MB.",
        )
        self.assertEqual(validate_upload("sitios.csv", 0), "File is empty.")

    def test_check_upload_raises_matching_errors(self) -> None:
        with self.assertRaises(UnsupportedFileTypeError):
            check_upload("notes.txt", 10)
        with self.assertRaises(FileTooLargeError):
            check_upload("sitios.csv", 2048, max_size_bytes=1024)
        with self.assertRaises(EmptyFileError):
            check_upload("sitios.csv", 0)
        check_upload("sitios.csv", 10)


class TestParseCsv(unittest.TestCase):
    def test_parses_headers_and_typed_cells(self) -> None:
        content = (
            "CODING-MUNICIPALITY, BARANGAY ,SITIO,POPULATION - Male,LATITUDE\n"
            "Banga,Liwanay,Proper Lampaco,224,6.42\n"
            ",,,,\n"
            "\n"
            "Tupi,Poblacion,Centro,,\n"
        ).encode("utf-8")

        parsed = parse_file("sitios.csv", content)

        self.assertEqual(parsed.headers, ["CODING-MUNICIPALITY", "BARANGAY", "SITIO", "POPULATION - Male", "LATITUDE"])
        self.assertEqual(len(parsed.rows), 2)
        self.assertEqual(parsed.rows[0]["POPULATION - Male"], 224)
        self.assertEqual(parsed.rows[0]["LATITUDE"], 6.42)
        self.assertEqual(parsed.rows[0]["SITIO"], "Proper Lampaco")
        self.assertIsNone(parsed.rows[1]["POPULATION - Male"])

    def test_strips_utf8_bom(self) -> None:
        parsed = parse_file("sitios.csv", "\ufeffSITIO\nCentro\n".encode("utf-8"))

        self.assertEqual(parsed.headers, ["SITIO"])

    def test_header_only_file_has_no_rows(self) -> None:
        parsed = parse_file("sitios.csv", b"SITIO,BARANGAY\n")

        self.assertEqual(parsed.headers, ["SITIO", "BARANGAY"])
        self.assertEqual(parsed.rows, [])

    def test_repeated_headers_keep_every_column(self) -> None:
        header = "Top 5 Crops/Commodities Planted/Produced - 1st"
        content = f"SITIO,{header},{header},{header}\nCentro,Corn,Rice,Banana\n".encode("utf-8")

        parsed = parse_file("sitios.csv", content)

        self.assertEqual(parsed.headers, ["SITIO", header, f"{header}.1", f"{header}.2"])
        self.assertEqual(parsed.rows[0][header], "Corn")
        self.assertEqual(parsed.rows[0][f"{header}.1"], "Rice")
        self.assertEqual(parsed.rows[0][f"{header}.2"], "Banana")

    def test_empty_content_raises(self) -> None:
        with self.assertRaises(EmptyFileError):
            parse_file("sitios.csv", b"")

    def test_unsupported_extension_raises(self) -> None:
        with self.assertRaises(UnsupportedFileTypeError):
            parse_file("sitios.txt", b"SITIO\n")


class TestParseExcel(unittest.TestCase):
    def test_reads_first_sheet(self) -> None:
        content = _xlsx_bytes(
            [
                ["CODING-MUNICIPALITY", "BARANGAY", None, "SITIO", "POPULATION - Male"],
                ["Banga", "Liwanay", "ignored", "Proper Lampaco", 224],
                [None, None, None, None, None],
                ["Tupi", "Poblacion", None, "Centro", 12.5],
            ]
        )

        parsed = parse_file("sitios.xlsx", content)

        self.assertEqual(parsed.headers, ["CODING-MUNICIPALITY", "BARANGAY", "SITIO", "POPULATION - Male"])
        self.assertEqual(len(parsed.rows), 2)
        self.assertEqual(parsed.rows[0]["POPULATION - Male"], 224)
        self.assertEqual(parsed.rows[1]["POPULATION - Male"], 12.5)
        self.assertNotIn("ignored", parsed.rows[0].values())

    def test_corrupt_workbook_raises_parse_error(self) -> None:
        with self.assertRaises(FileParseError):
            parse_file("sitios.xlsx", b"not a workbook")


if __name__ == "__main__":
    unittest.main()
