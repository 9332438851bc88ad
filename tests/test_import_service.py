from __future__ import annotations

import json
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from db.base import Base
from db.repositories import SitioRepository
from sitio_tracker.domain.sitio import Sitio
from sitio_tracker.services.file_parser import FileTooLargeError, ParsedFile, UnsupportedFileTypeError
from sitio_tracker.services.import_service import SitioImportService
from sitio_tracker.validators.mapping_validator import SchemaMappingError

HEADERS = ["CODING-MUNICIPALITY", "BARANGAY", "SITIO", "POPULATION - Male", "POPULATION - Female", "Remarks"]

CSV_CONTENT = (
    "CODING-MUNICIPALITY,BARANGAY,SITIO,POPULATION - Male,POPULATION - Female,Remarks\n"
    "Banga,Liwanay,Proper Lampaco,224,188,\n"
    ",Poblacion,Centro,5,6,no town\n"
    "Tupi,Cebuano,Purok 1,10,12,\n"
).encode("utf-8")


def _service(**overrides: object) -> SitioImportService:
    settings = {
        "max_file_size_bytes": 1024 * 1024,
        "max_validation_errors": 500,
        "error_preview_limit": 10,
        "log_validation_errors": False,
    }
    settings.update(overrides)
    return SitioImportService(**settings)


class TestRunImport(unittest.TestCase):
    def setUp(self) -> None:
        self.parsed = ParsedFile(
            headers=HEADERS,
            rows=[
                {
                    "CODING-MUNICIPALITY": "Banga",
                    "BARANGAY": "Liwanay",
                    "SITIO": "Proper Lampaco",
                    "POPULATION - Male": 224,
                    "POPULATION - Female": 188,
                    "Remarks": None,
                },
                {
                    "CODING-MUNICIPALITY": None,
                    "BARANGAY": "Poblacion",
                    "SITIO": "Centro",
                    "POPULATION - Male": 5,
                    "POPULATION - Female": 6,
                    "Remarks": "no town",
                },
            ],
        )

    def test_splits_rows_and_summarizes(self) -> None:
        report = _service().run_import(self.parsed)

        self.assertEqual(len(report.valid), 1)
        self.assertEqual(len(report.invalid), 1)
        self.assertEqual(report.valid[0].population, 412)
        self.assertEqual(report.summary.total, 2)
        self.assertEqual(report.summary.successful, 1)
        self.assertEqual(report.summary.failed, 1)
        self.assertEqual(report.summary.duplicates, 0)
        self.assertEqual(report.summary.error_messages, ["Row 2: Municipality is required"])
        self.assertEqual(report.mapping_stats.unmapped, 1)
        self.assertEqual(report.mapping_stats.auto_mapped, 5)

    def test_duplicates_against_existing_records(self) -> None:
        existing = [Sitio(id=7, municipality="banga ", barangay="LIWANAY", name="proper lampaco")]

        report = _service().run_import(self.parsed, existing=existing)

        self.assertEqual(report.summary.duplicates, 1)
        self.assertEqual(report.summary.successful, 0)
        self.assertEqual(report.duplicates[0].existing.id, 7)

    def test_manual_override_fills_required_field(self) -> None:
        parsed = ParsedFile(headers=["Town", "BARANGAY", "SITIO"], rows=[{"Town": "Tupi", "BARANGAY": "Cebuano", "SITIO": "Purok 1"}])

        report = _service().run_import(parsed, overrides={"Town": "municipality"})

        self.assertEqual(report.valid[0].municipality, "Tupi")
        self.assertEqual(report.mapping_stats.manually_mapped, 1)
        self.assertEqual(report.mapping_stats.required_unmapped, 0)

    def test_explicit_mappings_are_used_as_given(self) -> None:
        service = _service()
        mappings = service.build_mappings(HEADERS, {"SITIO": ""})

        report = service.run_import(self.parsed, mappings=mappings)

        self.assertEqual(report.summary.failed, 2)
        self.assertEqual(report.mappings, mappings)

    def test_strict_mapping_rejects_missing_required_columns(self) -> None:
        parsed = ParsedFile(headers=["BARANGAY"], rows=[{"BARANGAY": "Liwanay"}])

        with self.assertRaises(SchemaMappingError) as ctx:
            _service(require_core_mapping=True).run_import(parsed)

        missing = {error.canonical_field for error in ctx.exception.errors}
        self.assertEqual(missing, {"municipality", "name"})

    def test_error_caps(self) -> None:
        rows = [{"SITIO": f"Sitio {index}"} for index in range(5)]
        parsed = ParsedFile(headers=["SITIO"], rows=rows)

        report = _service(max_validation_errors=3, error_preview_limit=2).run_import(parsed)

        self.assertEqual(report.summary.failed, 5)
        self.assertEqual(len(report.errors), 3)
        self.assertEqual(
            report.summary.error_messages,
            ["Row 1: Municipality is required", "Row 1: Barangay is required"],
        )

    def test_validation_errors_are_logged_when_enabled(self) -> None:
        with self.assertLogs("sitio_tracker.services.import_service", level="WARNING") as logs:
            _service(log_validation_errors=True).run_import(self.parsed)

        self.assertTrue(any("Municipality is required" in line for line in logs.output))


class TestImportFile(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session: Session = sessionmaker(bind=self.engine, expire_on_commit=False)()

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def test_dry_run_writes_nothing(self) -> None:
        report = _service().import_file(file_name="sitios.csv", content=CSV_CONTENT, db=self.session)

        self.assertEqual(report.summary.total, 3)
        self.assertEqual(report.summary.successful, 2)
        self.assertEqual(report.saved, [])
        self.assertEqual(SitioRepository(self.session).load(), [])

    def test_commit_saves_valid_records_and_flags_reimport(self) -> None:
        service = _service()

        first = service.import_file(file_name="sitios.csv", content=CSV_CONTENT, db=self.session, commit=True)
        second = service.import_file(file_name="sitios.csv", content=CSV_CONTENT, db=self.session, commit=True)

        self.assertEqual([sitio.id for sitio in first.saved], [1, 2])
        self.assertEqual(second.summary.duplicates, 2)
        self.assertEqual(second.saved, [])
        stored = SitioRepository(self.session).load()
        self.assertEqual([sitio.name for sitio in stored], ["Proper Lampaco", "Purok 1"])

    def test_commit_saves_first_of_repeated_keys_in_one_upload(self) -> None:
        content = (
            "CODING-MUNICIPALITY,BARANGAY,SITIO\n"
            "Banga,Liwanay,Proper\n"
            "banga , LIWANAY,proper\n"
        ).encode("utf-8")

        with self.assertLogs("sitio_tracker.services.import_service", level="WARNING") as logs:
            report = _service().import_file(file_name="sitios.csv", content=content, db=self.session, commit=True)

        self.assertEqual([sitio.municipality for sitio in report.saved], ["Banga"])
        stored = SitioRepository(self.session).load()
        self.assertEqual(len(stored), 1)
        self.assertTrue(any("skipped=1" in line for line in logs.output))

    def test_completed_run_is_logged_as_one_json_line(self) -> None:
        with self.assertLogs("sitio_tracker.services.import_service", level="INFO") as logs:
            _service().import_file(file_name="sitios.csv", content=CSV_CONTENT)

        events = [json.loads(record.getMessage()) for record in logs.records if record.getMessage().startswith("{")]
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]["event"], "sitio_import_completed")
        self.assertEqual(events[0]["rows"], 3)
        self.assertEqual(events[0]["failed"], 1)
        self.assertEqual(events[0]["saved"], 0)

    def test_without_session_nothing_is_loaded_or_saved(self) -> None:
        report = _service().import_file(file_name="sitios.csv", content=CSV_CONTENT, commit=True)

        self.assertEqual(report.summary.duplicates, 0)
        self.assertEqual(report.saved, [])

    def test_rejects_bad_uploads(self) -> None:
        with self.assertRaises(UnsupportedFileTypeError):
            _service().import_file(file_name="sitios.pdf", content=CSV_CONTENT)
        with self.assertRaises(FileTooLargeError):
            _service(max_file_size_bytes=10).import_file(file_name="sitios.csv", content=CSV_CONTENT)


if __name__ == "__main__":
    unittest.main()
