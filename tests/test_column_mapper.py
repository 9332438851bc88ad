from __future__ import annotations

import unittest

from sitio_tracker.mappers.column_mapper import ColumnMapper, ColumnMapping
from sitio_tracker.mappers.field_catalog import (
    FIELD_SLOTS,
    REQUIRED_FIELDS,
    SITIO_FIELD_DEFINITIONS,
    get_field_definition,
)


class TestFieldCatalog(unittest.TestCase):
    def test_required_fields_are_the_natural_key(self) -> None:
        self.assertEqual(REQUIRED_FIELDS, ("municipality", "barangay", "name"))

    def test_every_catalog_path_resolves_to_a_slot(self) -> None:
        for definition in SITIO_FIELD_DEFINITIONS:
            self.assertIn(definition.field, FIELD_SLOTS, definition.field)

    def test_get_field_definition_returns_first_entry(self) -> None:
        definition = get_field_definition("agriculture.top_crops")

        self.assertIsNotNone(definition)
        self.assertEqual(definition.label, "Top Crop 1")
        self.assertIsNone(get_field_definition("not.a.field"))


class TestColumnMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = ColumnMapper()

    def test_exact_header_match_is_case_insensitive(self) -> None:
        mappings = self.mapper.auto_map_columns(["barangay", "SITIO", "POPULATION - Male"])

        self.assertEqual([m.sitio_field for m in mappings], ["barangay", "name", "demographics.male"])
        self.assertTrue(all(m.auto_matched for m in mappings))
        self.assertTrue(mappings[0].is_required)
        self.assertFalse(mappings[2].is_required)

    def test_label_substring_match_uses_catalog_order(self) -> None:
        mappings = self.mapper.auto_map_columns(["CODING-MUNICIPALITY"])

        self.assertEqual(mappings[0].sitio_field, "municipality")
        self.assertTrue(mappings[0].is_required)
        self.assertTrue(mappings[0].auto_matched)

    def test_top_n_columns_share_one_field(self) -> None:
        mappings = self.mapper.auto_map_columns(
            ["Top 3 Employment - 1st", "Top 3 Employment - 2nd", "Top 3 Employment - 3rd"]
        )

        self.assertEqual({m.sitio_field for m in mappings}, {"economic_condition.employments"})

    def test_unknown_and_blank_headers_stay_unmapped(self) -> None:
        mappings = self.mapper.auto_map_columns(["Remarks", ""])

        for mapping in mappings:
            self.assertEqual(mapping.sitio_field, "")
            self.assertFalse(mapping.auto_matched)
            self.assertFalse(mapping.is_required)

    def test_mapping_preserves_header_order(self) -> None:
        headers = ["SITIO", "Remarks", "BARANGAY"]

        mappings = self.mapper.auto_map_columns(headers)

        self.assertEqual([m.csv_header for m in mappings], headers)

    def test_remap_column_marks_manual_choice(self) -> None:
        mappings = self.mapper.auto_map_columns(["Town", "BARANGAY"])

        remapped = self.mapper.remap_column(mappings, "Town", "municipality")

        self.assertEqual(remapped[0], ColumnMapping("Town", "municipality", is_required=True, auto_matched=False))
        self.assertEqual(remapped[1], mappings[1])
        self.assertEqual(mappings[0].sitio_field, "")

    def test_remap_to_empty_field_unmaps(self) -> None:
        mappings = self.mapper.auto_map_columns(["BARANGAY"])

        remapped = self.mapper.remap_column(mappings, "BARANGAY", "")

        self.assertEqual(remapped[0].sitio_field, "")
        self.assertFalse(remapped[0].is_required)

    def test_unmapped_required_fields_and_stats(self) -> None:
        mappings = self.mapper.auto_map_columns(["BARANGAY", "SITIO", "Remarks", "Town"])
        mappings = self.mapper.remap_column(mappings, "Town", "province")

        self.assertEqual(self.mapper.get_unmapped_required_fields(mappings), ["municipality"])

        stats = self.mapper.get_mapping_stats(mappings)
        self.assertEqual(stats.total, 4)
        self.assertEqual(stats.auto_mapped, 2)
        self.assertEqual(stats.manually_mapped, 1)
        self.assertEqual(stats.unmapped, 1)
        self.assertEqual(stats.required_unmapped, 1)


if __name__ == "__main__":
    unittest.main()
