from __future__ import annotations

import unittest

from label_import.domain.labels import FatalError, RowWarning
from label_import.mappers.header_mapper import HeaderMapper, map_headers, normalize_header


class TestHeaderMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = HeaderMapper()

    def test_normalize_header_strips_separators(self) -> None:
        self.assertEqual(normalize_header(" Owner-Project_ID "), "ownerprojectid")

    def test_maps_labels_and_ids(self) -> None:
        mapping, diagnostics = self.mapper.map_headers(["Chain", "address", "Contract Name", "usage_category"])

        self.assertEqual(mapping["Chain"], "chain_id")
        self.assertEqual(mapping["address"], "address")
        self.assertEqual(mapping["Contract Name"], "contract_name")
        self.assertEqual(mapping["usage_category"], "usage_category")
        self.assertEqual(diagnostics, [])

    def test_auto_detects_columns_with_fuzzy_matching(self) -> None:
        mapping, diagnostics = self.mapper.map_headers(["Chian", "Adress", "Contrct Name", "Owner-Projct"])

        self.assertEqual(mapping["Adress"], "address")
        self.assertEqual(mapping["Contrct Name"], "contract_name")
        self.assertEqual(mapping["Owner-Projct"], "owner_project")
        self.assertEqual(mapping["Chian"], None)
        self.assertTrue(any(isinstance(item, FatalError) for item in diagnostics))

    def test_short_header_allows_one_edit(self) -> None:
        self.assertEqual(self.mapper.match_header("audi").field_id, "audit")
        self.assertIsNone(self.mapper.match_header("aud").field_id)

    def test_unrecognized_header_is_a_warning(self) -> None:
        mapping, diagnostics = self.mapper.map_headers(["Chain", "Address", "Notes"])

        self.assertIsNone(mapping["Notes"])
        self.assertEqual(len(diagnostics), 1)
        warning = diagnostics[0]
        self.assertIsInstance(warning, RowWarning)
        self.assertEqual(warning.key, "header-2")
        self.assertEqual(warning.message, 'Column "Notes" was not recognized and will be ignored.')

    def test_blank_header_is_ignored_silently(self) -> None:
        mapping, diagnostics = self.mapper.map_headers(["Chain", "", "Address"])

        self.assertIsNone(mapping[""])
        self.assertEqual(diagnostics, [])

    def test_duplicate_mapping_is_fatal(self) -> None:
        _, diagnostics = map_headers(["Chain", "chain_id", "Address"])

        fatal = [item for item in diagnostics if isinstance(item, FatalError)]
        self.assertEqual(
            [item.message for item in fatal],
            ['Duplicate column detected: More than one column maps to the field "chain_id".'],
        )

    def test_missing_required_columns_are_listed_once(self) -> None:
        _, diagnostics = map_headers(["Contract Name"])

        fatal = [item for item in diagnostics if isinstance(item, FatalError)]
        self.assertEqual([item.message for item in fatal], ["Missing required columns: Chain, Address"])

    def test_mapped_columns_follow_header_order(self) -> None:
        headers = ["Address", "Notes", "Chain"]
        mapping, _ = self.mapper.map_headers(headers)

        columns = self.mapper.mapped_columns(headers, mapping)

        self.assertEqual([column.id for column in columns], ["address", "chain_id"])
