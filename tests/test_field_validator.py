from __future__ import annotations

import dataclasses
import unittest

from label_import.domain.labels import ProjectRecord, Severity
from label_import.reference.chains import CHAINS
from label_import.reference.dataset import build_reference_dataset
from label_import.reference.schema import LABEL_FIELDS_BY_ID
from label_import.validators.field_validator import FieldValidator, find_similar_projects

VALID_ADDRESS = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"

PROJECTS = [
    ProjectRecord(
        owner_project="uniswap",
        display_name="Uniswap",
        main_github="https://github.com/Uniswap",
        website="https://uniswap.org",
    ),
    ProjectRecord(
        owner_project="aave",
        display_name="Aave",
        main_github="https://github.com/aave",
        website="https://aave.com",
    ),
]


class TestFieldValidator(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = FieldValidator()
        self.reference = build_reference_dataset(PROJECTS)

    def test_category_alias_is_a_non_blocking_conversion(self) -> None:
        issues = self.validator.validate("usage_category", "defi", self.reference, row_index=4)

        self.assertEqual(len(issues), 1)
        issue = issues[0]
        self.assertTrue(issue.is_conversion)
        self.assertFalse(issue.is_blocking)
        self.assertEqual(issue.suggestions, ("dex",))
        self.assertEqual(issue.key, "4-usage_category")

    def test_valid_category_has_no_issues(self) -> None:
        self.assertEqual(self.validator.validate("usage_category", "dex", self.reference), [])

    def test_misspelled_category_gets_blocking_suggestions(self) -> None:
        issues = self.validator.validate("usage_category", "lendng", self.reference)

        self.assertEqual(len(issues), 1)
        self.assertTrue(issues[0].is_blocking)
        self.assertIn("lending", issues[0].suggestions)
        self.assertLessEqual(len(issues[0].suggestions), 5)

    def test_unmatched_category_falls_back_to_other(self) -> None:
        issues = self.validator.validate("usage_category", "zzzzqqq", self.reference)

        self.assertEqual(issues[0].suggestions, ("other",))
        self.assertTrue(issues[0].is_blocking)

    def test_required_field_empty(self) -> None:
        issues = self.validator.validate("address", "", self.reference)

        self.assertEqual([issue.message for issue in issues], ["Address is required"])
        self.assertEqual(issues[0].suggestions, ())

    def test_blanked_chain_mentions_original_text(self) -> None:
        issues = self.validator.validate("chain_id", "", self.reference, original_value="eip155:999999")

        self.assertEqual(issues[0].message, 'Unrecognized chain "eip155:999999". Chain is required')
        self.assertTrue(issues[0].is_blocking)

    def test_preserved_unknown_chain_lists_supported_chains(self) -> None:
        issues = self.validator.validate("chain_id", "eip155:999999", self.reference)

        self.assertEqual(len(issues), 1)
        self.assertTrue(issues[0].message.startswith('Unrecognized chain "eip155:999999"'))
        self.assertEqual(issues[0].suggestions, tuple(chain.caip2 for chain in CHAINS))

    def test_chain_is_checked_against_the_reference_dataset(self) -> None:
        reference = dataclasses.replace(self.reference, valid_chain_ids=frozenset({"eip155:1"}))

        self.assertEqual(self.validator.validate("chain_id", "eip155:1", reference), [])
        issues = self.validator.validate("chain_id", "eip155:8453", reference)
        self.assertEqual(len(issues), 1)
        self.assertTrue(issues[0].is_blocking)
        self.assertEqual(issues[0].suggestions, ("eip155:1",))

    def test_chain_alias_left_in_a_row_suggests_its_caip2_id(self) -> None:
        issues = self.validator.validate("chain_id", "Base", self.reference, row_index=2)

        self.assertEqual(len(issues), 1)
        issue = issues[0]
        self.assertTrue(issue.is_blocking)
        self.assertTrue(issue.is_conversion)
        self.assertEqual(issue.suggestions, ("eip155:8453",))
        self.assertEqual(issue.key, "2-chain_id")

    def test_format_validators_block(self) -> None:
        self.assertEqual(
            [issue.message for issue in self.validator.validate("address", "0x123", self.reference)],
            ["Invalid EVM address"],
        )
        self.assertEqual(self.validator.validate("address", VALID_ADDRESS, self.reference), [])
        self.assertEqual(
            [issue.message for issue in self.validator.validate("contract_name", "x" * 41, self.reference)],
            ["Contract name must be 40 characters or less"],
        )
        self.assertEqual(
            [issue.message for issue in self.validator.validate("audit", "http://audit.example", self.reference)],
            ["URL must start with https:// or www."],
        )
        self.assertEqual(
            [issue.message for issue in self.validator.validate("is_proxy", "maybe", self.reference)],
            ["Must be true or false"],
        )
        self.assertEqual(
            [issue.message for issue in self.validator.validate("deployment_tx", "0xabc", self.reference)],
            ["Invalid transaction hash format"],
        )

    def test_known_project_passes(self) -> None:
        self.assertEqual(self.validator.validate("owner_project", "uniswap", self.reference), [])

    def test_misspelled_project_suggests_directory_entries(self) -> None:
        issues = self.validator.validate("owner_project", "uniswp", self.reference)

        self.assertEqual(len(issues), 1)
        self.assertTrue(issues[0].is_blocking)
        self.assertEqual(issues[0].suggestions, ("uniswap",))
        self.assertEqual(issues[0].similar_entries, ("Uniswap",))
        self.assertFalse(issues[0].offers_add_new)

    def test_unknown_project_offers_add_new(self) -> None:
        issues = self.validator.validate("owner_project", "totally-new-thing", self.reference)

        self.assertTrue(issues[0].offers_add_new)
        self.assertTrue(issues[0].is_blocking)
        self.assertEqual(issues[0].suggestions, ())

    def test_empty_directory_offers_add_new(self) -> None:
        issues = self.validator.validate("owner_project", "uniswap", build_reference_dataset())

        self.assertTrue(issues[0].offers_add_new)

    def test_project_alias_is_a_conversion(self) -> None:
        reference = build_reference_dataset(PROJECTS, project_aliases={"Uni": "uniswap"})

        issues = self.validator.validate("owner_project", "UNI", reference)

        self.assertTrue(issues[0].is_conversion)
        self.assertEqual(issues[0].suggestions, ("uniswap",))

    def test_similar_website_is_a_warning(self) -> None:
        issues = self.validator.validate("website", "https://www.uniswap.org/", self.reference)

        self.assertEqual(len(issues), 1)
        self.assertEqual(issues[0].severity, Severity.WARNING)
        self.assertEqual(issues[0].similar_entries, ("Uniswap",))
        self.assertEqual(issues[0].message, 'This website is very similar to existing entries in "Uniswap".')

    def test_validate_row_covers_every_column(self) -> None:
        row = {"chain_id": "", "address": "0x123", "contract_name": "ok"}
        columns = [LABEL_FIELDS_BY_ID[field_id] for field_id in row]

        issues = self.validator.validate_row(row, columns, self.reference, 2)

        self.assertEqual(sorted(issue.key for issue in issues), ["2-address", "2-chain_id"])


class TestFindSimilarProjects(unittest.TestCase):
    def test_exact_matches_win_over_similar_ones(self) -> None:
        projects = PROJECTS + [ProjectRecord(owner_project="uniswap-labs", display_name="Uniswap Labs")]

        matches = find_similar_projects("Uniswap", "display_name", projects)

        self.assertEqual([project.owner_project for project in matches], ["uniswap"])

    def test_name_field_compares_owner_project(self) -> None:
        matches = find_similar_projects("aave", "name", PROJECTS)

        self.assertEqual([project.owner_project for project in matches], ["aave"])

    def test_unknown_field_type_has_no_matches(self) -> None:
        self.assertEqual(find_similar_projects("aave", "version", PROJECTS), [])
