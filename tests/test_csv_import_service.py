"""
tests/test_csv_import_service.py

Pytest tests for the end-to-end CSV import pipeline.

Coverage
--------
- Fatal file conditions (too few lines, duplicate columns, missing required)
- Unrecognized headers and ragged rows
- Chain canonicalization with conversion records
- Category alias suggestions
- Export then re-parse round trip
- Skipped all-empty lines and exhaustive diagnostics
- Decoding
"""

from __future__ import annotations

import pytest

from label_import.connectors.project_directory import ProjectDirectoryCache
from label_import.domain.labels import ProjectRecord
from label_import.services.csv_export_service import rows_to_csv
from label_import.services.csv_import_service import (
    EMPTY_FILE_MESSAGE,
    CSVDecodeError,
    CSVImportService,
    get_csv_import_service,
)

ADDRESS = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def service() -> CSVImportService:
    return CSVImportService(log_diagnostics=False)


# ---------------------------------------------------------------------------
# Fatal conditions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text", ["", "\n\n", "Chain,Address\n", "Chain,Address\n\n   \n"])
def test_header_only_file_is_fatal(service: CSVImportService, text: str) -> None:
    result = service.parse_csv(text)

    assert [error.message for error in result.fatal_errors] == [EMPTY_FILE_MESSAGE]
    assert result.rows == []
    assert not result.ok


def test_duplicate_columns_are_fatal_with_zero_rows(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,chain_id,Address\n1,1,{ADDRESS}\n")

    assert result.rows == []
    assert [error.message for error in result.fatal_errors] == [
        'Duplicate column detected: More than one column maps to the field "chain_id".'
    ]


def test_missing_required_columns_are_fatal(service: CSVImportService) -> None:
    result = service.parse_csv("Contract Name\nRouter\n")

    assert result.rows == []
    assert [error.message for error in result.fatal_errors] == ["Missing required columns: Chain, Address"]


# ---------------------------------------------------------------------------
# Rows and diagnostics
# ---------------------------------------------------------------------------


def test_parses_and_canonicalizes_rows(service: CSVImportService) -> None:
    text = (
        "Chain,Address,Contract Name,Is Proxy\n"
        f"1,{ADDRESS},Router,YES\n"
        f"eip155:8453,{ADDRESS},Pool,no\n"
        f"Base,{ADDRESS},Vault,\n"
    )

    result = service.parse_csv(text)

    assert result.ok
    assert result.rows[0] == {
        "chain_id": "eip155:1",
        "address": ADDRESS,
        "contract_name": "Router",
        "is_proxy": "true",
    }
    assert result.rows[1]["is_proxy"] == "false"
    assert result.rows[2]["chain_id"] == "eip155:8453"
    assert sorted(result.conversions_by_cell()) == ["0-chain_id", "2-chain_id"]
    assert result.field_issues == []
    assert not result.has_blocking_issues


def test_unmapped_header_warns_without_aborting(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address,Notes\n1,{ADDRESS},hello\n")

    assert result.ok
    assert [column.id for column in result.mapped_columns] == ["chain_id", "address"]
    assert [warning.key for warning in result.row_warnings] == ["header-2"]
    assert result.rows == [{"chain_id": "eip155:1", "address": ADDRESS}]


def test_ragged_row_warns_and_drops_extra_cells(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address\n\n1,{ADDRESS},surplus\n")

    warning = result.row_warnings[0]
    assert warning.row_index == 0
    assert warning.message == "Row 3 has more cells than the header. Extra cells will be ignored."
    assert result.rows == [{"chain_id": "eip155:1", "address": ADDRESS}]


def test_short_rows_fill_every_mapped_column(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address,Contract Name\n1,{ADDRESS}\n")

    assert result.rows[0]["contract_name"] == ""


def test_empty_cell_lines_are_skipped(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address\n,\n1,{ADDRESS}\n")

    assert len(result.rows) == 1


def test_unknown_chain_becomes_required_error(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address\neip155:999999,{ADDRESS}\n")

    assert result.rows[0]["chain_id"] == ""
    record = result.conversions_by_cell()["0-chain_id"]
    assert record.original_value == "eip155:999999"
    assert record.converted_value == ""
    issue = result.issues_by_cell()["0-chain_id"][0]
    assert issue.is_blocking
    assert issue.message.endswith("Chain is required")
    assert result.has_blocking_issues


def test_unknown_chain_can_be_preserved() -> None:
    service = CSVImportService(log_diagnostics=False, preserve_unknown_chain=True)

    result = service.parse_csv(f"Chain,Address\nmoonchain,{ADDRESS}\n")

    assert result.rows[0]["chain_id"] == "moonchain"
    assert result.conversions == []
    issue = result.issues_by_cell()["0-chain_id"][0]
    assert issue.message.startswith('Unrecognized chain "moonchain"')
    assert "eip155:1" in issue.suggestions


def test_category_alias_is_suggested(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address,Usage Category\n1,{ADDRESS},defi\n")

    assert result.rows[0]["usage_category"] == "defi"
    issue = result.issues_by_cell()["0-usage_category"][0]
    assert issue.is_conversion
    assert issue.suggestions == ("dex",)
    assert not result.has_blocking_issues


def test_owner_project_checked_against_directory() -> None:
    cache = ProjectDirectoryCache(lambda: [ProjectRecord(owner_project="uniswap", display_name="Uniswap")])
    service = CSVImportService(log_diagnostics=False, project_cache=cache)

    result = service.parse_csv(f"Chain,Address,Owner Project\n1,{ADDRESS},uniswap\n1,{ADDRESS},uniswp\n")

    assert "0-owner_project" not in result.issues_by_cell()
    assert result.issues_by_cell()["1-owner_project"][0].suggestions == ("uniswap",)


def test_export_then_reparse_round_trips(service: CSVImportService) -> None:
    text = (
        "Address,Chain,Contract Name,Is Contract,Usage Category\n"
        f'{ADDRESS},10,"Router, ""v2""",1,dex\n'
        ",moonchain,,,\n"
        f"{ADDRESS},arbitrum,,false,\n"
    )
    first = service.parse_csv(text)

    second = service.parse_csv(rows_to_csv(first.rows, columns=first.mapped_columns))

    assert first.rows[0]["contract_name"] == 'Router, "v2"'
    assert len(first.rows) == 2
    assert second.rows == first.rows


# ---------------------------------------------------------------------------
# Skipped lines and exhaustive diagnostics
# ---------------------------------------------------------------------------


def test_line_blank_after_canonicalization_is_skipped_with_warning(service: CSVImportService) -> None:
    result = service.parse_csv(f"Chain,Address\nmoonchain,\n1,{ADDRESS}\n")

    assert result.rows == [{"chain_id": "eip155:1", "address": ADDRESS}]
    assert [warning.key for warning in result.row_warnings] == ["line-2"]
    assert result.row_warnings[0].message == "Row 2 has no usable values and was skipped."
    assert result.conversions == []
    assert "0-address" not in result.issues_by_cell()


def test_only_blank_canonical_rows_yield_no_rows(service: CSVImportService) -> None:
    first = service.parse_csv("Chain,Address\nmoonchain,\n")

    assert first.rows == []
    assert first.fatal_errors == []
    assert [warning.line_number for warning in first.row_warnings] == [2]


def test_blocking_issue_after_many_warnings_is_kept() -> None:
    service = CSVImportService(log_diagnostics=True)
    warning_rows = "".join(f"1,{ADDRESS},defi\n" for _ in range(5000))
    text = f"Chain,Address,Usage Category\n{warning_rows}1,0xnotanaddress,dex\n"

    result = service.parse_csv(text)

    assert len(result.rows) == 5001
    assert len(result.field_issues) == 5001
    assert result.issues_by_cell()["5000-address"][0].is_blocking
    assert result.has_blocking_issues


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def test_parse_bytes_strips_bom(service: CSVImportService) -> None:
    result = service.parse_bytes(f"\ufeffChain,Address\n1,{ADDRESS}\n".encode("utf-8"))

    assert [column.id for column in result.mapped_columns] == ["chain_id", "address"]


def test_parse_bytes_rejects_non_utf8(service: CSVImportService) -> None:
    with pytest.raises(CSVDecodeError):
        service.parse_bytes(b"Chain,Address\n\xff\xfe\n")


def test_factory_reads_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LABEL_IMPORT_PRESERVE_UNKNOWN_CHAIN", "true")

    service = get_csv_import_service()
    result = service.parse_csv(f"Chain,Address\nmoonchain,{ADDRESS}\n")

    assert result.rows[0]["chain_id"] == "moonchain"
    assert get_csv_import_service() is service
