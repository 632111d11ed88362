"""
label_import/services/csv_import_service.py

Service layer for bulk label CSV parsing.

The pipeline is tokenize -> map headers -> per row {canonicalize ->
validate} -> ParseResult. File-level problems are returned as
``FatalError`` diagnostics with zero rows; everything else is collected
across all rows so the caller sees the full report in one pass.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Sequence

from label_import.config import get_label_import_settings
from label_import.connectors.project_directory import ProjectDirectoryCache, get_project_directory_cache
from label_import.domain.labels import (
    ConversionRecord,
    Diagnostic,
    FatalError,
    ParseResult,
    ReferenceDataset,
    RowData,
    RowWarning,
    SchemaField,
)
from label_import.logging_utils import diagnostic_counts, log_event
from label_import.mappers.header_mapper import HeaderMapper
from label_import.normalization.canonicalizer import canonicalize
from label_import.parsing.tokenizer import has_data_rows, tokenize_lines
from label_import.reference.dataset import build_reference_dataset
from label_import.reference.schema import LABEL_FIELDS, build_label_schema
from label_import.validators.field_validator import FieldValidator

logger = logging.getLogger(__name__)

EMPTY_FILE_MESSAGE = "CSV file must contain a header and at least one data row."


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CSVDecodeError(ValueError):
    """
    Raised when uploaded bytes are not UTF-8 text.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class CSVImportService:
    """
    Coordinates tokenizing, header mapping, canonicalization, and validation.
    """

    def __init__(
        self,
        *,
        log_diagnostics: bool = False,
        preserve_unknown_chain: bool = False,
        schema: Sequence[SchemaField] = LABEL_FIELDS,
        mapper: HeaderMapper | None = None,
        validator: FieldValidator | None = None,
        project_cache: ProjectDirectoryCache | None = None,
    ) -> None:
        self._log_diagnostics = log_diagnostics
        self._preserve_unknown_chain = preserve_unknown_chain
        self._schema = tuple(schema)
        self._mapper = mapper or HeaderMapper(schema=self._schema)
        self._validator = validator or FieldValidator(schema=self._schema)
        self._project_cache = project_cache

    @property
    def schema(self) -> tuple[SchemaField, ...]:
        return self._schema

    @property
    def validator(self) -> FieldValidator:
        return self._validator

    @staticmethod
    def decode_csv(content: bytes) -> str:
        """
        Decode uploaded bytes as UTF-8, dropping a leading byte order mark.
        """

        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CSVDecodeError("CSV must be UTF-8 encoded.") from exc

    def load_reference(self) -> ReferenceDataset:
        """
        Build the reference dataset, fetching the project directory if needed.
        """

        projects = self._project_cache.get() if self._project_cache is not None else ()
        return build_reference_dataset(projects)

    def parse_bytes(self, content: bytes, *, reference: ReferenceDataset | None = None) -> ParseResult:
        return self.parse_csv(self.decode_csv(content), reference=reference)

    def parse_csv(self, text: str, *, reference: ReferenceDataset | None = None) -> ParseResult:
        """
        Parse raw CSV text into canonical rows plus a full diagnostics report.
        """

        if not has_data_rows(text):
            logger.info("CSV rejected reason=no_data_rows chars=%s", len(text))
            return ParseResult(diagnostics=[FatalError(message=EMPTY_FILE_MESSAGE)])

        lines = tokenize_lines(text)
        headers = lines[0].cells
        mapping, header_diagnostics = self._mapper.map_headers(headers)
        columns = self._mapper.mapped_columns(headers, mapping)
        diagnostics: list[Diagnostic] = list(header_diagnostics)

        if any(isinstance(item, FatalError) for item in diagnostics):
            self._log_summary(rows=0, diagnostics=diagnostics, conversions=0)
            return ParseResult(mapped_columns=columns, diagnostics=diagnostics)

        if reference is None:
            reference = self.load_reference()

        column_fields: list[tuple[int, SchemaField]] = []
        for index, header in enumerate(headers):
            field_id = mapping.get(header)
            if field_id is not None:
                column_fields.append((index, self._mapper.schema_field(field_id)))

        rows: list[RowData] = []
        conversions: list[ConversionRecord] = []

        for line in lines[1:]:
            if line.is_empty:
                continue

            row_index = len(rows)
            row: RowData = {}
            originals: dict[str, str] = {}
            row_conversions: list[ConversionRecord] = []
            for column_index, field in column_fields:
                raw = line.cells[column_index] if column_index < len(line.cells) else ""
                value, record = canonicalize(
                    field,
                    raw,
                    row_index,
                    preserve_unknown_chain=self._preserve_unknown_chain,
                )
                row[field.id] = value
                originals[field.id] = raw
                if record is not None:
                    row_conversions.append(record)

            # All-empty lines are judged on canonical values, not raw cells.
            if not any(row.values()):
                self._collect(
                    diagnostics,
                    [
                        RowWarning(
                            message=f"Row {line.line_number} has no usable values and was skipped.",
                            line_number=line.line_number,
                        )
                    ],
                )
                continue

            row_diagnostics: list[Diagnostic] = []
            if len(line.cells) > len(headers):
                row_diagnostics.append(
                    RowWarning(
                        message=(
                            f"Row {line.line_number} has more cells than the header. "
                            "Extra cells will be ignored."
                        ),
                        row_index=row_index,
                    )
                )

            rows.append(row)
            conversions.extend(row_conversions)
            row_diagnostics.extend(
                self._validator.validate_row(
                    row,
                    columns,
                    reference,
                    row_index,
                    original_values=originals,
                )
            )
            self._collect(diagnostics, row_diagnostics)

        result = ParseResult(
            rows=rows,
            mapped_columns=columns,
            diagnostics=diagnostics,
            conversions=conversions,
        )
        self._log_summary(rows=len(rows), diagnostics=diagnostics, conversions=len(conversions))
        return result

    def _collect(self, diagnostics: list[Diagnostic], new_items: list[Diagnostic]) -> None:
        diagnostics.extend(new_items)
        if self._log_diagnostics:
            for item in new_items:
                logger.warning("CSV diagnostic %s", item)

    @staticmethod
    def _log_summary(*, rows: int, diagnostics: list[Diagnostic], conversions: int) -> None:
        log_event(
            logger,
            logging.INFO,
            "label_csv_parsed",
            rows=rows,
            conversions=conversions,
            **diagnostic_counts(diagnostics),
        )


@lru_cache(maxsize=1)
def get_csv_import_service() -> CSVImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_label_import_settings()
    return CSVImportService(
        log_diagnostics=settings.log_diagnostics,
        preserve_unknown_chain=settings.preserve_unknown_chain,
        schema=build_label_schema(contract_name_max_length=settings.contract_name_max_length),
        project_cache=get_project_directory_cache(),
    )
