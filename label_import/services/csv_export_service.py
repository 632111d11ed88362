"""
label_import/services/csv_export_service.py

CSV rendering for row export and the blank upload template.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from label_import.domain.labels import SchemaField
from label_import.reference.schema import LABEL_FIELDS

_NEEDS_QUOTING = (",", '"', "\n", "\r")

TEMPLATE_FILENAME = "bulk_attestation_template.csv"
EXPORT_FILENAME = "bulk_attestation_labels.csv"


def quote_cell(value: str) -> str:
    """
    Quote a cell when it holds a delimiter, quote, or line break.
    """

    if any(token in value for token in _NEEDS_QUOTING) or value != value.strip():
        return '"' + value.replace('"', '""') + '"'
    return value


def rows_to_csv(
    rows: Sequence[Mapping[str, str]],
    *,
    columns: Sequence[SchemaField] = LABEL_FIELDS,
) -> str:
    """
    Render rows with a label header line, one line per row.

    Missing values are written as empty cells.
    """

    lines = [",".join(quote_cell(column.label) for column in columns)]
    for row in rows:
        lines.append(",".join(quote_cell(str(row.get(column.id) or "")) for column in columns))
    return "\n".join(lines)


def template_csv(columns: Sequence[SchemaField] = LABEL_FIELDS) -> str:
    return rows_to_csv([], columns=columns)
