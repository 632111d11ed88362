"""
label_import/domain package marker.
"""

from label_import.domain.labels import (
    ConversionRecord,
    Diagnostic,
    FatalError,
    FieldIssue,
    FieldKind,
    HeaderMapping,
    ParseResult,
    ProjectRecord,
    ReferenceDataset,
    RowData,
    RowWarning,
    SchemaField,
    Severity,
)

__all__ = [
    "ConversionRecord",
    "Diagnostic",
    "FatalError",
    "FieldIssue",
    "FieldKind",
    "HeaderMapping",
    "ParseResult",
    "ProjectRecord",
    "ReferenceDataset",
    "RowData",
    "RowWarning",
    "SchemaField",
    "Severity",
]
