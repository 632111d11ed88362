"""
label_import/domain/labels.py

Domain models used by the bulk label CSV import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

RowData = dict[str, str]
HeaderMapping = dict[str, Union[str, None]]
FieldValidatorFn = Callable[[str], Union[str, None]]


class FieldKind(str, Enum):
    TEXT = "text"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ADDRESS_LIKE = "address_like"


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class SchemaField:
    """
    One column of the label schema.
    """

    id: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    required: bool = False
    validator: FieldValidatorFn | None = field(default=None, compare=False, repr=False)

    @property
    def is_boolean(self) -> bool:
        return self.kind is FieldKind.BOOLEAN or self.id.startswith("is_")


@dataclass(frozen=True)
class FatalError:
    """
    File-level error; the parse produced no rows.
    """

    message: str


@dataclass(frozen=True)
class RowWarning:
    """
    Informational warning about a row or a header cell.

    Header warnings carry ``header_index`` and no ``row_index``. A warning
    about a skipped source line carries only its ``line_number``.
    """

    message: str
    row_index: int | None = None
    header_index: int | None = None
    line_number: int | None = None

    @property
    def key(self) -> str:
        if self.row_index is not None:
            return str(self.row_index)
        if self.header_index is not None:
            return f"header-{self.header_index}"
        return f"line-{self.line_number}"


@dataclass(frozen=True)
class FieldIssue:
    """
    Validation finding for one cell.
    """

    row_index: int
    field_id: str
    severity: Severity
    message: str
    suggestions: tuple[str, ...] = ()
    is_conversion: bool = False
    offers_add_new: bool = False
    similar_entries: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.row_index}-{self.field_id}"

    @property
    def is_blocking(self) -> bool:
        return self.severity is Severity.ERROR


Diagnostic = Union[FatalError, RowWarning, FieldIssue]


@dataclass(frozen=True)
class ConversionRecord:
    """
    Audit entry for a value silently rewritten during parsing.
    """

    row_index: int
    field_id: str
    original_value: str
    converted_value: str

    @property
    def key(self) -> str:
        return f"{self.row_index}-{self.field_id}"


@dataclass(frozen=True)
class ProjectRecord:
    """
    One entry of the remote project directory.
    """

    owner_project: str
    display_name: str | None = None
    main_github: str | None = None
    website: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def value_for(self, attribute: str) -> Any:
        if attribute in {"owner_project", "display_name", "main_github", "website"}:
            return getattr(self, attribute)
        return self.extra.get(attribute)

    @property
    def label(self) -> str:
        return self.display_name or self.owner_project


@dataclass(frozen=True)
class ReferenceDataset:
    """
    Reference vocabularies used by the validator.
    """

    valid_chain_ids: frozenset[str]
    chain_aliases: dict[str, str]
    valid_category_ids: frozenset[str]
    category_aliases: dict[str, str]
    valid_project_ids: frozenset[str] = frozenset()
    project_aliases: dict[str, str] = field(default_factory=dict)
    projects: tuple[ProjectRecord, ...] = ()


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of one CSV import call.
    """

    rows: list[RowData] = field(default_factory=list)
    mapped_columns: list[SchemaField] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    conversions: list[ConversionRecord] = field(default_factory=list)

    @property
    def fatal_errors(self) -> list[FatalError]:
        return [item for item in self.diagnostics if isinstance(item, FatalError)]

    @property
    def row_warnings(self) -> list[RowWarning]:
        return [item for item in self.diagnostics if isinstance(item, RowWarning)]

    @property
    def field_issues(self) -> list[FieldIssue]:
        return [item for item in self.diagnostics if isinstance(item, FieldIssue)]

    @property
    def has_blocking_issues(self) -> bool:
        return bool(self.fatal_errors) or any(issue.is_blocking for issue in self.field_issues)

    @property
    def ok(self) -> bool:
        return not self.fatal_errors

    def issues_by_cell(self) -> dict[str, list[FieldIssue]]:
        """
        Group field issues under their ``"{row_index}-{field_id}"`` key.
        """

        grouped: dict[str, list[FieldIssue]] = {}
        for issue in self.field_issues:
            grouped.setdefault(issue.key, []).append(issue)
        return grouped

    def conversions_by_cell(self) -> dict[str, ConversionRecord]:
        return {record.key: record for record in self.conversions}
