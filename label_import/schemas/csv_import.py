"""
label_import/schemas/csv_import.py

Request and response schemas for label CSV endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ColumnResponse(BaseModel):
    """
    One mapped schema column.
    """

    id: str
    label: str
    required: bool = False
    kind: str


class FieldIssueResponse(BaseModel):
    """
    API response model for one cell-level finding.
    """

    key: str
    row_index: int = Field(..., ge=0)
    field_id: str
    severity: str
    message: str
    is_blocking: bool
    suggestions: list[str] = Field(default_factory=list)
    is_conversion: bool = False
    offers_add_new: bool = False
    similar_entries: list[str] = Field(default_factory=list)


class RowWarningResponse(BaseModel):
    key: str
    message: str
    row_index: int | None = None
    header_index: int | None = None
    line_number: int | None = None


class ConversionResponse(BaseModel):
    key: str
    row_index: int = Field(..., ge=0)
    field_id: str
    original_value: str
    converted_value: str


class ParseResultResponse(BaseModel):
    """
    API response model for one parsed CSV upload.

    ``fatal_errors`` is non-empty only when ``rows`` is empty.
    ``has_blocking_issues`` covers every diagnostic, including the
    ``omitted_diagnostics`` left out of ``row_warnings`` and ``field_issues``.
    """

    rows: list[dict[str, str]] = Field(default_factory=list)
    columns: list[ColumnResponse] = Field(default_factory=list)
    fatal_errors: list[str] = Field(default_factory=list)
    row_warnings: list[RowWarningResponse] = Field(default_factory=list)
    field_issues: list[FieldIssueResponse] = Field(default_factory=list)
    conversions: list[ConversionResponse] = Field(default_factory=list)
    has_blocking_issues: bool = False
    omitted_diagnostics: int = Field(0, ge=0)


class LabelRowsRequest(BaseModel):
    """
    Edited label rows keyed by field id.
    """

    rows: list[dict[str, str]] = Field(default_factory=list)


class SubmittableRowResponse(BaseModel):
    row_index: int = Field(..., ge=0)
    values: dict[str, str]


class SubmissionCheckResponse(BaseModel):
    ready: bool
    submittable_count: int = Field(..., ge=0)
    max_rows: int = Field(..., ge=1)
    messages: list[str] = Field(default_factory=list)
    issues: list[FieldIssueResponse] = Field(default_factory=list)
    rows: list[SubmittableRowResponse] = Field(default_factory=list)


class ProjectCheckRequest(BaseModel):
    """
    Fields of a project registration to compare with the directory.
    """

    name: str | None = None
    display_name: str | None = None
    github: str | None = None
    website: str | None = None


class ProjectCheckResponse(BaseModel):
    warnings: list[FieldIssueResponse] = Field(default_factory=list)
