"""
label_import/api/routers/labels.py

Label CSV HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from label_import.api.dependencies import get_csv_content
from label_import.config import LabelImportSettings, get_label_import_settings
from label_import.domain.labels import Diagnostic, FatalError, FieldIssue, ParseResult, RowWarning
from label_import.schemas.csv_import import (
    ColumnResponse,
    ConversionResponse,
    FieldIssueResponse,
    LabelRowsRequest,
    ParseResultResponse,
    RowWarningResponse,
    SubmissionCheckResponse,
    SubmittableRowResponse,
)
from label_import.services.csv_export_service import (
    EXPORT_FILENAME,
    TEMPLATE_FILENAME,
    rows_to_csv,
    template_csv,
)
from label_import.services.csv_import_service import (
    CSVDecodeError,
    CSVImportService,
    get_csv_import_service,
)
from label_import.services.submission_gate import SubmissionGate, get_submission_gate

router = APIRouter(prefix="/labels", tags=["labels"])

CSV_MEDIA_TYPE = "text/csv"


def field_issue_response(issue: FieldIssue) -> FieldIssueResponse:
    return FieldIssueResponse(
        key=issue.key,
        row_index=issue.row_index,
        field_id=issue.field_id,
        severity=issue.severity.value,
        message=issue.message,
        is_blocking=issue.is_blocking,
        suggestions=list(issue.suggestions),
        is_conversion=issue.is_conversion,
        offers_add_new=issue.offers_add_new,
        similar_entries=list(issue.similar_entries),
    )


def _is_blocking(item: Diagnostic) -> bool:
    return isinstance(item, FieldIssue) and item.is_blocking


def parse_result_response(result: ParseResult, *, max_diagnostics: int | None = None) -> ParseResultResponse:
    """
    Render a parse result, listing at most ``max_diagnostics`` warnings and
    field issues. Blocking issues are listed first when the list is trimmed.
    """

    listed = [item for item in result.diagnostics if not isinstance(item, FatalError)]
    omitted = 0
    if max_diagnostics is not None and len(listed) > max_diagnostics:
        omitted = len(listed) - max_diagnostics
        listed = sorted(listed, key=lambda item: not _is_blocking(item))[:max_diagnostics]

    return ParseResultResponse(
        rows=result.rows,
        columns=[
            ColumnResponse(id=column.id, label=column.label, required=column.required, kind=column.kind.value)
            for column in result.mapped_columns
        ],
        fatal_errors=[error.message for error in result.fatal_errors],
        row_warnings=[
            RowWarningResponse(
                key=warning.key,
                message=warning.message,
                row_index=warning.row_index,
                header_index=warning.header_index,
                line_number=warning.line_number,
            )
            for warning in listed
            if isinstance(warning, RowWarning)
        ],
        field_issues=[field_issue_response(item) for item in listed if isinstance(item, FieldIssue)],
        conversions=[
            ConversionResponse(
                key=record.key,
                row_index=record.row_index,
                field_id=record.field_id,
                original_value=record.original_value,
                converted_value=record.converted_value,
            )
            for record in result.conversions
        ],
        has_blocking_issues=result.has_blocking_issues,
        omitted_diagnostics=omitted,
    )


@router.post("/csv/parse", response_model=ParseResultResponse)
def parse_csv(
    content: bytes = Depends(get_csv_content),
    import_service: CSVImportService = Depends(get_csv_import_service),
    settings: LabelImportSettings = Depends(get_label_import_settings),
) -> ParseResultResponse:
    """
    Parse one label CSV upload into rows and a diagnostics report.

    File-level problems come back as ``fatal_errors`` with status 200.
    """

    try:
        result = import_service.parse_bytes(content)
    except CSVDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return parse_result_response(result, max_diagnostics=settings.max_diagnostics)


@router.post("/csv/export", response_class=PlainTextResponse)
def export_csv(payload: LabelRowsRequest) -> PlainTextResponse:
    return PlainTextResponse(
        rows_to_csv(payload.rows),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.get("/csv/template", response_class=PlainTextResponse)
def download_template() -> PlainTextResponse:
    return PlainTextResponse(
        template_csv(),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


@router.post("/submission/check", response_model=SubmissionCheckResponse)
def check_submission(
    payload: LabelRowsRequest,
    gate: SubmissionGate = Depends(get_submission_gate),
    import_service: CSVImportService = Depends(get_csv_import_service),
) -> SubmissionCheckResponse:
    """
    Report whether edited rows are ready to submit as one batch.
    """

    verdict = gate.check(payload.rows, import_service.load_reference())
    return SubmissionCheckResponse(
        ready=verdict.ready,
        submittable_count=verdict.submittable_count,
        max_rows=gate.max_rows,
        messages=verdict.messages,
        issues=[field_issue_response(issue) for issue in verdict.issues],
        rows=[
            SubmittableRowResponse(row_index=row_index, values=values)
            for row_index, values in verdict.rows.items()
        ],
    )
