"""
label_import/services/submission_gate.py

Pre-submission check for a batch of edited label rows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Sequence

from label_import.config import get_label_import_settings
from label_import.domain.labels import FieldIssue, ReferenceDataset, RowData, SchemaField
from label_import.normalization.canonicalizer import canonicalize
from label_import.reference.schema import ADDRESS_FIELD_ID, LABEL_FIELDS, build_label_schema
from label_import.validators.field_validator import FieldValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionCheck:
    """
    Readiness verdict for one batch.

    ``rows`` holds the canonicalized rows that would be submitted, keyed by
    their index in the request.
    """

    ready: bool
    submittable_count: int
    messages: list[str] = field(default_factory=list)
    issues: list[FieldIssue] = field(default_factory=list)
    rows: dict[int, RowData] = field(default_factory=dict)

    @property
    def blocking_issues(self) -> list[FieldIssue]:
        return [issue for issue in self.issues if issue.is_blocking]


class SubmissionGate:
    """
    Re-validates rows and enforces the per-batch row ceiling.

    Rows with an empty address are treated as unused and skipped.
    """

    def __init__(
        self,
        *,
        max_rows: int,
        schema: Sequence[SchemaField] = LABEL_FIELDS,
        validator: FieldValidator | None = None,
        preserve_unknown_chain: bool = False,
    ) -> None:
        self._max_rows = max(1, max_rows)
        self._schema = tuple(schema)
        self._validator = validator or FieldValidator(schema=self._schema)
        self._preserve_unknown_chain = preserve_unknown_chain

    @property
    def max_rows(self) -> int:
        return self._max_rows

    def check(self, rows: Sequence[Mapping[str, str]], reference: ReferenceDataset) -> SubmissionCheck:
        candidates: dict[int, RowData] = {}
        originals: dict[int, dict[str, str]] = {}
        for row_index, raw_row in enumerate(rows):
            if not str(raw_row.get(ADDRESS_FIELD_ID) or "").strip():
                continue
            row: RowData = {}
            original: dict[str, str] = {}
            for schema_field in self._schema:
                raw = str(raw_row.get(schema_field.id) or "").strip()
                value, _ = canonicalize(
                    schema_field,
                    raw,
                    row_index,
                    preserve_unknown_chain=self._preserve_unknown_chain,
                )
                row[schema_field.id] = value
                original[schema_field.id] = raw
            candidates[row_index] = row
            originals[row_index] = original

        if not candidates:
            return SubmissionCheck(
                ready=False,
                submittable_count=0,
                messages=["Please add at least one valid address"],
            )

        messages: list[str] = []
        if len(candidates) > self._max_rows:
            messages.append(
                f"You can only submit up to {self._max_rows} attestations at once. "
                f"You currently have {len(candidates)} valid rows."
            )

        issues: list[FieldIssue] = []
        for row_index, row in candidates.items():
            issues.extend(
                self._validator.validate_row(
                    row,
                    self._schema,
                    reference,
                    row_index,
                    original_values=originals[row_index],
                )
            )

        blocking = sum(1 for issue in issues if issue.is_blocking)
        if blocking:
            messages.append(f"Fix {blocking} blocking issue(s) before submitting.")

        ready = not messages
        logger.info(
            "Submission check rows=%s submittable=%s blocking_issues=%s ready=%s",
            len(rows),
            len(candidates),
            blocking,
            ready,
        )
        return SubmissionCheck(
            ready=ready,
            submittable_count=len(candidates),
            messages=messages,
            issues=issues,
            rows=candidates,
        )


@lru_cache(maxsize=1)
def get_submission_gate() -> SubmissionGate:
    settings = get_label_import_settings()
    return SubmissionGate(
        max_rows=settings.max_submission_rows,
        schema=build_label_schema(contract_name_max_length=settings.contract_name_max_length),
        preserve_unknown_chain=settings.preserve_unknown_chain,
    )
