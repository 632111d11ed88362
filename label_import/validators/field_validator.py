"""
label_import/validators/field_validator.py

Per-cell validation and suggestion engine.

Every finding is a ``FieldIssue``. Blocking issues (severity ERROR) must be
fixed before submission; warnings carry one-click suggestions or duplicate
notices and never block.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from label_import.domain.labels import (
    FieldIssue,
    ProjectRecord,
    ReferenceDataset,
    RowData,
    SchemaField,
    Severity,
)
from label_import.reference.categories import CATEGORIES, DEFAULT_CATEGORY_ID, Category
from label_import.reference.chains import CHAINS
from label_import.reference.schema import (
    CATEGORY_FIELD_ID,
    CHAIN_FIELD_ID,
    LABEL_FIELDS,
    PROJECT_FIELD_ID,
)
from label_import.validators.similarity import (
    is_similar_value,
    rank_candidates,
    score_category,
    score_project,
)

logger = logging.getLogger(__name__)

CATEGORY_SCORE_FLOOR = 50.0
PROJECT_SCORE_FLOOR = 40.0
MAX_SUGGESTIONS = 5
MAX_FALLBACK_PROJECT_SUGGESTIONS = 3

# Free-text field -> directory attribute compared for duplicates.
SIMILARITY_FIELDS: dict[str, str] = {
    "name": "owner_project",
    "display_name": "display_name",
    "github": "main_github",
    "website": "website",
}


class FieldValidator:
    """
    Validates cell values against the schema and reference vocabularies.
    """

    def __init__(
        self,
        *,
        schema: Sequence[SchemaField] = LABEL_FIELDS,
        categories: Sequence[Category] = CATEGORIES,
    ) -> None:
        self._fields_by_id = {field.id: field for field in schema}
        self._categories = tuple(categories)

    def validate(
        self,
        field_id: str,
        value: str,
        reference: ReferenceDataset,
        *,
        row_index: int = 0,
        original_value: str | None = None,
    ) -> list[FieldIssue]:
        """
        Validate one cell and return its issues.

        ``original_value`` is the pre-canonicalization text; it only changes
        the wording of a blanked chain's required error.
        """

        field = self._fields_by_id.get(field_id)

        if not value:
            if field is not None and field.required:
                return [self._required_issue(field, row_index, original_value)]
            return []

        if field is not None and field.validator is not None:
            message = field.validator(value)
            if message:
                return [self._error(row_index, field_id, message)]

        if field_id == CHAIN_FIELD_ID:
            return self._validate_chain(value, reference, row_index)
        if field_id == CATEGORY_FIELD_ID:
            return self._validate_category(value, reference, row_index)
        if field_id == PROJECT_FIELD_ID:
            return self._validate_project(value, reference, row_index)
        if field_id in SIMILARITY_FIELDS:
            return self._check_similar_entries(field_id, value, reference.projects, row_index)
        return []

    def validate_row(
        self,
        row: RowData,
        columns: Sequence[SchemaField],
        reference: ReferenceDataset,
        row_index: int,
        *,
        original_values: Mapping[str, str] | None = None,
    ) -> list[FieldIssue]:
        issues: list[FieldIssue] = []
        originals = original_values or {}
        for column in columns:
            issues.extend(
                self.validate(
                    column.id,
                    row.get(column.id, ""),
                    reference,
                    row_index=row_index,
                    original_value=originals.get(column.id),
                )
            )
        return issues

    def _required_issue(
        self,
        field: SchemaField,
        row_index: int,
        original_value: str | None,
    ) -> FieldIssue:
        message = f"{field.label} is required"
        if field.id == CHAIN_FIELD_ID and original_value:
            message = f'Unrecognized chain "{original_value}". {message}'
        return self._error(row_index, field.id, message)

    def _validate_chain(
        self,
        value: str,
        reference: ReferenceDataset,
        row_index: int,
    ) -> list[FieldIssue]:
        if value in reference.valid_chain_ids:
            return []

        alias_target = reference.chain_aliases.get(value.lower().strip())
        if alias_target in reference.valid_chain_ids:
            return [
                FieldIssue(
                    row_index=row_index,
                    field_id=CHAIN_FIELD_ID,
                    severity=Severity.ERROR,
                    message=f'Chain must be a CAIP-2 id: "{value}" is "{alias_target}".',
                    suggestions=(alias_target,),
                    is_conversion=True,
                )
            ]

        return [
            self._error(
                row_index,
                CHAIN_FIELD_ID,
                f'Unrecognized chain "{value}". Use one of the supported chains.',
                suggestions=tuple(chain.caip2 for chain in CHAINS if chain.caip2 in reference.valid_chain_ids),
            )
        ]

    def _validate_category(
        self,
        value: str,
        reference: ReferenceDataset,
        row_index: int,
    ) -> list[FieldIssue]:
        if value in reference.valid_category_ids:
            return []

        alias_target = reference.category_aliases.get(value.lower().strip())
        if alias_target and alias_target != value and alias_target in reference.valid_category_ids:
            return [
                FieldIssue(
                    row_index=row_index,
                    field_id=CATEGORY_FIELD_ID,
                    severity=Severity.WARNING,
                    message=f'"{value}" might be "{alias_target}". Click to apply the suggestion.',
                    suggestions=(alias_target,),
                    is_conversion=True,
                )
            ]

        suggestions = self.suggest_categories(value, reference)
        if suggestions:
            return [
                self._error(
                    row_index,
                    CATEGORY_FIELD_ID,
                    f'Invalid category: "{value}". Did you mean one of these?',
                    suggestions=tuple(suggestions),
                )
            ]
        return [
            self._error(
                row_index,
                CATEGORY_FIELD_ID,
                f'Invalid category: "{value}". Please select from the available categories.',
                suggestions=(DEFAULT_CATEGORY_ID,),
            )
        ]

    def suggest_categories(self, value: str, reference: ReferenceDataset) -> list[str]:
        normalized = value.lower().strip()
        if not normalized:
            return []
        scored = [
            (category.category_id, score_category(normalized, category))
            for category in self._categories
            if category.category_id in reference.valid_category_ids
        ]
        return rank_candidates(scored, floor=CATEGORY_SCORE_FLOOR, limit=MAX_SUGGESTIONS)

    def _validate_project(
        self,
        value: str,
        reference: ReferenceDataset,
        row_index: int,
    ) -> list[FieldIssue]:
        if value in reference.valid_project_ids:
            return []

        alias_target = reference.project_aliases.get(value.lower().strip())
        if alias_target and alias_target != value and alias_target in reference.valid_project_ids:
            return [
                FieldIssue(
                    row_index=row_index,
                    field_id=PROJECT_FIELD_ID,
                    severity=Severity.WARNING,
                    message=f'"{value}" might be "{alias_target}". Click to apply the suggestion.',
                    suggestions=(alias_target,),
                    is_conversion=True,
                )
            ]

        by_id = {project.owner_project: project for project in reference.projects}
        suggestions = suggest_projects(value, reference.projects)
        if not suggestions:
            suggestions = [
                project.owner_project
                for project in fallback_similar_projects(value, reference.projects)
            ]

        if suggestions:
            return [
                self._error(
                    row_index,
                    PROJECT_FIELD_ID,
                    f'Invalid project ID: "{value}". Did you mean one of these projects?',
                    suggestions=tuple(suggestions),
                    similar_entries=tuple(by_id[project_id].label for project_id in suggestions),
                )
            ]

        logger.debug(
            "Project not found row_index=%s value=%s directory_size=%s",
            row_index,
            value,
            len(reference.projects),
        )
        return [
            FieldIssue(
                row_index=row_index,
                field_id=PROJECT_FIELD_ID,
                severity=Severity.ERROR,
                message=f'Invalid project ID: "{value}". Project not found.',
                offers_add_new=True,
            )
        ]

    def _check_similar_entries(
        self,
        field_id: str,
        value: str,
        projects: Sequence[ProjectRecord],
        row_index: int,
    ) -> list[FieldIssue]:
        matches = find_similar_projects(value, field_id, projects)
        if not matches:
            return []
        labels = tuple(project.label for project in matches)
        quoted = ", ".join(f'"{label}"' for label in labels)
        return [
            FieldIssue(
                row_index=row_index,
                field_id=field_id,
                severity=Severity.WARNING,
                message=f"This {field_id} is very similar to existing entries in {quoted}.",
                similar_entries=labels,
            )
        ]

    @staticmethod
    def _error(
        row_index: int,
        field_id: str,
        message: str,
        *,
        suggestions: tuple[str, ...] = (),
        similar_entries: tuple[str, ...] = (),
    ) -> FieldIssue:
        return FieldIssue(
            row_index=row_index,
            field_id=field_id,
            severity=Severity.ERROR,
            message=message,
            suggestions=suggestions,
            similar_entries=similar_entries,
        )


def suggest_projects(value: str, projects: Sequence[ProjectRecord]) -> list[str]:
    """
    Rank directory projects by blended score against ``value``.
    """

    normalized = value.lower().strip()
    if not normalized or not projects:
        return []
    scored = [
        (project.owner_project, score_project(normalized, project.owner_project, project.display_name))
        for project in projects
        if project.owner_project
    ]
    return rank_candidates(scored, floor=PROJECT_SCORE_FLOOR, limit=MAX_SUGGESTIONS)


def fallback_similar_projects(value: str, projects: Sequence[ProjectRecord]) -> list[ProjectRecord]:
    """
    Name and token based lookup used when scoring finds nothing.
    """

    normalized = value.lower().strip()
    if not normalized:
        return []
    similar = [
        project
        for project in projects
        if is_similar_value(project.owner_project, normalized, "name")
        or is_similar_value(project.display_name, normalized, "display_name")
    ]
    return similar[:MAX_FALLBACK_PROJECT_SUGGESTIONS]


def find_similar_projects(
    value: str,
    field_type: str,
    projects: Sequence[ProjectRecord],
) -> list[ProjectRecord]:
    """
    Return directory entries whose ``field_type`` attribute matches ``value``.

    Exact case-insensitive matches win; only when there are none are
    similarity matches returned.
    """

    attribute = SIMILARITY_FIELDS.get(field_type)
    normalized = value.lower().strip()
    if attribute is None or not normalized or not projects:
        return []

    def _values(project: ProjectRecord) -> list[str]:
        raw = project.value_for(attribute)
        if isinstance(raw, (list, tuple)):
            return [str(item) for item in raw if item]
        return [str(raw)] if raw else []

    exact = [
        project
        for project in projects
        if any(candidate.lower() == normalized for candidate in _values(project))
    ]
    if exact:
        return exact

    return [
        project
        for project in projects
        if any(is_similar_value(candidate, normalized, field_type) for candidate in _values(project))
    ]
