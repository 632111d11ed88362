"""
label_import/services/project_check_service.py

Duplicate check for a new project registration against the directory.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Mapping

from label_import.connectors.project_directory import ProjectDirectoryCache, get_project_directory_cache
from label_import.domain.labels import FieldIssue
from label_import.reference.dataset import build_reference_dataset
from label_import.validators.field_validator import SIMILARITY_FIELDS, FieldValidator

logger = logging.getLogger(__name__)


class ProjectCheckService:
    """
    Warns when registration fields resemble existing directory entries.
    """

    def __init__(
        self,
        *,
        project_cache: ProjectDirectoryCache,
        validator: FieldValidator | None = None,
    ) -> None:
        self._project_cache = project_cache
        self._validator = validator or FieldValidator()

    def check(self, fields: Mapping[str, str | None]) -> list[FieldIssue]:
        reference = build_reference_dataset(self._project_cache.get())
        issues: list[FieldIssue] = []
        for field_id in SIMILARITY_FIELDS:
            value = (fields.get(field_id) or "").strip()
            if value:
                issues.extend(self._validator.validate(field_id, value, reference))
        logger.info(
            "Project similarity check fields=%s warnings=%s directory_size=%s",
            sorted(key for key, value in fields.items() if value),
            len(issues),
            len(reference.projects),
        )
        return issues


@lru_cache(maxsize=1)
def get_project_check_service() -> ProjectCheckService:
    return ProjectCheckService(project_cache=get_project_directory_cache())
