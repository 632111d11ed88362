"""
label_import/reference/dataset.py

Assembly of the reference vocabularies handed to the validator.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from label_import.domain.labels import ProjectRecord, ReferenceDataset
from label_import.reference.categories import CATEGORY_ALIASES, VALID_CATEGORY_IDS
from label_import.reference.chains import CHAIN_ALIASES, VALID_CHAIN_IDS


def build_reference_dataset(
    projects: Sequence[ProjectRecord] = (),
    *,
    project_aliases: Mapping[str, str] | None = None,
) -> ReferenceDataset:
    return ReferenceDataset(
        valid_chain_ids=VALID_CHAIN_IDS,
        chain_aliases=dict(CHAIN_ALIASES),
        valid_category_ids=VALID_CATEGORY_IDS,
        category_aliases=dict(CATEGORY_ALIASES),
        valid_project_ids=frozenset(project.owner_project for project in projects),
        project_aliases={key.lower(): value for key, value in (project_aliases or {}).items()},
        projects=tuple(projects),
    )
