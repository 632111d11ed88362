from __future__ import annotations

import pytest

from label_import.config import (
    get_external_http_settings,
    get_label_import_settings,
    get_project_directory_settings,
)
from label_import.connectors.project_directory import get_project_directory_cache
from label_import.services.csv_import_service import get_csv_import_service
from label_import.services.project_check_service import get_project_check_service
from label_import.services.submission_gate import get_submission_gate

VALID_ADDRESS = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"

_CACHED_FACTORIES = (
    get_label_import_settings,
    get_external_http_settings,
    get_project_directory_settings,
    get_project_directory_cache,
    get_csv_import_service,
    get_project_check_service,
    get_submission_gate,
)


def _clear_factories() -> None:
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep every test off the network and free of cached settings."""
    monkeypatch.setenv("LABEL_IMPORT_PROJECTS_ENABLED", "false")
    _clear_factories()
    yield
    _clear_factories()
