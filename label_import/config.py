"""
label_import/config.py

Environment-driven settings for the label import service.

Every getter is cached; tests clear the caches after changing the
environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_PROJECTS_URL = "https://api.growthepie.xyz/v1/labels/projects.json"

TRUE_ENV_VALUES = {"1", "true", "yes", "on"}

_Number = TypeVar("_Number", int, float)


def load_env_files() -> None:
    """
    Load KEY=VALUE lines from `.env` then `.env.local` in the project root.
    Variables already set in the process environment win.
    """

    project_root = Path(__file__).resolve().parents[1]
    for env_path in (project_root / ".env", project_root / ".env.local"):
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            key, sep, value = raw_line.strip().partition("=")
            key = key.strip()
            if not sep or not key or key.startswith("#"):
                continue
            os.environ.setdefault(key, value.strip().strip('"').strip("'"))


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _read_env(name: str) -> str | None:
    """
    Return the stripped value of ``name``, or None when unset or blank.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_bool_env(name: str, default: bool) -> bool:
    value = _read_env(name)
    if value is None:
        return default
    return value.lower() in TRUE_ENV_VALUES


def _get_number_env(name: str, cast: Callable[[str], _Number], default: _Number) -> _Number:
    value = _read_env(name)
    if value is None:
        return default
    try:
        return cast(value)
    except ValueError:
        logger.warning("Ignoring malformed setting name=%s value=%r default=%s", name, value, default)
        return default


def _get_int_env(name: str, default: int) -> int:
    return _get_number_env(name, int, default)


def _get_float_env(name: str, default: float) -> float:
    return _get_number_env(name, float, default)


def _get_optional_float_env(name: str) -> float | None:
    value = _read_env(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring malformed setting name=%s value=%r", name, value)
        return None


def _get_str_env(name: str, default: str) -> str:
    return _read_env(name) or default


@dataclass(frozen=True)
class LabelImportSettings:
    """
    Runtime settings for bulk label CSV import.

    ``max_diagnostics`` limits the warnings and issues listed in one parse
    response. Parse results themselves always keep every diagnostic.
    """

    max_submission_rows: int = 30
    max_diagnostics: int = 5000
    log_diagnostics: bool = False
    preserve_unknown_chain: bool = False
    contract_name_max_length: int = 40


@dataclass(frozen=True)
class ExternalHTTPSettings:
    """
    Shared HTTP behavior settings for external connectors.
    """

    timeout_seconds: float = 15.0
    max_retries: int = 2
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0


@dataclass(frozen=True)
class ProjectDirectorySettings:
    """
    Remote project directory settings.

    ``ttl_seconds=None`` keeps a loaded directory for the process lifetime.
    """

    enabled: bool = True
    url: str = DEFAULT_PROJECTS_URL
    ttl_seconds: float | None = None


@lru_cache(maxsize=1)
def get_label_import_settings() -> LabelImportSettings:
    """
    Return cached label import settings from environment variables.
    """

    return LabelImportSettings(
        max_submission_rows=max(1, _get_int_env("LABEL_IMPORT_MAX_SUBMISSION_ROWS", 30)),
        max_diagnostics=max(1, _get_int_env("LABEL_IMPORT_MAX_DIAGNOSTICS", 5000)),
        log_diagnostics=_get_bool_env("LABEL_IMPORT_LOG_DIAGNOSTICS", False),
        preserve_unknown_chain=_get_bool_env("LABEL_IMPORT_PRESERVE_UNKNOWN_CHAIN", False),
        contract_name_max_length=max(1, _get_int_env("LABEL_IMPORT_CONTRACT_NAME_MAX_LENGTH", 40)),
    )


@lru_cache(maxsize=1)
def get_external_http_settings() -> ExternalHTTPSettings:
    """
    Return shared connector HTTP settings from environment variables.
    """

    return ExternalHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("EXTERNAL_HTTP_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("EXTERNAL_HTTP_MAX_RETRIES", 2)),
        backoff_initial_seconds=max(0.1, _get_float_env("EXTERNAL_HTTP_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("EXTERNAL_HTTP_BACKOFF_MULTIPLIER", 2.0)),
    )


@lru_cache(maxsize=1)
def get_project_directory_settings() -> ProjectDirectorySettings:
    """
    Return project directory connector settings from environment variables.
    """

    ttl_seconds = _get_optional_float_env("LABEL_IMPORT_PROJECTS_TTL_SECONDS")
    if ttl_seconds is not None and ttl_seconds <= 0:
        ttl_seconds = None
    return ProjectDirectorySettings(
        enabled=_get_bool_env("LABEL_IMPORT_PROJECTS_ENABLED", True),
        url=_get_str_env("LABEL_IMPORT_PROJECTS_URL", DEFAULT_PROJECTS_URL),
        ttl_seconds=ttl_seconds,
    )
