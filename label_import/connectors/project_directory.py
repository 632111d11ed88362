"""
label_import/connectors/project_directory.py

Remote project directory connector and the process-wide directory cache.
"""

from __future__ import annotations

import logging
import threading
import time
from functools import lru_cache
from typing import Any, Callable, Sequence

import requests

from label_import.config import (
    ExternalHTTPSettings,
    get_external_http_settings,
    get_project_directory_settings,
)
from label_import.connectors.base import BaseConnector, ConnectorFetchResult, ConnectorRequestError
from label_import.domain.labels import ProjectRecord

logger = logging.getLogger(__name__)

_KNOWN_ATTRIBUTES = ("owner_project", "display_name", "main_github", "website")


def parse_project_payload(payload: Any) -> tuple[list[ProjectRecord], int]:
    """
    Project the columnar directory body into ``ProjectRecord`` values.

    Accepts ``{"data": {"types": [...], "data": [[...]]}}`` and a bare
    ``{"types": [...], "data": [[...]]}``. Null cells are dropped. Rows
    without an ``owner_project`` are counted as failed.
    """

    if not isinstance(payload, dict):
        return [], 0
    body = payload.get("data")
    if not isinstance(body, dict):
        body = payload
    types = body.get("types")
    rows = body.get("data")
    if not isinstance(types, list) or not isinstance(rows, list):
        return [], 0

    records: list[ProjectRecord] = []
    failed = 0
    for row in rows:
        if not isinstance(row, list):
            failed += 1
            continue
        values = {
            str(name): cell
            for name, cell in zip(types, row)
            if cell is not None
        }
        owner_project = values.get("owner_project")
        if not isinstance(owner_project, str) or not owner_project:
            failed += 1
            continue
        records.append(
            ProjectRecord(
                owner_project=owner_project,
                display_name=_optional_str(values.get("display_name")),
                main_github=_optional_str(values.get("main_github")),
                website=_optional_str(values.get("website")),
                extra={key: value for key, value in values.items() if key not in _KNOWN_ATTRIBUTES},
            )
        )
    return records, failed


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class ProjectDirectoryConnector(BaseConnector):
    """
    Fetches the public project directory.
    """

    def __init__(
        self,
        *,
        url: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="project_directory", http_settings=http_settings, session=session)
        self._url = url

    def fetch_records(self) -> ConnectorFetchResult:
        payload = self._get_json(self._url)
        records, failed = parse_project_payload(payload)
        logger.info(
            "Project directory fetched url=%s records=%s failed_records=%s",
            self._url,
            len(records),
            failed,
        )
        return ConnectorFetchResult(source=self.source, records=records, failed_records=failed)


class ProjectDirectoryCache:
    """
    Memoized project directory shared by every import in the process.

    The first caller loads under a lock; concurrent callers wait for that
    load and receive the same tuple. A failed load caches an empty tuple.
    With ``ttl_seconds`` set, a cached value older than the TTL is reloaded
    on the next call.
    """

    def __init__(
        self,
        loader: Callable[[], Sequence[ProjectRecord]],
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._projects: tuple[ProjectRecord, ...] | None = None
        self._loaded_at: float | None = None

    @property
    def is_loaded(self) -> bool:
        return self._projects is not None and not self._is_expired()

    def get(self) -> tuple[ProjectRecord, ...]:
        projects = self._projects
        if projects is not None and not self._is_expired():
            return projects

        with self._lock:
            if self._projects is not None and not self._is_expired():
                return self._projects
            self._projects = self._load()
            self._loaded_at = self._clock()
            return self._projects

    def invalidate(self) -> None:
        with self._lock:
            self._projects = None
            self._loaded_at = None

    def _is_expired(self) -> bool:
        if self._ttl_seconds is None or self._loaded_at is None:
            return False
        return self._clock() - self._loaded_at >= self._ttl_seconds

    def _load(self) -> tuple[ProjectRecord, ...]:
        try:
            return tuple(self._loader())
        except (ConnectorRequestError, requests.RequestException) as exc:
            logger.warning("Project directory unavailable; continuing without projects error=%s", exc)
            return ()


@lru_cache(maxsize=1)
def get_project_directory_cache() -> ProjectDirectoryCache:
    """
    Return the process-wide project directory cache.
    """

    settings = get_project_directory_settings()
    if not settings.enabled:
        return ProjectDirectoryCache(lambda: ())

    connector = ProjectDirectoryConnector(url=settings.url, http_settings=get_external_http_settings())
    return ProjectDirectoryCache(
        lambda: connector.fetch_records().records,
        ttl_seconds=settings.ttl_seconds,
    )
