"""
label_import/connectors/base.py

Reference-data connector contract and the JSON-over-HTTP fetch it shares.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator

import requests

from label_import.config import ExternalHTTPSettings
from label_import.domain.labels import ProjectRecord

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class ConnectorRequestError(RuntimeError):
    """
    Raised when reference data cannot be fetched or decoded.
    """


@dataclass(frozen=True)
class ConnectorFetchResult:
    source: str
    records: list[ProjectRecord]
    failed_records: int = 0


class BaseConnector(ABC):
    """
    A source of reference records reached over HTTP.

    Subclasses implement ``fetch_records`` on top of ``_get_json``, which
    retries throttling and server errors with exponential backoff.
    """

    def __init__(
        self,
        *,
        source: str,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._http = http_settings
        self._session = session or requests.Session()

    @abstractmethod
    def fetch_records(self) -> ConnectorFetchResult:
        """
        Fetch the source and project it into records.
        """

    def _get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        response = self._send("GET", url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Reference payload is not JSON source=%s url=%s", self.source, url)
            raise ConnectorRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _backoff_delays(self) -> Iterator[float]:
        delay = self._http.backoff_initial_seconds
        for _ in range(self._http.max_retries):
            yield delay
            delay *= self._http.backoff_multiplier

    def _send(self, method: str, url: str, *, params: dict[str, Any] | None = None) -> requests.Response:
        delays = self._backoff_delays()
        attempt = 0
        while True:
            attempt += 1
            try:
                response = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    timeout=self._http.timeout_seconds,
                )
            except (requests.Timeout, requests.ConnectionError) as exc:
                failure: Exception = exc
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    try:
                        response.raise_for_status()
                    except requests.HTTPError as exc:
                        logger.error(
                            "Reference fetch rejected source=%s status=%s url=%s",
                            self.source,
                            response.status_code,
                            url,
                        )
                        raise ConnectorRequestError(
                            f"{self.source}: non-retryable request failure."
                        ) from exc
                    return response
                failure = requests.HTTPError(
                    f"Retryable HTTP status code: {response.status_code}",
                    response=response,
                )

            delay = next(delays, None)
            if delay is None:
                logger.error(
                    "Reference fetch gave up source=%s attempts=%s url=%s error=%s",
                    self.source,
                    attempt,
                    url,
                    failure,
                )
                raise ConnectorRequestError(f"{self.source}: request failed after retries.") from failure

            logger.warning(
                "Reference fetch retry source=%s attempt=%s wait_seconds=%.2f error=%s",
                self.source,
                attempt,
                delay,
                failure,
            )
            time.sleep(delay)
