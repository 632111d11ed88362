"""
Structured logging helpers for label import workflows.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from label_import.domain.labels import Diagnostic, FatalError, RowWarning


def diagnostic_counts(diagnostics: Sequence[Diagnostic]) -> dict[str, int]:
    """
    Tally diagnostics by kind for a summary event.
    """

    counts = {"fatal_errors": 0, "row_warnings": 0, "blocking_issues": 0, "field_warnings": 0}
    for item in diagnostics:
        if isinstance(item, FatalError):
            counts["fatal_errors"] += 1
        elif isinstance(item, RowWarning):
            counts["row_warnings"] += 1
        elif item.is_blocking:
            counts["blocking_issues"] += 1
        else:
            counts["field_warnings"] += 1
    return counts


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """
    Emit one event as a compact JSON line, skipped when ``level`` is disabled.
    """

    if not logger.isEnabledFor(level):
        return
    logger.log(level, json.dumps({"event": event, **fields}, default=str, sort_keys=True))
