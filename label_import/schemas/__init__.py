"""
label_import/schemas package marker.
"""

from label_import.schemas.csv_import import (
    FieldIssueResponse,
    ParseResultResponse,
    ProjectCheckResponse,
    SubmissionCheckResponse,
)

__all__ = [
    "FieldIssueResponse",
    "ParseResultResponse",
    "ProjectCheckResponse",
    "SubmissionCheckResponse",
]
