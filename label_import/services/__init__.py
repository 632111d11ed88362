"""
label_import/services package marker.
"""

from label_import.services.csv_import_service import (
    CSVDecodeError,
    CSVImportService,
    get_csv_import_service,
)
from label_import.services.project_check_service import ProjectCheckService, get_project_check_service
from label_import.services.submission_gate import SubmissionCheck, SubmissionGate, get_submission_gate

__all__ = [
    "CSVDecodeError",
    "CSVImportService",
    "ProjectCheckService",
    "SubmissionCheck",
    "SubmissionGate",
    "get_csv_import_service",
    "get_project_check_service",
    "get_submission_gate",
]
