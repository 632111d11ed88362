"""
label_import/api/routers/projects.py

Project directory HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from label_import.api.routers.labels import field_issue_response
from label_import.schemas.csv_import import ProjectCheckRequest, ProjectCheckResponse
from label_import.services.project_check_service import ProjectCheckService, get_project_check_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("/check-similar", response_model=ProjectCheckResponse)
def check_similar_projects(
    payload: ProjectCheckRequest,
    check_service: ProjectCheckService = Depends(get_project_check_service),
) -> ProjectCheckResponse:
    """
    Warn about existing directory entries that resemble a new registration.
    """

    issues = check_service.check(payload.model_dump())
    return ProjectCheckResponse(warnings=[field_issue_response(issue) for issue in issues])
