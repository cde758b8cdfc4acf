"""
Issue lifecycle endpoints.

The acting user is passed explicitly as an identifier; authentication is
outside the scope of this API.
"""

from fastapi import APIRouter, Depends, Query, status

from issuetracker.models import IssueStatus
from issuetracker.services import IssueService

from ..dependencies import get_issue_service
from ..schemas import (
    AssigneeRequest,
    IssueCreateRequest,
    IssueListResponse,
    IssueModifyRequest,
    IssueResponse,
    IssueStatisticsResponse,
    StatusChangeRequest,
    UserResponse,
)

router = APIRouter(tags=["issues"])


def _issue_list(issues) -> IssueListResponse:
    return IssueListResponse(
        issues=[IssueResponse.model_validate(issue) for issue in issues],
        total=len(issues),
    )


# =============================================================================
# Project-scoped Endpoints
# =============================================================================


@router.post(
    "/projects/{project_id}/issues",
    response_model=IssueResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_issue(
    project_id: int,
    request: IssueCreateRequest,
    service: IssueService = Depends(get_issue_service),
):
    """Report a new issue on a project."""
    return service.create(
        project_id,
        request.title,
        request.description,
        request.reporter_id,
        request.priority,
    )


@router.get("/projects/{project_id}/issues", response_model=IssueListResponse)
def list_issues(
    project_id: int,
    issue_status: IssueStatus | None = Query(None, alias="status", description="Filter by status"),
    service: IssueService = Depends(get_issue_service),
):
    """List a project's issues, optionally filtered by status."""
    return _issue_list(service.get_list(project_id, issue_status))


@router.get("/projects/{project_id}/issues/statistics", response_model=IssueStatisticsResponse)
def get_statistics(
    project_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """Status, reporter and assignee distributions plus the most commented issues."""
    return IssueStatisticsResponse.model_validate(service.get_issue_statistics(project_id))


@router.get("/users/{user_id}/assigned-issues", response_model=IssueListResponse)
def list_assigned_issues(
    user_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """List the issues assigned to a user."""
    return _issue_list(service.get_list_by_assignee(user_id))


# =============================================================================
# Issue Endpoints
# =============================================================================


@router.get("/issues/{issue_id}", response_model=IssueResponse)
def get_issue(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
):
    return service.get_issue(issue_id)


@router.put("/issues/{issue_id}", response_model=IssueResponse)
def modify_issue(
    issue_id: int,
    request: IssueModifyRequest,
    service: IssueService = Depends(get_issue_service),
):
    """Overwrite an issue's title, description and priority."""
    return service.modify(
        issue_id,
        request.title,
        request.description,
        request.priority,
        request.user_id,
    )


@router.delete("/issues/{issue_id}", response_model=IssueResponse)
def delete_issue(
    issue_id: int,
    user_id: int = Query(..., description="User performing the deletion"),
    service: IssueService = Depends(get_issue_service),
):
    """Delete an issue and return its last state."""
    issue = service.delete(issue_id, user_id)
    return IssueResponse.model_validate(issue)


@router.post("/issues/{issue_id}/assignee", response_model=IssueResponse)
def set_assignee(
    issue_id: int,
    request: AssigneeRequest,
    service: IssueService = Depends(get_issue_service),
):
    """Assign a developer; the issue moves to ASSIGNED."""
    return service.set_assignee(issue_id, request.user_id, request.assignee_id)


@router.post("/issues/{issue_id}/status", response_model=IssueResponse)
def change_status(
    issue_id: int,
    request: StatusChangeRequest,
    service: IssueService = Depends(get_issue_service),
):
    """Advance the issue one step along its lifecycle."""
    return service.change_status(request.user_id, issue_id)


@router.get("/issues/{issue_id}/candidate", response_model=UserResponse)
def get_candidate(
    issue_id: int,
    service: IssueService = Depends(get_issue_service),
):
    """Recommend the developer whose fixed issues best match this one."""
    return service.candidate_user(issue_id)
