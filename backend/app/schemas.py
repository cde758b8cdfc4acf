"""
Pydantic schemas for request and response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from issuetracker.models import IssueStatus, Priority
from issuetracker.roles import Role


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    role: Role


# =============================================================================
# Issues
# =============================================================================


class IssueCreateRequest(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    description: str = ""
    reporter_id: int
    priority: Priority | None = Field(
        default=None, description="Defaults to MAJOR when omitted"
    )


class IssueModifyRequest(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    description: str = ""
    # Written as given; omitting it clears the issue's priority
    priority: Priority | None = None
    user_id: int


class AssigneeRequest(BaseModel):
    user_id: int = Field(description="User performing the assignment")
    assignee_id: int


class StatusChangeRequest(BaseModel):
    user_id: int = Field(description="User advancing the issue")


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    title: str
    description: str | None = None
    priority: Priority | None = None
    status: IssueStatus
    reporter_id: int | None = None
    assignee_id: int | None = None
    fixer_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class IssueListResponse(BaseModel):
    issues: list[IssueResponse]
    total: int


class IssueStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status_distribution: dict[IssueStatus, int] = Field(default_factory=dict)
    reporter_distribution: dict[str, int] = Field(default_factory=dict)
    assignee_distribution: dict[str, int] = Field(default_factory=dict)
    top_commented_issue_titles: list[str] = Field(default_factory=list)


# =============================================================================
# Comments
# =============================================================================


class CommentCreateRequest(BaseModel):
    user_id: int
    message: str = Field(min_length=1)


class CommentModifyRequest(BaseModel):
    user_id: int
    message: str = Field(min_length=1)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message: str
    created_at: datetime | None = None
    author_id: int | None = None


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    total: int
