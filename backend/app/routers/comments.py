"""
Comment endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from issuetracker.services import CommentService

from ..dependencies import get_comment_service
from ..schemas import (
    CommentCreateRequest,
    CommentListResponse,
    CommentModifyRequest,
    CommentResponse,
)

router = APIRouter(tags=["comments"])


@router.post(
    "/issues/{issue_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    issue_id: int,
    request: CommentCreateRequest,
    service: CommentService = Depends(get_comment_service),
):
    return service.create(issue_id, request.user_id, request.message)


@router.get("/issues/{issue_id}/comments", response_model=CommentListResponse)
def list_comments(
    issue_id: int,
    service: CommentService = Depends(get_comment_service),
):
    comments = service.get_list(issue_id)
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments],
        total=len(comments),
    )


@router.put("/comments/{comment_id}", response_model=CommentResponse)
def modify_comment(
    comment_id: int,
    request: CommentModifyRequest,
    service: CommentService = Depends(get_comment_service),
):
    """Edit a comment. Only its author may do so."""
    return service.modify(comment_id, request.user_id, request.message)


@router.delete("/comments/{comment_id}", response_model=CommentResponse)
def delete_comment(
    comment_id: int,
    user_id: int = Query(..., description="Author of the comment"),
    service: CommentService = Depends(get_comment_service),
):
    comment = service.delete(comment_id, user_id)
    return CommentResponse.model_validate(comment)
