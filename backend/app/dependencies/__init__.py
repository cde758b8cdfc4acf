"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Database sessions
- Services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from issuetracker.db import get_db
from issuetracker.services import CommentService, IssueService

# =============================================================================
# Service Dependencies
# =============================================================================


def get_issue_service(db: Session = Depends(get_db)) -> IssueService:
    """Get IssueService bound to the request's session."""
    return IssueService.from_session(db)


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    """Get CommentService bound to the request's session."""
    return CommentService.from_session(db)


__all__ = [
    "get_db",
    "get_issue_service",
    "get_comment_service",
]
