"""
SQLAlchemy models for the Issue Tracker.

Single source of truth for all database models. Used by services and the API.

Usage:
    from issuetracker.models import User, Project, Issue, Comment
"""

from .base import Base
from .comment import Comment
from .issue import DEFAULT_PRIORITY, Issue, IssueStatus, Priority
from .project import Project, ProjectContributor
from .user import User

__all__ = [
    # Base
    "Base",
    # User
    "User",
    # Project
    "Project",
    "ProjectContributor",
    # Issue
    "Issue",
    "IssueStatus",
    "Priority",
    "DEFAULT_PRIORITY",
    # Comment
    "Comment",
]
