"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.
Lookups by ID return None on a miss and never raise.

Usage:
    from issuetracker.repositories import IssueRepository
    from issuetracker.db import db

    with db.session() as session:
        repo = IssueRepository(session)
        issues = repo.find_all_by_project(project)
"""

from .base import BaseRepository
from .comment_repository import CommentRepository
from .issue_repository import IssueRepository
from .project_repository import ProjectContributorRepository, ProjectRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "IssueRepository",
    "ProjectContributorRepository",
    "ProjectRepository",
    "UserRepository",
]
