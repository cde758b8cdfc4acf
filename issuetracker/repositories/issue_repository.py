"""
Issue repository with the lookups used by the issue lifecycle service.
"""

from sqlalchemy.orm import selectinload

from issuetracker.models import Issue, IssueStatus, Project, User

from .base import BaseRepository


class IssueRepository(BaseRepository[Issue]):
    """
    Repository for Issue operations.

    All list queries return issues in ID order so callers that depend on
    enumeration order (statistics ties, recommendation) are deterministic.
    """

    model = Issue

    def find_all_by_project(self, project: Project) -> list[Issue]:
        """Get all issues of a project with their comments eagerly loaded."""
        return (
            self.session.query(Issue)
            .options(selectinload(Issue.comments))
            .filter(Issue.project_id == project.id)
            .order_by(Issue.id)
            .all()
        )

    def find_all_by_project_and_status(self, project: Project, status: IssueStatus) -> list[Issue]:
        """Get the issues of a project currently in the given status."""
        return (
            self.session.query(Issue)
            .filter(Issue.project_id == project.id, Issue.status == status)
            .order_by(Issue.id)
            .all()
        )

    def find_all_by_assignee(self, assignee: User) -> list[Issue]:
        return (
            self.session.query(Issue)
            .filter(Issue.assignee_id == assignee.id)
            .order_by(Issue.id)
            .all()
        )

    def find_all_by_fixer(self, fixer: User) -> list[Issue]:
        """Get the issues a user moved to FIXED."""
        return (
            self.session.query(Issue)
            .filter(Issue.fixer_id == fixer.id)
            .order_by(Issue.id)
            .all()
        )
