"""
Issue lifecycle service.

Creates, edits and deletes issues under role checks, drives the status
state machine, recommends an assignee and aggregates project statistics.

Every operation loads what it needs, runs all of its checks, and only then
mutates and saves the issue once. A failed check leaves nothing changed.

Usage:
    from issuetracker.db import db
    from issuetracker.services import IssueService

    with db.session() as session:
        service = IssueService.from_session(session)
        issue = service.create(project_id, "Crash on save", "Steps...", reporter_id)
"""

from datetime import datetime, timezone

import structlog
from sqlalchemy.orm import Session

from issuetracker import lifecycle
from issuetracker.config import Settings, get_settings
from issuetracker.errors import ErrorCode, IssueTrackerError
from issuetracker.logging import get_logger, timed
from issuetracker.models import DEFAULT_PRIORITY, Issue, IssueStatus, Priority, Project, User
from issuetracker.repositories import (
    IssueRepository,
    ProjectContributorRepository,
    ProjectRepository,
    UserRepository,
)
from issuetracker.roles import Capability

from .recommendation import pick_best, score_developer, tokenize
from .statistics import IssueStatistics, summarize_issues

logger = get_logger("service.issue")


class IssueService:
    """
    Issue operations over the issue, user, project and contributor stores.

    Failures raise IssueTrackerError tagged with an ErrorCode.
    """

    def __init__(
        self,
        issue_repo: IssueRepository,
        user_repo: UserRepository,
        project_repo: ProjectRepository,
        contributor_repo: ProjectContributorRepository,
        settings: Settings | None = None,
    ):
        self.issue_repo = issue_repo
        self.user_repo = user_repo
        self.project_repo = project_repo
        self.contributor_repo = contributor_repo
        self.settings = settings or get_settings()

    @classmethod
    def from_session(cls, session: Session, settings: Settings | None = None) -> "IssueService":
        """Build a service whose repositories share one session."""
        return cls(
            IssueRepository(session),
            UserRepository(session),
            ProjectRepository(session),
            ProjectContributorRepository(session),
            settings=settings,
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def _get_project(self, project_id: int) -> Project:
        project = self.project_repo.get_by_id(project_id)
        if project is None:
            raise IssueTrackerError(ErrorCode.PROJECT_NOT_FOUND)
        return project

    def _get_user(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise IssueTrackerError(ErrorCode.USER_NOT_FOUND)
        return user

    def _require(
        self,
        user: User,
        capability: Capability,
        code: ErrorCode = ErrorCode.ROLE_FORBIDDEN,
    ) -> None:
        if not user.can(capability):
            logger.warning(
                "issue_role_forbidden",
                user_id=user.id,
                role=user.role.value,
                capability=capability.value,
                code=code.name,
            )
            raise IssueTrackerError(code)

    def get_issue(self, issue_id: int) -> Issue:
        """Get an issue by ID or raise ISSUE_NOT_FOUND."""
        issue = self.issue_repo.get_by_id(issue_id)
        if issue is None:
            raise IssueTrackerError(ErrorCode.ISSUE_NOT_FOUND)
        return issue

    def get_list(self, project_id: int, status: IssueStatus | None = None) -> list[Issue]:
        """List a project's issues, optionally only those in one status."""
        project = self._get_project(project_id)
        if status is None:
            return self.issue_repo.find_all_by_project(project)
        return self.issue_repo.find_all_by_project_and_status(project, status)

    def get_list_by_assignee(self, user_id: int) -> list[Issue]:
        """List the issues assigned to a user."""
        user = self._get_user(user_id)
        return self.issue_repo.find_all_by_assignee(user)

    # =========================================================================
    # Creation & mutation
    # =========================================================================

    def create(
        self,
        project_id: int,
        title: str,
        description: str,
        reporter_id: int,
        priority: Priority | None = None,
    ) -> Issue:
        """
        Report a new issue on a project.

        Args:
            project_id: Project the issue belongs to
            title: Issue title
            description: Issue description
            reporter_id: User reporting the issue, needs MANAGE_ISSUE
            priority: Optional priority, DEFAULT_PRIORITY when omitted

        Returns:
            The persisted issue in status NEW
        """
        project = self._get_project(project_id)
        reporter = self._get_user(reporter_id)
        self._require(reporter, Capability.MANAGE_ISSUE)

        issue = Issue(
            project=project,
            title=title,
            description=description,
            priority=priority if priority is not None else DEFAULT_PRIORITY,
            status=IssueStatus.NEW,
            reporter=reporter,
            created_at=datetime.now(timezone.utc),
        )
        self.issue_repo.save(issue)

        logger.info("issue_created", issue_id=issue.id, project_id=project.id, reporter_id=reporter.id)
        return issue

    def modify(
        self,
        issue_id: int,
        title: str,
        description: str,
        priority: Priority | None,
        user_id: int,
    ) -> Issue:
        """
        Overwrite an issue's title, description and priority.

        The priority is written as given, so passing None clears it. The
        current status does not matter.
        """
        issue = self.get_issue(issue_id)
        user = self._get_user(user_id)
        self._require(user, Capability.MANAGE_ISSUE)

        issue.title = title
        issue.description = description
        issue.priority = priority
        issue.updated_at = datetime.now(timezone.utc)
        self.issue_repo.save(issue)

        logger.info("issue_modified", issue_id=issue.id, user_id=user.id)
        return issue

    def delete(self, issue_id: int, user_id: int) -> Issue:
        """Delete an issue and return it as it was before deletion."""
        issue = self.get_issue(issue_id)
        user = self._get_user(user_id)
        self._require(user, Capability.MANAGE_ISSUE)

        self.issue_repo.delete(issue)

        logger.info("issue_deleted", issue_id=issue.id, user_id=user.id)
        return issue

    def set_assignee(self, issue_id: int, user_id: int, assignee_id: int) -> Issue:
        """
        Assign an issue and force its status to ASSIGNED.

        The acting user needs SET_ASSIGNEE and the assignee needs
        FIX_ASSIGNED; otherwise ROLE_BAD_REQUEST is raised. The previous
        status is overwritten whatever it was.
        """
        issue = self.get_issue(issue_id)
        user = self._get_user(user_id)
        assignee = self._get_user(assignee_id)
        self._require(user, Capability.SET_ASSIGNEE, ErrorCode.ROLE_BAD_REQUEST)
        self._require(assignee, Capability.FIX_ASSIGNED, ErrorCode.ROLE_BAD_REQUEST)

        previous = issue.status
        issue.assignee = assignee
        issue.status = IssueStatus.ASSIGNED
        self.issue_repo.save(issue)

        logger.info(
            "issue_assigned",
            issue_id=issue.id,
            assignee_id=assignee.id,
            previous_status=previous.value,
        )
        return issue

    def change_status(self, user_id: int, issue_id: int) -> Issue:
        """
        Advance an issue one step along the status state machine.

        Raises:
            IssueTrackerError: METHOD_NOT_ALLOWED for a NEW issue,
                ROLE_FORBIDDEN when the user's role lacks the edge's capability.
        """
        issue = self.get_issue(issue_id)
        user = self._get_user(user_id)

        try:
            transition = lifecycle.advance(issue, user)
        except IssueTrackerError as e:
            logger.warning(
                "issue_status_change_rejected",
                issue_id=issue.id,
                user_id=user.id,
                status=issue.status.value,
                code=e.code.name,
            )
            raise
        self.issue_repo.save(issue)

        logger.info(
            "issue_status_changed",
            issue_id=issue.id,
            user_id=user.id,
            from_status=transition.source.value,
            to_status=transition.target.value,
        )
        return issue

    # =========================================================================
    # Recommendation
    # =========================================================================

    def _project_developers(self, project: Project) -> list[User]:
        """Developers contributing to a project, in user ID order."""
        developers = [user for user in self.user_repo.list_all() if user.is_developer]
        return [
            developer
            for developer in developers
            if project.id in self.contributor_repo.project_ids_of(developer)
        ]

    @timed("candidate_user")
    def candidate_user(self, issue_id: int) -> User:
        """
        Recommend the project developer whose fixed issues best match this one.

        Raises:
            IssueTrackerError: ISSUE_NOT_FOUND for an unknown issue,
                USER_NOT_FOUND when no developer scores above zero.
        """
        issue = self.get_issue(issue_id)
        project = issue.project

        with structlog.contextvars.bound_contextvars(issue_id=issue.id, project_id=project.id):
            title_tokens = tokenize(issue.title)
            description_tokens = tokenize(issue.description)

            scores = (
                score_developer(
                    developer,
                    self.issue_repo.find_all_by_fixer(developer),
                    title_tokens,
                    description_tokens,
                    title_weight=self.settings.recommendation_title_weight,
                    description_weight=self.settings.recommendation_description_weight,
                )
                for developer in self._project_developers(project)
            )
            best = pick_best(scores)

            if best is None:
                logger.info("candidate_not_found")
                raise IssueTrackerError(ErrorCode.USER_NOT_FOUND, "No developer matches this issue")

            logger.info("candidate_selected", developer_id=best.developer.id, points=best.points)
            return best.developer

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_issue_statistics(self, project_id: int) -> IssueStatistics:
        """Aggregate status, reporter, assignee and comment statistics for a project."""
        project = self._get_project(project_id)
        issues = self.issue_repo.find_all_by_project(project)
        return summarize_issues(issues, top_commented_limit=self.settings.statistics_top_commented_limit)


__all__ = ["IssueService"]
