"""
Comment service: discussion threads on issues.

Any registered user may comment. Only the author may edit or delete a comment.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from issuetracker.errors import ErrorCode, IssueTrackerError
from issuetracker.logging import get_logger
from issuetracker.models import Comment, Issue, User
from issuetracker.repositories import CommentRepository, IssueRepository, UserRepository

logger = get_logger("service.comment")


class CommentService:
    """Comment operations over the comment, issue and user stores."""

    def __init__(
        self,
        comment_repo: CommentRepository,
        issue_repo: IssueRepository,
        user_repo: UserRepository,
    ):
        self.comment_repo = comment_repo
        self.issue_repo = issue_repo
        self.user_repo = user_repo

    @classmethod
    def from_session(cls, session: Session) -> "CommentService":
        return cls(CommentRepository(session), IssueRepository(session), UserRepository(session))

    def _get_issue(self, issue_id: int) -> Issue:
        issue = self.issue_repo.get_by_id(issue_id)
        if issue is None:
            raise IssueTrackerError(ErrorCode.ISSUE_NOT_FOUND)
        return issue

    def _get_user(self, user_id: int) -> User:
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise IssueTrackerError(ErrorCode.USER_NOT_FOUND)
        return user

    def _get_own_comment(self, comment_id: int, user_id: int) -> Comment:
        comment = self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise IssueTrackerError(ErrorCode.COMMENT_NOT_FOUND)
        user = self._get_user(user_id)
        if comment.author_id != user.id:
            logger.warning("comment_not_author", comment_id=comment.id, user_id=user.id)
            raise IssueTrackerError(ErrorCode.ROLE_FORBIDDEN, "Only the author may change a comment")
        return comment

    def create(self, issue_id: int, user_id: int, message: str) -> Comment:
        """Add a comment to an issue."""
        issue = self._get_issue(issue_id)
        author = self._get_user(user_id)

        comment = Comment(
            issue=issue,
            author=author,
            message=message,
            created_at=datetime.now(timezone.utc),
        )
        self.comment_repo.save(comment)

        logger.info("comment_created", comment_id=comment.id, issue_id=issue.id, author_id=author.id)
        return comment

    def get_list(self, issue_id: int) -> list[Comment]:
        """List an issue's comments in creation order."""
        issue = self._get_issue(issue_id)
        return self.comment_repo.find_all_by_issue(issue)

    def modify(self, comment_id: int, user_id: int, message: str) -> Comment:
        comment = self._get_own_comment(comment_id, user_id)
        comment.message = message
        self.comment_repo.save(comment)

        logger.info("comment_modified", comment_id=comment.id)
        return comment

    def delete(self, comment_id: int, user_id: int) -> Comment:
        """Delete a comment and return it as it was before deletion."""
        comment = self._get_own_comment(comment_id, user_id)
        issue = comment.issue
        # Keep the parent's loaded collection consistent within this session
        if comment in issue.comments:
            issue.comments.remove(comment)
        self.comment_repo.delete(comment)

        logger.info("comment_deleted", comment_id=comment.id, issue_id=issue.id)
        return comment


__all__ = ["CommentService"]
