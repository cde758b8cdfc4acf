"""Comment repository."""

from issuetracker.models import Comment, Issue

from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment operations."""

    model = Comment

    def find_all_by_issue(self, issue: Issue) -> list[Comment]:
        """Get the comments of an issue in creation order."""
        return (
            self.session.query(Comment)
            .filter(Comment.issue_id == issue.id)
            .order_by(Comment.id)
            .all()
        )
