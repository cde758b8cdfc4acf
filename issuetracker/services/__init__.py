"""
Issue tracker services.

Services hold the business rules; repositories hold the queries.
"""

from .comment_service import CommentService
from .issue_service import IssueService
from .statistics import IssueStatistics

__all__ = [
    "CommentService",
    "IssueService",
    "IssueStatistics",
]
