"""Per-project issue statistics."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from issuetracker.models import Issue, IssueStatus, User

NO_REPORTER = "No Reporter"
NO_ASSIGNEE = "No Assignee"
TOP_COMMENTED_LIMIT = 5


@dataclass(frozen=True)
class IssueStatistics:
    """Distributions over a project's issues plus its most discussed titles."""

    status_distribution: dict[IssueStatus, int] = field(default_factory=dict)
    reporter_distribution: dict[str, int] = field(default_factory=dict)
    assignee_distribution: dict[str, int] = field(default_factory=dict)
    top_commented_issue_titles: list[str] = field(default_factory=list)


def _username_or(user: User | None, placeholder: str) -> str:
    return user.username if user is not None else placeholder


def summarize_issues(issues: Sequence[Issue], top_commented_limit: int = TOP_COMMENTED_LIMIT) -> IssueStatistics:
    """
    Aggregate a project's issues.

    Top commented titles are sorted by comment count, descending. The sort
    is stable, so issues with equal counts keep their order in ``issues``.
    """
    status_distribution = Counter(issue.status for issue in issues)
    reporter_distribution = Counter(_username_or(issue.reporter, NO_REPORTER) for issue in issues)
    assignee_distribution = Counter(_username_or(issue.assignee, NO_ASSIGNEE) for issue in issues)

    most_commented = sorted(issues, key=lambda issue: issue.comment_count, reverse=True)

    return IssueStatistics(
        status_distribution=dict(status_distribution),
        reporter_distribution=dict(reporter_distribution),
        assignee_distribution=dict(assignee_distribution),
        top_commented_issue_titles=[issue.title for issue in most_commented[:top_commented_limit]],
    )


__all__ = ["IssueStatistics", "NO_ASSIGNEE", "NO_REPORTER", "TOP_COMMENTED_LIMIT", "summarize_issues"]
