"""Tests for project statistics aggregation."""

from issuetracker.models import Comment, Issue, IssueStatus, User
from issuetracker.roles import Role
from issuetracker.services.statistics import NO_ASSIGNEE, NO_REPORTER, summarize_issues


def _issue(title: str, status=IssueStatus.NEW, reporter=None, assignee=None, comments: int = 0) -> Issue:
    issue = Issue(title=title, status=status, reporter=reporter, assignee=assignee)
    issue.comments.extend(Comment(message=str(n)) for n in range(comments))
    return issue


def test_status_distribution():
    issues = [_issue("a"), _issue("b"), _issue("c", status=IssueStatus.ASSIGNED)]
    stats = summarize_issues(issues)
    assert stats.status_distribution == {IssueStatus.NEW: 2, IssueStatus.ASSIGNED: 1}


def test_reporter_and_assignee_distribution_use_placeholders():
    alice = User(username="alice", role=Role.TESTER)
    bob = User(username="bob", role=Role.DEVELOPER)
    issues = [
        _issue("a", reporter=alice, assignee=bob),
        _issue("b", reporter=alice),
        _issue("c"),
    ]
    stats = summarize_issues(issues)
    assert stats.reporter_distribution == {"alice": 2, NO_REPORTER: 1}
    assert stats.assignee_distribution == {"bob": 1, NO_ASSIGNEE: 2}


def test_top_commented_is_stable_and_limited():
    counts = [5, 3, 3, 0, 1, 4]
    issues = [_issue(f"issue{i}", comments=n) for i, n in enumerate(counts)]

    stats = summarize_issues(issues)

    assert stats.top_commented_issue_titles == ["issue0", "issue5", "issue1", "issue2", "issue4"]


def test_top_commented_custom_limit():
    issues = [_issue("a", comments=1), _issue("b", comments=2)]
    assert summarize_issues(issues, top_commented_limit=1).top_commented_issue_titles == ["b"]


def test_empty_project():
    stats = summarize_issues([])
    assert stats.status_distribution == {}
    assert stats.reporter_distribution == {}
    assert stats.assignee_distribution == {}
    assert stats.top_commented_issue_titles == []


def test_comment_count_follows_comments():
    issue = _issue("a", comments=2)
    assert issue.comment_count == 2
    issue.comments.pop()
    assert issue.comment_count == 1
