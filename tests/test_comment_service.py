"""Tests for CommentService."""

import pytest

from issuetracker.errors import ErrorCode, IssueTrackerError
from issuetracker.models import Comment
from issuetracker.services import CommentService


@pytest.fixture
def service(test_session):
    return CommentService.from_session(test_session)


@pytest.fixture
def issue(project, make_issue, team):
    return make_issue(project, "discussed", reporter=team["tester"])


def test_any_user_can_comment(service, issue, team):
    comment = service.create(issue.id, team["user"].id, "me too")

    assert comment.id is not None
    assert comment.author_id == team["user"].id
    assert comment.created_at is not None
    assert service.get_list(issue.id) == [comment]


def test_comments_are_listed_in_creation_order(service, issue, team):
    first = service.create(issue.id, team["dev"].id, "first")
    second = service.create(issue.id, team["tester"].id, "second")
    assert service.get_list(issue.id) == [first, second]


def test_comment_on_unknown_issue(service, team):
    with pytest.raises(IssueTrackerError) as exc_info:
        service.create(404, team["dev"].id, "hello")
    assert exc_info.value.code == ErrorCode.ISSUE_NOT_FOUND


def test_comment_by_unknown_user(service, issue):
    with pytest.raises(IssueTrackerError) as exc_info:
        service.create(issue.id, 404, "hello")
    assert exc_info.value.code == ErrorCode.USER_NOT_FOUND


def test_author_can_modify(service, issue, team):
    comment = service.create(issue.id, team["dev"].id, "typo")
    service.modify(comment.id, team["dev"].id, "fixed")
    assert comment.message == "fixed"


def test_only_author_can_modify(service, issue, team):
    comment = service.create(issue.id, team["dev"].id, "mine")
    with pytest.raises(IssueTrackerError) as exc_info:
        service.modify(comment.id, team["admin"].id, "hijacked")
    assert exc_info.value.code == ErrorCode.ROLE_FORBIDDEN
    assert comment.message == "mine"


def test_delete(service, issue, team, test_session):
    comment = service.create(issue.id, team["dev"].id, "bye")
    comment_id = comment.id

    deleted = service.delete(comment_id, team["dev"].id)

    assert deleted.message == "bye"
    assert test_session.get(Comment, comment_id) is None
    assert service.get_list(issue.id) == []


def test_delete_unknown_comment(service, team):
    with pytest.raises(IssueTrackerError) as exc_info:
        service.delete(404, team["dev"].id)
    assert exc_info.value.code == ErrorCode.COMMENT_NOT_FOUND
