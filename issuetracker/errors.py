"""
Tagged failures raised by the issue tracker services.

Every failure carries an ErrorCode. The HTTP layer maps the code to a
status and a JSON body in a single exception handler, so services never
import FastAPI.
"""

from enum import Enum
from http import HTTPStatus


class ErrorCode(Enum):
    """Failure kinds with their HTTP status and default message."""

    PROJECT_NOT_FOUND = (HTTPStatus.NOT_FOUND, "Project not found")
    USER_NOT_FOUND = (HTTPStatus.NOT_FOUND, "User not found")
    ISSUE_NOT_FOUND = (HTTPStatus.NOT_FOUND, "Issue not found")
    COMMENT_NOT_FOUND = (HTTPStatus.NOT_FOUND, "Comment not found")
    ROLE_FORBIDDEN = (HTTPStatus.FORBIDDEN, "User role is not allowed to perform this action")
    ROLE_BAD_REQUEST = (HTTPStatus.BAD_REQUEST, "User roles do not allow this assignment")
    METHOD_NOT_ALLOWED = (HTTPStatus.METHOD_NOT_ALLOWED, "A new issue must be assigned before its status can change")

    @property
    def status_code(self) -> int:
        return int(self.value[0])

    @property
    def message(self) -> str:
        return self.value[1]


class IssueTrackerError(Exception):
    """
    Failure raised by a service operation.

    Attributes:
        code: The ErrorCode tag identifying the failure kind
        detail: Human-readable message (defaults to the code's message)
    """

    def __init__(self, code: ErrorCode, detail: str | None = None):
        self.code = code
        self.detail = detail or code.message
        super().__init__(self.detail)

    @property
    def status_code(self) -> int:
        return self.code.status_code

    def __repr__(self) -> str:
        return f"IssueTrackerError({self.code.name}, {self.detail!r})"


__all__ = ["ErrorCode", "IssueTrackerError"]
