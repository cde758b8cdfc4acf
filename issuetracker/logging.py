"""
Structured logging for the issue tracker.

Services log snake_case events through ``get_logger``. Each HTTP request is
bound to a request id plus the project, issue, comment or user ids it
targets, so every event logged while serving it carries them.
"""

import logging
import re
import sys
import time
import uuid
from collections.abc import Callable
from functools import lru_cache, wraps
from typing import Any, TypeVar
from urllib.parse import parse_qs

import structlog
from structlog.types import EventDict, Processor

from .config import get_settings
from .errors import IssueTrackerError

F = TypeVar("F", bound=Callable[..., Any])

_ID_KEYS = {
    "projects": "project_id",
    "issues": "issue_id",
    "comments": "comment_id",
    "users": "user_id",
}
_RESOURCE_PATH = re.compile(r"/(projects|issues|comments|users)/(\d+)")


def _tag_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "issue_tracker")
    return event_dict


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO", json_logs: bool | None = None) -> None:
    """
    Route structlog through stdlib logging. Call once at startup.

    Args:
        level: Root log level name
        json_logs: Render JSON lines instead of console output. Defaults to
            the ``log_json`` setting.
    """
    if json_logs is None:
        json_logs = get_settings().log_json

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _tag_service,
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def timed(operation: str) -> Callable[[F], F]:
    """
    Log the duration and outcome of a service call as ``operation_timed``.

    The outcome is ``ok``, the ErrorCode name of an IssueTrackerError, or
    ``error`` for anything else. Exceptions propagate unchanged.

    Usage:
        @timed("candidate_user")
        def candidate_user(self, issue_id): ...
    """

    def decorator(func: F) -> F:
        logger = structlog.get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            outcome = "ok"
            try:
                return func(*args, **kwargs)
            except IssueTrackerError as e:
                outcome = e.code.name
                raise
            except Exception:
                outcome = "error"
                raise
            finally:
                logger.info(
                    "operation_timed",
                    operation=operation,
                    outcome=outcome,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )

        return wrapper  # type: ignore[return-value]

    return decorator


def request_context(path: str, query_string: bytes = b"") -> dict[str, int]:
    """
    Resource ids a request targets, read from its path and query string.

    ``/api/v1/projects/3/issues`` gives ``{"project_id": 3}``. A numeric
    ``user_id`` query parameter, as sent on deletes, is picked up when the
    path does not already name a user.
    """
    context = {_ID_KEYS[kind]: int(ident) for kind, ident in _RESOURCE_PATH.findall(path)}
    user_ids = parse_qs(query_string.decode("latin-1")).get("user_id", [])
    if user_ids and user_ids[0].isdigit():
        context.setdefault("user_id", int(user_ids[0]))
    return context


class RequestLoggingMiddleware:
    """ASGI middleware binding request context and logging one event per request."""

    def __init__(self, app):
        self.app = app
        self.logger = structlog.get_logger("http")

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "")
        path = scope.get("path", "")
        status_code = 500
        start = time.perf_counter()

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        with structlog.contextvars.bound_contextvars(
            request_id=uuid.uuid4().hex[:8],
            **request_context(path, scope.get("query_string", b"")),
        ):
            try:
                await self.app(scope, receive, send_wrapper)
            finally:
                if status_code >= 500:
                    level = logging.ERROR
                elif status_code >= 400:
                    level = logging.WARNING
                else:
                    level = logging.INFO
                self.logger.log(
                    level,
                    "request_handled",
                    method=method,
                    path=path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - start) * 1000, 2),
                )


__all__ = ["RequestLoggingMiddleware", "configure_logging", "get_logger", "request_context", "timed"]
