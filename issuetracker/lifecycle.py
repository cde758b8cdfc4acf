"""
Issue status state machine.

Each status maps to the single transition that may leave it. A NEW issue
has no entry: it has to go through assignment first.

    NEW -(assign)-> ASSIGNED -> FIXED -> RESOLVED -> CLOSE <-> REOPENED
"""

from typing import NamedTuple

from issuetracker.errors import ErrorCode, IssueTrackerError
from issuetracker.models import Issue, IssueStatus, User
from issuetracker.roles import Capability


class Transition(NamedTuple):
    """One edge of the state machine."""

    source: IssueStatus
    target: IssueStatus
    capability: Capability
    records_fixer: bool = False


TRANSITIONS: dict[IssueStatus, Transition] = {
    IssueStatus.ASSIGNED: Transition(
        IssueStatus.ASSIGNED, IssueStatus.FIXED, Capability.FIX_ASSIGNED, records_fixer=True
    ),
    IssueStatus.FIXED: Transition(IssueStatus.FIXED, IssueStatus.RESOLVED, Capability.RESOLVE_FIXED),
    IssueStatus.RESOLVED: Transition(IssueStatus.RESOLVED, IssueStatus.CLOSE, Capability.CLOSE_RESOLVED),
    IssueStatus.REOPENED: Transition(IssueStatus.REOPENED, IssueStatus.CLOSE, Capability.CLOSE_RESOLVED),
    IssueStatus.CLOSE: Transition(IssueStatus.CLOSE, IssueStatus.REOPENED, Capability.CLOSE_RESOLVED),
}


def next_transition(status: IssueStatus) -> Transition:
    """
    Look up the transition leaving a status.

    Raises:
        IssueTrackerError: METHOD_NOT_ALLOWED when the status has no outgoing
            edge (a NEW issue).
    """
    transition = TRANSITIONS.get(status)
    if transition is None:
        raise IssueTrackerError(ErrorCode.METHOD_NOT_ALLOWED)
    return transition


def advance(issue: Issue, actor: User) -> Transition:
    """
    Move an issue one step along the state machine on behalf of actor.

    The issue is left untouched when the status has no outgoing edge or
    when the actor's role lacks the edge's capability.

    Returns:
        The transition that was applied.
    """
    transition = next_transition(issue.status)
    if not actor.can(transition.capability):
        raise IssueTrackerError(ErrorCode.ROLE_FORBIDDEN)

    issue.status = transition.target
    if transition.records_fixer:
        issue.fixer = actor
    return transition


__all__ = ["TRANSITIONS", "Transition", "advance", "next_transition"]
