"""
User roles and the capabilities they grant.

Roles form a closed set. What a role may do is decided by membership in
ROLE_CAPABILITIES, so one role can hold several capabilities and a
capability can be shared by several roles.
"""

from enum import Enum


class Role(str, Enum):
    """Role tag stored on every user."""

    ADMIN = "ADMIN"
    PROJECT_LEADER = "PROJECT_LEADER"
    DEVELOPER = "DEVELOPER"
    TESTER = "TESTER"
    USER = "USER"


class Capability(str, Enum):
    """Mutations that are gated by a user's role."""

    MANAGE_ISSUE = "MANAGE_ISSUE"  # create, modify, delete issues
    SET_ASSIGNEE = "SET_ASSIGNEE"
    FIX_ASSIGNED = "FIX_ASSIGNED"  # ASSIGNED -> FIXED, also makes a user assignable
    RESOLVE_FIXED = "RESOLVE_FIXED"  # FIXED -> RESOLVED
    CLOSE_RESOLVED = "CLOSE_RESOLVED"  # RESOLVED/REOPENED -> CLOSE and CLOSE -> REOPENED


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(
        {
            Capability.MANAGE_ISSUE,
            Capability.SET_ASSIGNEE,
            Capability.RESOLVE_FIXED,
            Capability.CLOSE_RESOLVED,
        }
    ),
    Role.PROJECT_LEADER: frozenset({Capability.SET_ASSIGNEE, Capability.CLOSE_RESOLVED}),
    Role.DEVELOPER: frozenset({Capability.FIX_ASSIGNED}),
    Role.TESTER: frozenset({Capability.MANAGE_ISSUE, Capability.RESOLVE_FIXED}),
    Role.USER: frozenset(),
}


def capabilities_of(role: Role) -> frozenset[Capability]:
    """Capabilities granted to a role (empty for unknown roles)."""
    return ROLE_CAPABILITIES.get(role, frozenset())


def has_capability(role: Role, capability: Capability) -> bool:
    """Check whether a role grants the given capability."""
    return capability in capabilities_of(role)


__all__ = ["Capability", "ROLE_CAPABILITIES", "Role", "capabilities_of", "has_capability"]
