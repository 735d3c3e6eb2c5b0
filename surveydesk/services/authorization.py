"""Role-based authorization.

A request resolves its caller into one :class:`Principal` exactly once (see
``surveydesk.dependencies.get_principal``). Routers then ask the principal
for a capability instead of comparing role strings.
"""
from __future__ import annotations

from enum import Enum
from uuid import UUID

from surveydesk.models.base import UserRole
from surveydesk.models.user import User


class Capability(str, Enum):
    TAKE_SURVEYS = "take_surveys"
    VIEW_SURVEYS = "view_surveys"
    MANAGE_SURVEYS = "manage_surveys"
    MANAGE_TEMPLATES = "manage_templates"
    MANAGE_GROUPS = "manage_groups"
    MANAGE_USERS = "manage_users"
    VIEW_ANALYTICS = "view_analytics"


class Principal:
    """The authenticated caller of a request."""

    role: UserRole
    capabilities: frozenset[Capability] = frozenset()

    def __init__(self, user: User):
        self.user = user

    @property
    def user_id(self) -> UUID:
        return self.user.user_id

    @property
    def username(self) -> str:
        return self.user.username

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @staticmethod
    def for_user(user: User) -> "Principal":
        """Build the principal variant matching the user's role."""
        if user.role == UserRole.ADMIN.value:
            return AdminPrincipal(user)
        return MemberPrincipal(user)

    def __repr__(self):
        return f"<{self.__class__.__name__}(user_id={self.user_id})>"


class MemberPrincipal(Principal):
    """Regular user: views and answers the surveys assigned to their groups."""

    role = UserRole.USER
    capabilities = frozenset({Capability.TAKE_SURVEYS, Capability.VIEW_SURVEYS})


class AdminPrincipal(Principal):
    """Administrator: every capability."""

    role = UserRole.ADMIN
    capabilities = frozenset(Capability)
