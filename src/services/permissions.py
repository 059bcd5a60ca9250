"""Identity claims and the role authorization table."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.models.enums import Role
from src.services.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The (user id, role) pair attached to an authenticated request."""

    user_id: int
    role: Role

    @classmethod
    def from_claims(cls, payload: dict[str, Any] | None) -> "Identity":
        """Build an identity from decoded token claims."""
        if not payload:
            raise Unauthorized("Invalid authentication credentials")
        try:
            return cls(user_id=int(payload["sub"]), role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError):
            raise Unauthorized("Invalid authentication credentials") from None


class Operation(str, Enum):
    """Operations gated by role."""

    VIEW_SELF = "view_self"
    CHANGE_OWN_PASSWORD = "change_own_password"
    BROWSE_STORES = "browse_stores"
    SUBMIT_RATING = "submit_rating"
    VIEW_OWNER_DASHBOARD = "view_owner_dashboard"
    ADMIN_VIEW_STATS = "admin_view_stats"
    ADMIN_LIST_USERS = "admin_list_users"
    ADMIN_VIEW_USER = "admin_view_user"
    ADMIN_CREATE_USER = "admin_create_user"
    ADMIN_LIST_STORES = "admin_list_stores"
    ADMIN_CREATE_STORE = "admin_create_store"


ALL_ROLES = frozenset(Role)

PERMISSIONS: dict[Operation, frozenset[Role]] = {
    Operation.VIEW_SELF: ALL_ROLES,
    Operation.CHANGE_OWN_PASSWORD: ALL_ROLES,
    Operation.BROWSE_STORES: frozenset({Role.NORMAL_USER, Role.ADMIN}),
    Operation.SUBMIT_RATING: frozenset({Role.NORMAL_USER}),
    Operation.VIEW_OWNER_DASHBOARD: frozenset({Role.STORE_OWNER}),
    Operation.ADMIN_VIEW_STATS: frozenset({Role.ADMIN}),
    Operation.ADMIN_LIST_USERS: frozenset({Role.ADMIN}),
    Operation.ADMIN_VIEW_USER: frozenset({Role.ADMIN}),
    Operation.ADMIN_CREATE_USER: frozenset({Role.ADMIN}),
    Operation.ADMIN_LIST_STORES: frozenset({Role.ADMIN}),
    Operation.ADMIN_CREATE_STORE: frozenset({Role.ADMIN}),
}


def is_allowed(role: Role, operation: Operation) -> bool:
    """Check whether a role may perform an operation."""
    return role in PERMISSIONS.get(operation, frozenset())


def authorize(identity: Identity, operation: Operation) -> None:
    """Raise Forbidden unless the identity's role may perform the operation."""
    if not is_allowed(identity.role, operation):
        logger.warning(
            f"User {identity.user_id} ({identity.role.value}) denied {operation.value}"
        )
        raise Forbidden("You do not have permission to perform this action")
