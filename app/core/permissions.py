"""
Role-based permission helpers.

Destructive operations are only allowed for callers whose role, looked up
in the identity service on every call, is admin. Any failure to resolve
the role denies the operation.
"""

import logging
from typing import Optional

from app.errors import AuthorizationError, CollaboratorError
from app.services.identity_client import IdentityClient

logger = logging.getLogger(__name__)


class Roles:
    """Roles recognised by the task and billing services."""
    ADMIN = "admin"


def check_is_admin(user_role: Optional[str]) -> bool:
    """Check if user is admin."""
    return user_role == Roles.ADMIN


async def authorize_admin(caller_id: Optional[str], identity_client: IdentityClient) -> str:
    """
    Resolve ``caller_id`` and require the admin role.

    Returns the caller id on success.

    Raises:
        AuthorizationError: 401 when the caller is missing or cannot be
            resolved, 403 when the resolved role is not admin
    """
    if not caller_id:
        logger.warning("Destructive operation rejected: no caller identity")
        raise AuthorizationError("Caller identity required", resolved=False)

    try:
        role = await identity_client.resolve_role(caller_id)
    except CollaboratorError as exc:
        logger.warning("Role resolution for %s failed: %s", caller_id, exc.details)
        raise AuthorizationError(
            "Unable to resolve caller role",
            exc.details,
            resolved=False,
        ) from exc

    if not check_is_admin(role):
        logger.warning("Destructive operation rejected for %s (role=%r)", caller_id, role)
        raise AuthorizationError("Admin access required", {"role": role})

    return caller_id
