"""
Role lookups against the identity (user) service.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from app.errors import CollaboratorError

logger = logging.getLogger(__name__)


class IdentityClient:
    """Resolves a caller id to the role recorded by the identity service."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def resolve_role(self, caller_id: str) -> str:
        """
        Return the caller's role.

        Raises CollaboratorError when the lookup times out, fails at the
        transport level, returns a non-success status or an undecodable body.
        A body without a role resolves to an empty string.
        """
        url = f"{self._base_url}/users/{quote(caller_id, safe='')}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise CollaboratorError(
                "Failed to resolve caller role",
                {"collaborator": "identity", "reason": exc.__class__.__name__},
            ) from exc

        if resp.status_code != httpx.codes.OK:
            raise CollaboratorError(
                "Failed to resolve caller role",
                {"collaborator": "identity", "status_code": resp.status_code},
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise CollaboratorError(
                "Failed to resolve caller role",
                {"collaborator": "identity", "reason": "malformed response"},
            ) from exc

        if not isinstance(payload, dict):
            raise CollaboratorError(
                "Failed to resolve caller role",
                {"collaborator": "identity", "reason": "malformed response"},
            )
        role = payload.get("role")
        return role if isinstance(role, str) else ""
