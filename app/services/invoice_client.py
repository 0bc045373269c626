"""
Invoice issuance against the billing service.

One blocking request per "done" transition. Every failure mode surfaces as a
single CollaboratorError; nothing is retried.
"""

import logging
from typing import Optional
from uuid import UUID

import httpx

from app.errors import CollaboratorError

logger = logging.getLogger(__name__)

TASK_SERVICE_HEADER = "X-Task-Service"
INVOICE_PATH = "/billings/for-task"


class InvoiceClient:
    """Requests a billing record for a completed task and returns its id."""

    def __init__(
        self,
        base_url: str,
        secret: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._secret = secret
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def issue(self, *, assignee: str, task_id: UUID, hours: float) -> UUID:
        body = {"assignee": assignee, "task_id": str(task_id), "hours": hours}
        url = f"{self._base_url}{INVOICE_PATH}"
        logger.info("Requesting invoice for task %s (%s hours)", task_id, hours)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.post(url, json=body, headers={TASK_SERVICE_HEADER: self._secret})
        except httpx.HTTPError as exc:
            logger.warning("Invoice request for task %s failed: %s", task_id, exc)
            raise CollaboratorError(
                "Failed to create invoice",
                {"collaborator": "billing", "reason": exc.__class__.__name__},
            ) from exc

        if not resp.is_success:
            logger.warning("Billing service responded with status %s for task %s", resp.status_code, task_id)
            raise CollaboratorError(
                "Failed to create invoice",
                {"collaborator": "billing", "status_code": resp.status_code},
            )

        try:
            invoice_id = UUID(str(resp.json()["id"]))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Undecodable billing response for task %s: %s", task_id, exc)
            raise CollaboratorError(
                "Failed to create invoice",
                {"collaborator": "billing", "reason": "malformed response"},
            ) from exc

        logger.info("Invoice %s issued for task %s", invoice_id, task_id)
        return invoice_id
