"""
FastAPI dependencies for the application.
"""

import hmac
from typing import Optional

from fastapi import Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.permissions import authorize_admin
from app.db.session import get_db
from app.errors import AuthorizationError
from app.repositories.base import BillingStore, TaskStore
from app.repositories.billing_repository import BillingRepository
from app.repositories.task_repository import TaskRepository
from app.services.billing_service import BillingService
from app.services.identity_client import IdentityClient
from app.services.invoice_client import InvoiceClient
from app.services.task_service import TaskService


def get_task_store(db: AsyncSession = Depends(get_db)) -> TaskStore:
    return TaskRepository(db)


def get_billing_store(db: AsyncSession = Depends(get_db)) -> BillingStore:
    return BillingRepository(db)


def get_invoice_client() -> InvoiceClient:
    return InvoiceClient(
        settings.BILLING_SERVICE_URL,
        settings.TASK_SERVICE_SECRET,
        timeout_seconds=settings.BILLING_TIMEOUT_SECONDS,
    )


def get_identity_client() -> IdentityClient:
    return IdentityClient(
        settings.IDENTITY_SERVICE_URL,
        timeout_seconds=settings.IDENTITY_TIMEOUT_SECONDS,
    )


def get_task_service(
    store: TaskStore = Depends(get_task_store),
    invoice_client: InvoiceClient = Depends(get_invoice_client),
) -> TaskService:
    return TaskService(store, invoice_client)


def get_billing_service(store: BillingStore = Depends(get_billing_store)) -> BillingService:
    return BillingService(store, settings.HOURLY_RATE)


async def get_caller_id(
    user_id_header: Optional[str] = Header(None, alias="User-ID"),
    user_id: Optional[str] = Query(None),
) -> Optional[str]:
    """Caller identity from the User-ID header, falling back to the user_id query parameter."""
    return user_id_header or user_id


async def require_admin(
    caller_id: Optional[str] = Depends(get_caller_id),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> str:
    """
    Gate for destructive endpoints.

    Usage:
        @router.delete("/{task_id}", dependencies=[Depends(require_admin)])
    """
    return await authorize_admin(caller_id, identity_client)


async def require_task_service(
    x_task_service: Optional[str] = Header(None, alias="X-Task-Service"),
) -> None:
    """Only the task service, holding the shared secret, may request invoices."""
    if not x_task_service or not hmac.compare_digest(
        x_task_service.encode("utf-8"), settings.TASK_SERVICE_SECRET.encode("utf-8")
    ):
        raise AuthorizationError("Task service credentials required", resolved=False)
