"""
Billing business logic service.
"""

import logging
import uuid
from typing import List
from uuid import UUID

from app.errors import NotFoundError
from app.models.billing import Billing
from app.repositories.base import BillingStore
from app.schemas.billing import BillingCreate, BillingUpdate, InvoiceRequest

logger = logging.getLogger(__name__)


def invoice_amount(hours: float, hourly_rate: float) -> float:
    """Amount charged for ``hours`` at the fixed rate."""
    return hours * hourly_rate


class BillingService:
    """Service for billing business logic."""

    def __init__(self, store: BillingStore, hourly_rate: float):
        self.store = store
        self.hourly_rate = hourly_rate

    async def list_billings(self) -> List[Billing]:
        return await self.store.list()

    async def get_billing(self, billing_id: UUID) -> Billing:
        billing = await self.store.get_by_id(billing_id)
        if not billing:
            raise NotFoundError(f"Billing {billing_id} not found")
        return billing

    async def create_billing(self, data: BillingCreate) -> Billing:
        """Create a billing record with caller-supplied amounts."""
        billing = Billing(id=uuid.uuid4(), **data.model_dump())
        return await self.store.create(billing)

    async def issue_for_task(self, data: InvoiceRequest) -> Billing:
        """Create the billing record for a task that has just been marked done."""
        billing = Billing(
            id=uuid.uuid4(),
            user_id=data.assignee,
            task_id=data.task_id,
            hours=data.hours,
            amount=invoice_amount(data.hours, self.hourly_rate),
        )
        billing = await self.store.create(billing)
        logger.info("Billing %s created for task %s (amount=%s)", billing.id, data.task_id, billing.amount)
        return billing

    async def update_billing(self, billing_id: UUID, data: BillingUpdate) -> Billing:
        billing = await self.store.update(billing_id, data.model_dump())
        if not billing:
            raise NotFoundError(f"Billing {billing_id} not found")
        return billing

    async def remove_billing(self, billing_id: UUID) -> None:
        removed = await self.store.delete(billing_id)
        logger.info("Billing %s removed (existed=%s)", billing_id, removed)

    async def remove_all_billings(self) -> int:
        count = await self.store.delete_all()
        logger.info("Removed all billings (%d)", count)
        return count
