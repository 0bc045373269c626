"""
Billing repository - database operations for Billing.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from app.models.billing import Billing


class BillingRepository:
    """Repository for Billing database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Billing]:
        """List all billing records, newest first."""
        result = await self.db.execute(select(Billing).order_by(Billing.created_at.desc()))
        return list(result.scalars().all())

    async def get_by_id(self, billing_id: UUID) -> Optional[Billing]:
        """Get a billing record by ID."""
        result = await self.db.execute(select(Billing).where(Billing.id == billing_id))
        return result.scalar_one_or_none()

    async def create(self, billing: Billing) -> Billing:
        """Create a new billing record."""
        self.db.add(billing)
        await self.db.flush()
        await self.db.refresh(billing)
        return billing

    async def update(self, billing_id: UUID, doc: Dict[str, Any]) -> Optional[Billing]:
        """Update a billing record."""
        billing = await self.get_by_id(billing_id)
        if not billing:
            return None

        for field, value in doc.items():
            setattr(billing, field, value)

        billing.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(billing)
        return billing

    async def delete(self, billing_id: UUID) -> bool:
        """Delete a billing record."""
        result = await self.db.execute(delete(Billing).where(Billing.id == billing_id))
        return result.rowcount > 0

    async def delete_all(self) -> int:
        """Delete every billing record."""
        result = await self.db.execute(delete(Billing))
        return result.rowcount or 0
