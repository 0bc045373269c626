"""
Billing model.

One record per invoiced task, or entered directly through the billing API.
"""

import uuid

from sqlalchemy import String, Float
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import TimestampedModel


class Billing(TimestampedModel):
    """Billing table - hours and amount charged for a task."""

    __tablename__ = "billings"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    task_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False, index=True)
    hours: Mapped[float] = mapped_column(Float, nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
