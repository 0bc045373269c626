"""
Billing Pydantic schemas.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.base import RecordRead


class BillingCreate(BaseModel):
    """Schema for creating a billing record directly."""

    user_id: str = Field(min_length=1)
    task_id: UUID
    hours: float = Field(ge=0)
    amount: float = Field(ge=0)


class BillingUpdate(BillingCreate):
    """Full replacement of a billing record's fields."""


class BillingRead(RecordRead):
    """Schema for reading billing data (API response)."""

    user_id: str
    task_id: UUID
    hours: float
    amount: float


class InvoiceRequest(BaseModel):
    """Body sent by the task service when a task is marked done."""

    assignee: str = Field(min_length=1)
    task_id: UUID
    hours: float = Field(ge=0)
