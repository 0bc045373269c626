"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.task import TaskCreate, TaskUpdate, TaskRead, TaskDetail
from app.schemas.billing import BillingCreate, BillingUpdate, BillingRead, InvoiceRequest

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "TaskDetail",
    "BillingCreate",
    "BillingUpdate",
    "BillingRead",
    "InvoiceRequest",
]
