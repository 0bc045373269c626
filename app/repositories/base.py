"""Store boundaries the service layer depends on."""

from __future__ import annotations

from datetime import datetime
from typing import Any, AsyncContextManager, Optional, Protocol, runtime_checkable
from uuid import UUID

from app.models.billing import Billing
from app.models.task import Task


@runtime_checkable
class TaskStore(Protocol):
    """Key-indexed task collection with equality and range filters."""

    async def find(
        self,
        *,
        assignee: Optional[str] = None,
        parent_task: Optional[UUID] = None,
        status: Optional[str] = None,
        ends_after: Optional[datetime] = None,
        starts_before: Optional[datetime] = None,
    ) -> list[Task]:
        """Return tasks matching every filter that is not None."""

    async def find_one(self, task_id: UUID) -> Optional[Task]:
        """Return a task by id or None when missing."""

    async def insert(self, task: Task) -> Task:
        """Persist a new task and return it."""

    async def update(self, task_id: UUID, doc: dict[str, Any], *, status_not: Optional[str] = None) -> bool:
        """
        Apply ``doc`` to one task as a single write.

        With ``status_not`` the write only happens while the stored status
        differs from that value. Returns whether a task was written.
        """

    async def delete(self, task_id: UUID) -> bool:
        """Remove a task. Returns whether one existed."""

    async def delete_all(self) -> int:
        """Remove every task and return how many were removed."""

    def transaction(self) -> AsyncContextManager[Any]:
        """Scope whose writes are discarded if the block raises."""


@runtime_checkable
class BillingStore(Protocol):
    """Key-indexed billing record collection."""

    async def list(self) -> list[Billing]:
        """Return every billing record."""

    async def get_by_id(self, billing_id: UUID) -> Optional[Billing]:
        """Return a billing record by id or None when missing."""

    async def create(self, billing: Billing) -> Billing:
        """Persist a new billing record and return it."""

    async def update(self, billing_id: UUID, doc: dict[str, Any]) -> Optional[Billing]:
        """Overwrite fields of a billing record; None when missing."""

    async def delete(self, billing_id: UUID) -> bool:
        """Remove a billing record. Returns whether one existed."""

    async def delete_all(self) -> int:
        """Remove every billing record and return how many were removed."""
