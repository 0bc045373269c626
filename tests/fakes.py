"""In-memory stand-ins for the stores and collaborators used in tests."""

import asyncio
import copy
import uuid
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import Any, Dict, List, Optional
from uuid import UUID

import httpx

from app.models.billing import Billing
from app.models.task import Task
from app.utils.time import utc_now

TASK_FIELDS = (
    "id", "title", "description", "assignee", "status", "hours",
    "start_date", "end_date", "invoice_ref", "parent_task", "created_at", "updated_at",
)
BILLING_FIELDS = ("id", "user_id", "task_id", "hours", "amount", "created_at", "updated_at")


class InMemoryTaskStore:
    """
    Dict-backed TaskStore.

    Reads hand out fresh Task objects, like rows loaded from a database.
    Every call yields to the event loop so concurrent requests interleave.
    """

    def __init__(self):
        self.rows: Dict[UUID, Dict[str, Any]] = {}
        self.writes = 0
        # Pre-images of rows written inside the current task's transaction scope.
        self._journal: ContextVar[Optional[Dict[UUID, Optional[Dict[str, Any]]]]] = ContextVar(
            f"task_store_journal_{id(self)}", default=None
        )

    def _remember(self, task_id: UUID) -> None:
        journal = self._journal.get()
        if journal is not None and task_id not in journal:
            row = self.rows.get(task_id)
            journal[task_id] = copy.deepcopy(row) if row is not None else None

    def _to_task(self, row: Dict[str, Any]) -> Task:
        return Task(**row)

    async def find(
        self,
        *,
        assignee=None,
        parent_task=None,
        status=None,
        ends_after=None,
        starts_before=None,
    ) -> List[Task]:
        await asyncio.sleep(0)
        found = []
        for row in self.rows.values():
            if assignee is not None and row["assignee"] != assignee:
                continue
            if parent_task is not None and row["parent_task"] != parent_task:
                continue
            if status is not None and row["status"] != status:
                continue
            if ends_after is not None and not row["end_date"] > ends_after:
                continue
            if starts_before is not None and not row["start_date"] < starts_before:
                continue
            found.append(self._to_task(row))
        return sorted(found, key=lambda t: t.start_date)

    async def find_one(self, task_id: UUID) -> Optional[Task]:
        await asyncio.sleep(0)
        row = self.rows.get(task_id)
        return self._to_task(row) if row else None

    async def insert(self, task: Task) -> Task:
        await asyncio.sleep(0)
        now = utc_now()
        row = {field: getattr(task, field, None) for field in TASK_FIELDS}
        row["created_at"] = row["updated_at"] = now
        self._remember(row["id"])
        self.rows[row["id"]] = row
        self.writes += 1
        return self._to_task(row)

    async def update(self, task_id: UUID, doc: Dict[str, Any], *, status_not: Optional[str] = None) -> bool:
        await asyncio.sleep(0)
        row = self.rows.get(task_id)
        if row is None:
            return False
        if status_not is not None and row["status"] == status_not:
            return False
        self._remember(task_id)
        row.update(doc)
        row["updated_at"] = utc_now()
        self.writes += 1
        return True

    async def delete(self, task_id: UUID) -> bool:
        await asyncio.sleep(0)
        self._remember(task_id)
        return self.rows.pop(task_id, None) is not None

    async def delete_all(self) -> int:
        await asyncio.sleep(0)
        for task_id in list(self.rows):
            self._remember(task_id)
        count = len(self.rows)
        self.rows.clear()
        return count

    @asynccontextmanager
    async def transaction(self):
        journal: Dict[UUID, Optional[Dict[str, Any]]] = {}
        token = self._journal.set(journal)
        try:
            yield self
        except BaseException:
            # Only rows written in this scope roll back; concurrent writes elsewhere survive.
            for task_id, original in journal.items():
                if original is None:
                    self.rows.pop(task_id, None)
                else:
                    self.rows[task_id] = original
            raise
        finally:
            self._journal.reset(token)

    def snapshot(self, task_id: UUID) -> Dict[str, Any]:
        return {k: v for k, v in self.rows[task_id].items() if k != "updated_at"}


class InMemoryBillingStore:
    """Dict-backed BillingStore."""

    def __init__(self):
        self.rows: Dict[UUID, Dict[str, Any]] = {}

    async def list(self) -> List[Billing]:
        return [Billing(**row) for row in self.rows.values()]

    async def get_by_id(self, billing_id: UUID) -> Optional[Billing]:
        row = self.rows.get(billing_id)
        return Billing(**row) if row else None

    async def create(self, billing: Billing) -> Billing:
        row = {field: getattr(billing, field, None) for field in BILLING_FIELDS}
        row["created_at"] = row["updated_at"] = utc_now()
        self.rows[row["id"]] = row
        return Billing(**row)

    async def update(self, billing_id: UUID, doc: Dict[str, Any]) -> Optional[Billing]:
        row = self.rows.get(billing_id)
        if row is None:
            return None
        row.update(doc)
        row["updated_at"] = utc_now()
        return Billing(**row)

    async def delete(self, billing_id: UUID) -> bool:
        return self.rows.pop(billing_id, None) is not None

    async def delete_all(self) -> int:
        count = len(self.rows)
        self.rows.clear()
        return count


class RecordingInvoiceClient:
    """InvoiceClient double that records requests and can be told to fail."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: List[Dict[str, Any]] = []
        self.issued: List[UUID] = []
        self.error = error

    async def issue(self, *, assignee: str, task_id: UUID, hours: float) -> UUID:
        self.calls.append({"assignee": assignee, "task_id": task_id, "hours": hours})
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        invoice_id = uuid.uuid4()
        self.issued.append(invoice_id)
        return invoice_id


def identity_transport(users: Dict[str, Dict[str, Any]]) -> httpx.MockTransport:
    """Mock identity service answering GET /users/{id} from ``users``."""

    def handler(request: httpx.Request) -> httpx.Response:
        caller_id = request.url.path.rsplit("/", 1)[-1]
        user = users.get(caller_id)
        if user is None:
            return httpx.Response(404, json={"detail": "User not found"})
        return httpx.Response(200, json=user)

    return httpx.MockTransport(handler)
