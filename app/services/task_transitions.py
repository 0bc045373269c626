"""
Status transitions for tasks.

Only ``non-done -> done`` has a side effect: the task is invoiced and the
invoice id is written in the same unit of work as the patch. Every other
status change is a plain field write.
"""

import logging
from typing import Any, Dict, Optional

from app.errors import NotFoundError
from app.models.task import Task, TASK_STATUS_DONE
from app.repositories.base import TaskStore
from app.services.invoice_client import InvoiceClient

logger = logging.getLogger(__name__)


def is_done_transition(current_status: Optional[str], patch: Dict[str, Any]) -> bool:
    return current_status != TASK_STATUS_DONE and patch.get("status") == TASK_STATUS_DONE


async def apply_task_patch(
    store: TaskStore,
    invoice_client: InvoiceClient,
    current: Task,
    patch: Dict[str, Any],
) -> None:
    """
    Persist ``patch`` onto ``current``.

    For a done transition the patch is written with a status guard, the
    invoice is requested for the hours held before the patch, and the
    invoice id is written last. A failed invoice request rolls the whole
    scope back, so the task never reaches "done" without an invoice.
    """
    if not patch:
        return

    if not is_done_transition(current.status, patch):
        if not await store.update(current.id, patch):
            raise NotFoundError(f"Task {current.id} not found")
        return

    # Captured up front: the guarded write may refresh `current` in place.
    task_id, assignee, hours = current.id, current.assignee, current.hours

    async with store.transaction():
        claimed = await store.update(task_id, patch, status_not=TASK_STATUS_DONE)
        if not claimed:
            # Another request completed (or removed) the task after it was loaded.
            logger.info("Task %s already done; applying patch without invoicing", task_id)
            if not await store.update(task_id, patch):
                raise NotFoundError(f"Task {task_id} not found")
            return

        invoice_id = await invoice_client.issue(
            assignee=assignee,
            task_id=task_id,
            hours=hours,
        )
        if not await store.update(task_id, {"invoice_ref": invoice_id}):
            raise NotFoundError(f"Task {task_id} not found")

    logger.info("Task %s updated to 'done'. New invoice %s generated", task_id, invoice_id)
