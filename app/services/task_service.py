"""
Task business logic service.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from app.errors import NotFoundError
from app.models.task import Task
from app.repositories.base import TaskStore
from app.schemas.task import TaskCreate
from app.services.invoice_client import InvoiceClient
from app.services.overlap import append_overlap_warning, find_overlaps
from app.services.task_patch import build_task_patch
from app.services.task_transitions import apply_task_patch

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic."""
    
    def __init__(self, store: TaskStore, invoice_client: Optional[InvoiceClient] = None):
        self.store = store
        self.invoice_client = invoice_client
    
    async def list_tasks(
        self,
        status: Optional[str] = None,
        assignee: Optional[str] = None,
    ) -> List[Task]:
        """List tasks with filters."""
        return await self.store.find(status=status, assignee=assignee)
    
    async def list_tasks_by_user(self, assignee: str) -> List[Task]:
        return await self.store.find(assignee=assignee)
    
    async def get_task(self, task_id: UUID) -> Task:
        """Get a task by ID."""
        task = await self.store.find_one(task_id)
        if not task:
            raise NotFoundError(f"Task {task_id} not found")
        return task
    
    async def get_task_with_subtasks(self, task_id: UUID) -> Tuple[Task, List[Task]]:
        """Get a task and the tasks that reference it as parent."""
        task = await self.get_task(task_id)
        subtasks = await self.store.find(parent_task=task_id)
        return task, subtasks
    
    async def create_task(self, data: TaskCreate) -> Task:
        """
        Create a new task.

        A schedule clash with another task of the same assignee only appends
        a warning to the description; the task is always created.
        """
        start = data.start_date
        end = data.end_date
        candidates = await self.store.find(assignee=data.assignee, ends_after=start, starts_before=end)
        overlapping = find_overlaps(data.assignee, start, end, candidates)

        description = data.description
        if overlapping:
            description = append_overlap_warning(description)
            logger.info(
                "Task for %s overlaps %d existing task(s): %s",
                data.assignee,
                len(overlapping),
                ", ".join(str(t.id) for t in overlapping),
            )

        task = Task(
            id=uuid.uuid4(),
            title=data.title,
            description=description,
            assignee=data.assignee,
            status=data.status,
            hours=data.hours,
            start_date=start,
            end_date=end,
            parent_task=data.parent_task,
        )
        task = await self.store.insert(task)
        logger.info("Task created: %s", task.id)
        return task
    
    async def update_task(self, task_id: UUID, updates: Dict[str, Any]) -> Task:
        """
        Apply a partial update.

        The body is validated before the task is loaded or any collaborator
        is contacted.
        """
        patch = build_task_patch(updates)
        current = await self.get_task(task_id)
        await apply_task_patch(self.store, self.invoice_client, current, patch)
        return await self.get_task(task_id)
    
    async def remove_task(self, task_id: UUID) -> None:
        removed = await self.store.delete(task_id)
        logger.info("Task %s removed (existed=%s)", task_id, removed)
    
    async def remove_all_tasks(self) -> int:
        count = await self.store.delete_all()
        logger.info("Removed all tasks (%d)", count)
        return count
