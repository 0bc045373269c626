"""
Task repository - database operations for Task.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction
from sqlalchemy.sql import func

from app.models.task import Task


class TaskRepository:
    """Repository for Task database operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def find(
        self,
        *,
        assignee: Optional[str] = None,
        parent_task: Optional[UUID] = None,
        status: Optional[str] = None,
        ends_after: Optional[datetime] = None,
        starts_before: Optional[datetime] = None,
    ) -> List[Task]:
        """List tasks matching the given filters."""
        query = select(Task)
        
        if assignee is not None:
            query = query.where(Task.assignee == assignee)
        if parent_task is not None:
            query = query.where(Task.parent_task == parent_task)
        if status is not None:
            query = query.where(Task.status == status)
        if ends_after is not None:
            query = query.where(Task.end_date > ends_after)
        if starts_before is not None:
            query = query.where(Task.start_date < starts_before)
        
        query = query.order_by(Task.start_date.asc(), Task.created_at.asc())
        
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def find_one(self, task_id: UUID) -> Optional[Task]:
        """Get a task by ID, refreshing any copy already held by the session."""
        result = await self.db.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
    
    async def insert(self, task: Task) -> Task:
        """Create a new task."""
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return task
    
    async def update(
        self,
        task_id: UUID,
        doc: Dict[str, Any],
        *,
        status_not: Optional[str] = None,
    ) -> bool:
        """
        Single-statement UPDATE of one task.

        ``status_not`` turns the write into a compare-and-swap: the row is only
        touched while its status differs from the given value. Concurrent
        writers block on the row lock and re-check the condition afterwards.
        """
        stmt = update(Task).where(Task.id == task_id)
        if status_not is not None:
            stmt = stmt.where(Task.status != status_not)
        stmt = stmt.values(**doc, updated_at=func.now()).execution_options(
            synchronize_session="fetch"
        )
        result = await self.db.execute(stmt)
        return result.rowcount > 0
    
    async def delete(self, task_id: UUID) -> bool:
        """Delete a task."""
        result = await self.db.execute(delete(Task).where(Task.id == task_id))
        return result.rowcount > 0
    
    async def delete_all(self) -> int:
        """Delete every task."""
        result = await self.db.execute(delete(Task))
        return result.rowcount or 0
    
    def transaction(self) -> AsyncSessionTransaction:
        """SAVEPOINT scope; rolled back if the block raises."""
        return self.db.begin_nested()
