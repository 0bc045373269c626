"""
Task router - API endpoints for tasks.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Response, status

from app.core.dependencies import get_task_service, require_admin
from app.schemas.task import TaskCreate, TaskDetail, TaskRead
from app.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskRead])
async def list_tasks(
    status: Optional[str] = None,
    assignee: Optional[str] = None,
    service: TaskService = Depends(get_task_service),
):
    """
    List tasks.
    
    Filters: status, assignee.
    """
    return await service.list_tasks(status=status, assignee=assignee)


@router.get("/by-user/{assignee}", response_model=List[TaskRead])
async def list_tasks_by_user(
    assignee: str,
    service: TaskService = Depends(get_task_service),
):
    """List tasks assigned to one worker."""
    return await service.list_tasks_by_user(assignee)


@router.get("/{task_id}", response_model=TaskDetail)
async def get_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
):
    """Get a task by ID together with its subtasks."""
    task, subtasks = await service.get_task_with_subtasks(task_id)
    return TaskDetail(
        task=TaskRead.model_validate(task),
        subtasks=[TaskRead.model_validate(s) for s in subtasks],
    )


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task."""
    return await service.create_task(data)


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_task(
    task_id: UUID,
    updates: Dict[str, Any] = Body(...),
    service: TaskService = Depends(get_task_service),
):
    """
    Partially update a task.
    
    Setting status to "done" on a task that is not done yet invoices it.
    """
    await service.update_task(task_id, updates)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def remove_all_tasks(service: TaskService = Depends(get_task_service)):
    """Remove every task (admin only)."""
    await service.remove_all_tasks()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[Depends(require_admin)])
async def remove_task(
    task_id: UUID,
    service: TaskService = Depends(get_task_service),
):
    """Remove a task (admin only)."""
    await service.remove_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
