"""
Task Pydantic schemas.
"""

from typing import Annotated, Any, List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, NonNegativeFloat

from app.schemas.base import RecordRead, Rfc3339Datetime


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; True must not become 1 hour
    if isinstance(value, bool):
        raise ValueError("expected a number")
    return value


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


Hours = Annotated[NonNegativeFloat, Field(allow_inf_nan=False), BeforeValidator(_reject_bool)]
Assignee = Annotated[str, AfterValidator(_require_non_blank)]


class TaskCreate(BaseModel):
    """Schema for creating a new task."""
    
    title: str
    description: Optional[str] = None
    assignee: Assignee
    status: str = "open"
    hours: Hours = 0.0
    start_date: Rfc3339Datetime
    end_date: Rfc3339Datetime
    parent_task: Optional[UUID] = None


class TaskUpdate(BaseModel):
    """
    Schema for partially updating a task.

    Only keys present in the request end up in the update
    (``model_dump(exclude_unset=True)``); unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = None
    description: Optional[str] = None
    assignee: Assignee = None
    status: str = None
    hours: Hours = None
    start_date: Rfc3339Datetime = None
    end_date: Rfc3339Datetime = None
    parent_task: Optional[UUID] = None


class TaskRead(RecordRead):
    """Schema for reading task data (API response)."""
    
    title: str
    description: Optional[str] = None
    assignee: str
    status: str
    hours: float
    start_date: datetime
    end_date: datetime
    invoice_ref: Optional[UUID] = None
    parent_task: Optional[UUID] = None


class TaskDetail(BaseModel):
    """A task together with the tasks that name it as their parent."""

    task: TaskRead
    subtasks: List[TaskRead] = Field(default_factory=list)
