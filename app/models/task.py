"""
Task model.

Represents a unit of billable work assigned to a single worker.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime, Float, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base_model import TimestampedModel


TASK_STATUS_DONE = "done"


class Task(TimestampedModel):
    """
    Task table.

    ``parent_task`` is an identifier-only link to another task. It carries no
    foreign key: removing a parent leaves its subtasks pointing at nothing.
    """
    
    __tablename__ = "tasks"
    
    title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    
    assignee: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="open",
    )
    
    hours: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
    )
    
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    
    invoice_ref: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
    )
    
    parent_task: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        nullable=True,
        index=True,
    )

    __table_args__ = (
        Index("ix_tasks_assignee_schedule", "assignee", "start_date", "end_date"),
    )
