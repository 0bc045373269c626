"""
Schedule overlap detection for tasks sharing an assignee.

Overlap is advisory: callers flag the new task's description and still
create it.
"""

from datetime import datetime
from typing import Iterable, List, Optional, TypeVar

OVERLAP_WARNING = "Warning: This task overlaps with existing task(s)."

T = TypeVar("T")


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Open-interval intersection. Touching endpoints and zero-width intervals never overlap."""
    return max(start_a, start_b) < min(end_a, end_b)


def find_overlaps(
    assignee: str,
    start: datetime,
    end: datetime,
    existing: Iterable[T],
) -> List[T]:
    """Return the tasks in ``existing`` assigned to ``assignee`` whose schedule intersects [start, end)."""
    return [
        task
        for task in existing
        if task.assignee == assignee
        and intervals_overlap(task.start_date, task.end_date, start, end)
    ]


def append_overlap_warning(description: Optional[str]) -> str:
    if not description:
        return OVERLAP_WARNING
    return f"{description} {OVERLAP_WARNING}"
