"""
Partial task updates.

Turns an arbitrary JSON object into the whitelisted, typed subset of task
fields a client may change. Unknown keys are dropped without error.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError as SchemaValidationError

from app.errors import ValidationError
from app.schemas.task import TaskUpdate

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("start_date", "end_date")


def build_task_patch(raw: Any) -> Dict[str, Any]:
    """
    Validate and project ``raw`` onto the patchable task fields.

    Raises ValidationError naming the first malformed field. An empty or
    fully unrecognized input yields an empty dict.
    """
    try:
        update = TaskUpdate.model_validate(raw)
    except SchemaValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        message = "Invalid date format" if field in TIMESTAMP_FIELDS else f"Invalid {field or 'task update'}"
        raise ValidationError(message, {"field": field, "reason": error["msg"]}) from None

    dropped = set(raw) - set(TaskUpdate.model_fields)
    if dropped:
        logger.debug("Ignoring unrecognized task fields: %s", ", ".join(sorted(map(str, dropped))))
    return update.model_dump(exclude_unset=True)
