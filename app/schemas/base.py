"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

import re
from datetime import datetime
from typing import Annotated, Any, Optional
from uuid import UUID

from pydantic import AwareDatetime, BaseModel, BeforeValidator, ConfigDict

RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def _require_rfc3339_text(value: Any) -> Any:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not RFC3339_PATTERN.match(value):
        raise ValueError("expected an RFC 3339 timestamp such as 2024-01-03T00:00:00Z")
    return value


# Timestamps on the wire: RFC 3339 text with an explicit offset, nothing else.
Rfc3339Datetime = Annotated[AwareDatetime, BeforeValidator(_require_rfc3339_text)]


class RecordRead(BaseModel):
    """
    Base schema for reading stored records.
    
    Includes the auto-generated fields: id and timestamps.
    """
    
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)
