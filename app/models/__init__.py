"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.task import Task
from app.models.billing import Billing

# Export all models
__all__ = [
    "Task",
    "Billing",
]
