"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

from taskboard.core.database import Base
from taskboard.models.task import Priority, Task

__all__ = [
    "Base",
    "Priority",
    "Task",
]
