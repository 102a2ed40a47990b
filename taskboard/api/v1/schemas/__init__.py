"""
Pydantic schemas for API request/response models
"""

from taskboard.api.v1.schemas.task import TaskCreate, TaskUpdate, TaskResponse

__all__ = ["TaskCreate", "TaskUpdate", "TaskResponse"]

