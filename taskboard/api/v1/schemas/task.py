"""
Task Pydantic schemas
Request and response models for Task API endpoints
Reference: https://fastapi.tiangolo.com/tutorial/body/
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.models.task import Priority


class TaskBase(BaseModel):
    """
    Base schema with common Task fields
    Used as base for create and update schemas

    Title and description are not length-checked here: the task service
    trims and validates them, so the API and the HTML form report the same
    errors.
    """
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: Optional[Priority] = Field(None, description="Task priority (defaults to medium)")

    @field_validator("priority", mode="before")
    @classmethod
    def empty_priority_is_default(cls, v):
        """Treat an empty priority like a missing one (medium)"""
        if v == "":
            return None
        return v


class TaskCreate(TaskBase):
    """
    Schema for creating a new task
    Inherits from TaskBase
    """
    pass


class TaskUpdate(TaskBase):
    """
    Schema for updating a task
    Title, description and priority are overwritten; completed is untouched
    Reference: https://fastapi.tiangolo.com/tutorial/body-updates/
    """
    pass


class TaskResponse(BaseModel):
    """
    Schema for task response
    Includes all stored fields plus database-generated fields
    """
    id: int = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    priority: Priority = Field(..., description="Task priority")
    completed: bool = Field(..., description="Whether the task is completed")
    created_at: datetime = Field(..., description="Timestamp when task was created")
    updated_at: datetime = Field(..., description="Timestamp when task was last updated")

    model_config = ConfigDict(from_attributes=True)  # Allow creation from ORM objects
