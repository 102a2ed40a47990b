"""
Task database model
SQLAlchemy model for tasks
Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Integer, String, Boolean, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.core.database import Base


class Priority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Note: priority is stored as String(10), not as a database enum
# Validation against Priority happens in the task service and API schemas


class Task(Base):
    """
    Task model representing a to-do item

    Attributes:
        id: Primary key, assigned by the store, never reused
        title: Task title (required, trimmed)
        description: Optional task description (None when blank)
        priority: One of low, medium, high (default: medium)
        completed: Whether the task is completed (default: False)
        created_at: Timestamp when task was created (auto-generated)
        updated_at: Timestamp when task was last updated (auto-generated)

    Reference: https://docs.sqlalchemy.org/en/20/orm/mapped_sql_expressions.html
    """
    __tablename__ = "tasks"
    # SQLite reuses the highest rowid after a delete unless AUTOINCREMENT is set
    # Reference: https://docs.sqlalchemy.org/en/20/dialects/sqlite.html#sqlite-auto-incrementing-behavior
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=Priority.MEDIUM.value,
        server_default=Priority.MEDIUM.value,
    )
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    # Reference: https://docs.sqlalchemy.org/en/20/core/defaults.html#server-side-defaults
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Task"""
        return f"<Task(id={self.id}, title='{self.title}', priority='{self.priority}', completed={self.completed})>"
