"""
Task persistence gateway
Thin facade over the relational store for the Task entity
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.core.exceptions import RecordNotFoundError
from taskboard.models.task import Task

logger = logging.getLogger(__name__)


class TaskGateway:
    """
    Create/read/update/delete for tasks

    Every operation runs in its own session and transaction, so nothing
    is shared between concurrent requests apart from the store itself.
    Store and driver exceptions propagate to the caller unchanged.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def ping(self) -> None:
        """Run a trivial query to check the store is reachable"""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))

    async def insert_one(
        self,
        title: str,
        description: Optional[str],
        priority: str,
    ) -> Task:
        """
        Insert a new task

        Returns:
            The stored Task with its id and timestamps loaded
        """
        async with self._session_factory() as session:
            async with session.begin():
                task = Task(
                    title=title,
                    description=description,
                    priority=priority,
                    completed=False,
                )
                session.add(task)
                # Flush to get the database-generated ID, then load server defaults
                await session.flush()
                await session.refresh(task)
        return task

    async def find_all(self) -> List[Task]:
        """
        Retrieve every task, newest first

        Tasks created within the same clock tick fall back to id order.
        """
        async with self._session_factory() as session:
            query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
            result = await session.execute(query)
            return list(result.scalars().all())

    async def find_one(self, task_id: int) -> Optional[Task]:
        """
        Retrieve a single task by ID

        Returns:
            Task object if found, None otherwise
        """
        async with self._session_factory() as session:
            return await session.get(Task, task_id)

    async def update_one(self, task_id: int, **fields) -> Task:
        """
        Overwrite the given columns of a task

        Args:
            task_id: ID of the task to update
            **fields: Column values to set

        Returns:
            The updated Task

        Raises:
            RecordNotFoundError: If no task has this ID
        """
        async with self._session_factory() as session:
            async with session.begin():
                task = await session.get(Task, task_id)
                if task is None:
                    raise RecordNotFoundError(task_id)
                for field, value in fields.items():
                    setattr(task, field, value)
                await session.flush()
                # updated_at is set by the database (onupdate)
                await session.refresh(task)
        return task

    async def delete_one(self, task_id: int) -> None:
        """
        Permanently delete a task

        Raises:
            RecordNotFoundError: If no task has this ID
        """
        async with self._session_factory() as session:
            async with session.begin():
                task = await session.get(Task, task_id)
                if task is None:
                    raise RecordNotFoundError(task_id)
                await session.delete(task)
        logger.debug(f"Deleted task {task_id}")
