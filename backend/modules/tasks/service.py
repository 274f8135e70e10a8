"""
Tasks service implementation.

Every operation is filtered by the requesting account. Ownership checks
go through ``_get_owned_task`` so that get, update and delete apply the
same Ownership-or-NotFound rule.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Optional, Any, Callable, Union

from shared.models import utcnow

from .exceptions import InvalidTaskIdError, TaskNotFoundError
from .interfaces import ITaskService, ITaskStore
from .models import (
    CreateTaskRequest,
    Task,
    TaskStatus,
    UpdateTaskRequest,
    parse_request,
)

logger = logging.getLogger(__name__)


class TaskService(ITaskService):
    """
    Task CRUD scoped to a single owner.

    Concurrent updates to one task are last-write-wins; the store applies
    each write atomically and no version stamp is checked.
    """

    def __init__(
        self,
        store: ITaskStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._clock = clock or utcnow

    async def list_tasks(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        return await asyncio.to_thread(self._store.list_by_owner, user_id, status)

    async def get_task(self, task_id: str, user_id: str) -> Task:
        return await self._get_owned_task(task_id, user_id)

    async def create_task(
        self,
        user_id: str,
        request: Union[CreateTaskRequest, dict[str, Any]],
    ) -> Task:
        parsed = parse_request(CreateTaskRequest, request)
        data = parsed.model_dump(mode="json")
        data["user_id"] = user_id
        data["created_at"] = self._clock().isoformat()

        task = await asyncio.to_thread(self._store.create, data)
        logger.info("Account %s created task %s", user_id, task.id)
        return task

    async def update_task(
        self,
        task_id: str,
        user_id: str,
        request: Union[UpdateTaskRequest, dict[str, Any]],
    ) -> Task:
        task = await self._get_owned_task(task_id, user_id)
        changes = parse_request(UpdateTaskRequest, request).changes()
        if not changes:
            return task

        changes["updated_at"] = self._clock().isoformat()
        updated = await asyncio.to_thread(self._store.update, task.id, user_id, changes)
        if updated is None:
            # Deleted between the ownership check and the write
            raise TaskNotFoundError(task_id)
        return updated

    async def delete_task(self, task_id: str, user_id: str) -> Task:
        task = await self._get_owned_task(task_id, user_id)
        await asyncio.to_thread(self._store.delete, task.id, user_id)
        logger.info("Account %s deleted task %s", user_id, task.id)
        return task

    async def _get_owned_task(self, task_id: str, user_id: str) -> Task:
        """
        Fetch a task the requester owns.

        Raises:
            InvalidTaskIdError: If task_id is not a UUID
            TaskNotFoundError: If the task is absent or owned by someone else
        """
        normalized = _normalize_task_id(task_id)
        task = await asyncio.to_thread(self._store.get_by_id, normalized)
        if task is None or task.user_id != user_id:
            raise TaskNotFoundError(task_id)
        return task


def _normalize_task_id(task_id: str) -> str:
    try:
        return str(uuid.UUID(str(task_id)))
    except ValueError:
        raise InvalidTaskIdError(task_id)
