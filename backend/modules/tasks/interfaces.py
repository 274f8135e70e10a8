"""
Tasks module interfaces.

The API layer depends on ITaskService; the service depends on ITaskStore.
"""

from typing import Protocol, Optional, Any, Union, runtime_checkable

from .models import CreateTaskRequest, Task, TaskStatus, UpdateTaskRequest


@runtime_checkable
class ITaskStore(Protocol):
    """
    Persistence for tasks.

    Writes take the owner id as well as the task id, so a store never
    touches a row that does not belong to the caller.
    """

    def list_by_owner(self, user_id: str, status: Optional[TaskStatus] = None) -> list[Task]:
        ...

    def get_by_id(self, task_id: str) -> Optional[Task]:
        ...

    def create(self, data: dict[str, Any]) -> Task:
        ...

    def update(self, task_id: str, user_id: str, data: dict[str, Any]) -> Optional[Task]:
        """Apply changes and return the updated task, or None if it is gone."""
        ...

    def delete(self, task_id: str, user_id: str) -> None:
        ...


@runtime_checkable
class ITaskService(Protocol):
    """
    Interface for task operations.

    Every operation is scoped to the requesting account. A task owned by
    someone else is reported exactly like a missing one.
    """

    async def list_tasks(
        self,
        user_id: str,
        status: Optional[TaskStatus] = None,
    ) -> list[Task]:
        """
        List the account's tasks, earliest due date first.

        Args:
            user_id: Requesting account ID
            status: Optional status filter
        """
        ...

    async def get_task(self, task_id: str, user_id: str) -> Task:
        """
        Get one task.

        Raises:
            InvalidTaskIdError: If task_id is malformed
            TaskNotFoundError: If the task is absent or not owned
        """
        ...

    async def create_task(
        self,
        user_id: str,
        request: Union[CreateTaskRequest, dict[str, Any]],
    ) -> Task:
        """
        Create a task owned by the account.

        Raises:
            TaskValidationError: If a field is missing or malformed
        """
        ...

    async def update_task(
        self,
        task_id: str,
        user_id: str,
        request: Union[UpdateTaskRequest, dict[str, Any]],
    ) -> Task:
        """
        Apply a partial update.

        Raises:
            InvalidTaskIdError: If task_id is malformed
            TaskNotFoundError: If the task is absent or not owned
            TaskValidationError: If a changed field is invalid
        """
        ...

    async def delete_task(self, task_id: str, user_id: str) -> Task:
        """
        Delete a task and return what it looked like before.

        Raises:
            InvalidTaskIdError: If task_id is malformed
            TaskNotFoundError: If the task is absent or not owned
        """
        ...
