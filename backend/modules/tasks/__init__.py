"""
Tasks module.

Handles per-account task records.

Public API:
- ITaskService: Interface for task operations
- ITaskStore: Interface for task persistence
- Task, TaskStatus: Task data
- CreateTaskRequest, UpdateTaskRequest: Request bodies
"""

from .interfaces import ITaskService, ITaskStore
from .models import (
    Task,
    TaskStatus,
    CreateTaskRequest,
    UpdateTaskRequest,
    TaskResponse,
    TaskListResponse,
)
from .exceptions import (
    TaskNotFoundError,
    InvalidTaskIdError,
    TaskValidationError,
)

__all__ = [
    # Interfaces
    "ITaskService",
    "ITaskStore",
    # Models
    "Task",
    "TaskStatus",
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "TaskResponse",
    "TaskListResponse",
    # Exceptions
    "TaskNotFoundError",
    "InvalidTaskIdError",
    "TaskValidationError",
]
