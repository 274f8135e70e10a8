"""
Tasks module exceptions.
"""

from typing import Any

from shared.exceptions import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    """
    Raised when a task does not exist or belongs to another account.

    Both cases share this error so callers cannot probe for task ids.
    """

    def __init__(self, task_id: str):
        super().__init__(
            "Task not found",
            code="TASK_NOT_FOUND",
            details={"task_id": task_id},
        )


class InvalidTaskIdError(ValidationError):
    """Raised when a task id is not a well-formed UUID."""

    def __init__(self, task_id: str):
        super().__init__(
            "Invalid task ID format",
            code="INVALID_TASK_ID",
            details={"task_id": task_id},
        )


class TaskValidationError(ValidationError):
    """Raised when task fields fail validation."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            "Validation failed",
            code="VALIDATION_ERROR",
            details={"fields": errors},
        )
        self.errors = errors
