"""
Tasks module data models.

Request models carry the field rules; the service re-applies them to
plain payloads so that invalid input never reaches the store.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from shared.models import CamelModel

from .exceptions import TaskValidationError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class TaskStatus(str, Enum):
    """Task progress status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(CamelModel):
    """A task owned by exactly one account."""

    id: str = Field(..., description="Task ID (UUID)")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")
    due_date: date = Field(..., description="Due date")
    user_id: str = Field(..., description="Owning account ID")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class CreateTaskRequest(CamelModel):
    """Request to create a task. Status defaults to pending."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    due_date: date = Field(...)


class UpdateTaskRequest(CamelModel):
    """
    Partial update. Only fields present in the body are applied.

    A field sent as null is rejected rather than cleared.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    status: Optional[TaskStatus] = None
    due_date: Optional[date] = None

    @field_validator("title", "description", "status", "due_date", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields present in the request, as store-ready values."""
        return self.model_dump(mode="json", exclude_unset=True)


class TaskResponse(BaseModel):
    """Envelope for a single task."""

    success: bool = True
    message: Optional[str] = None
    data: Task


class TaskListResponse(BaseModel):
    """Envelope for a task listing."""

    success: bool = True
    count: int
    data: list[Task]


RequestT = TypeVar("RequestT", bound=BaseModel)


def parse_request(model: type[RequestT], payload: Any) -> RequestT:
    """
    Validate a payload into a request model.

    Raises:
        TaskValidationError: With one entry per offending field
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise TaskValidationError(
            [
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
        )
