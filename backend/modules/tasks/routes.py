"""
Task API endpoints.

Every route requires a valid session; the guard hands the resolved
account to the handler, and the service scopes the operation to it.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from api.dependencies import get_task_service
from api.middleware.auth import RequireAuth
from shared.models import Account

from .interfaces import ITaskService
from .models import (
    TaskListResponse,
    TaskResponse,
    TaskStatus,
)

router = APIRouter()


@router.get("", response_model=TaskListResponse, response_model_exclude_none=True)
async def list_tasks(
    status: Optional[TaskStatus] = Query(default=None, description="Filter by status"),
    account: Account = RequireAuth,
    service: ITaskService = Depends(get_task_service),
) -> TaskListResponse:
    """List the current account's tasks, earliest due date first."""
    tasks = await service.list_tasks(account.id, status)
    return TaskListResponse(count=len(tasks), data=tasks)


@router.get("/{task_id}", response_model=TaskResponse, response_model_exclude_none=True)
async def get_task(
    task_id: str,
    account: Account = RequireAuth,
    service: ITaskService = Depends(get_task_service),
) -> TaskResponse:
    """Get one of the current account's tasks."""
    task = await service.get_task(task_id, account.id)
    return TaskResponse(data=task)


@router.post("", response_model=TaskResponse, response_model_exclude_none=True, status_code=201)
async def create_task(
    payload: dict[str, Any] = Body(...),
    account: Account = RequireAuth,
    service: ITaskService = Depends(get_task_service),
) -> TaskResponse:
    """
    Create a task for the current account.

    Requires title, description and dueDate; status defaults to pending.
    """
    task = await service.create_task(account.id, payload)
    return TaskResponse(message="Task created successfully", data=task)


@router.put("/{task_id}", response_model=TaskResponse, response_model_exclude_none=True)
async def update_task(
    task_id: str,
    payload: dict[str, Any] = Body(...),
    account: Account = RequireAuth,
    service: ITaskService = Depends(get_task_service),
) -> TaskResponse:
    """Update only the fields present in the body."""
    task = await service.update_task(task_id, account.id, payload)
    return TaskResponse(message="Task updated successfully", data=task)


@router.delete("/{task_id}", response_model=TaskResponse, response_model_exclude_none=True)
async def delete_task(
    task_id: str,
    account: Account = RequireAuth,
    service: ITaskService = Depends(get_task_service),
) -> TaskResponse:
    """Delete a task and return its last representation."""
    task = await service.delete_task(task_id, account.id)
    return TaskResponse(message="Task deleted successfully", data=task)
