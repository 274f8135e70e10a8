"""
Task repository for database access.

Encapsulates all Supabase queries and data mapping for the tasks table.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Task, TaskStatus


class TaskRepository(BaseRepository[Task]):
    """
    Repository for task data access.

    Note: Reads by id do NOT check ownership. The service layer decides
    what the requester may see; writes are additionally filtered by owner.
    """

    def list_by_owner(self, user_id: str, status: Optional[TaskStatus] = None) -> list[Task]:
        query = self._db.table("tasks").select("*").eq("user_id", user_id)
        if status:
            query = query.eq("status", status.value)
        result = query.order("due_date").order("created_at").execute()
        return [self._map_to_task(row) for row in result.data]

    def get_by_id(self, task_id: str) -> Optional[Task]:
        result = self._db.table("tasks").select("*").eq("id", task_id).execute()
        if not result.data:
            return None
        return self._map_to_task(result.data[0])

    def create(self, data: dict[str, Any]) -> Task:
        result = self._db.table("tasks").insert(data).execute()
        return self._map_to_task(result.data[0])

    def update(self, task_id: str, user_id: str, data: dict[str, Any]) -> Optional[Task]:
        result = (
            self._db.table("tasks")
            .update(data)
            .eq("id", task_id)
            .eq("user_id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_task(result.data[0])

    def delete(self, task_id: str, user_id: str) -> None:
        self._db.table("tasks").delete().eq("id", task_id).eq("user_id", user_id).execute()

    def _map_to_task(self, data: dict[str, Any]) -> Task:
        """Map database row to Task model."""
        return Task(
            id=str(data["id"]),
            title=data["title"],
            description=data["description"],
            status=TaskStatus(data["status"]),
            due_date=data["due_date"],
            user_id=str(data["user_id"]),
            created_at=data["created_at"],
            updated_at=data.get("updated_at"),
        )
