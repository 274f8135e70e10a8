"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client


T = TypeVar("T")

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - Translation helpers for store errors

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class TaskRepository(BaseRepository[Task]):
            def get_by_id(self, task_id: str) -> Optional[Task]:
                result = self._db.table("tasks").select("*").eq("id", task_id).execute()
                if not result.data:
                    return None
                return self._map_to_task(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def is_unique_violation(error: APIError) -> bool:
        """Whether a PostgREST error was raised by a unique constraint."""
        return str(getattr(error, "code", "") or "") == UNIQUE_VIOLATION
