"""
Exercise Repository Interface (Port).

This module defines the abstract interface for the exercise catalog.
Implementations may use Supabase, in-memory storage, or other backends.
"""
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from domain.models import Exercise


class ExerciseRepository(Protocol):
    """
    Abstract interface for exercise catalog persistence.

    Visibility rules (global, shared, own) are applied by search(); get()
    returns any exercise by ID and callers check visibility themselves.
    """

    def get(self, exercise_id: str) -> Optional[Exercise]:
        """
        Get an exercise by ID.

        Args:
            exercise_id: Exercise UUID

        Returns:
            Exercise or None if not found
        """
        ...

    def get_many(self, exercise_ids: Iterable[str]) -> Dict[str, Exercise]:
        """
        Get several exercises at once.

        Returns:
            Mapping of ID to Exercise; missing IDs are simply absent
        """
        ...

    def search(
        self,
        user_id: str,
        *,
        query: Optional[str] = None,
        category: Optional[str] = None,
        ownership: str = "all",
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Exercise], int]:
        """
        Search exercises visible to a user.

        Args:
            user_id: Acting user
            query: Case-insensitive name substring
            category: Exact category (case-insensitive)
            ownership: "all" (global, shared and own), "own" or "public"
            limit: Page size
            offset: Page start

        Returns:
            Tuple of (page of exercises ordered by name, total match count)
        """
        ...

    def find_by_name(self, user_id: str, name: str) -> Optional[Exercise]:
        """Find a user's own exercise by exact name."""
        ...

    def create(self, data: Dict[str, Any]) -> Exercise:
        """Insert an exercise row and return it."""
        ...

    def update(self, exercise_id: str, updates: Dict[str, Any]) -> Exercise:
        """Apply a partial update and return the updated exercise."""
        ...

    def delete(self, exercise_id: str) -> bool:
        """Delete an exercise. Returns True when a row was removed."""
        ...
