"""
Exercise Entry Repository Interface (Port).

This module defines the abstract interface for the exercise diary.
Writes that touch an entry and its sets must be atomic.
"""
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Protocol

from domain.models import ExerciseEntry


class ExerciseEntryRepository(Protocol):
    """
    Abstract interface for exercise entries and their sets.

    Set payloads are dicts with set_number, set_type, reps, weight,
    duration, rest_time and notes; set_number is already 1..N when passed in.
    """

    def get(self, entry_id: str) -> Optional[ExerciseEntry]:
        """
        Get an entry with its sets.

        Args:
            entry_id: Entry UUID

        Returns:
            ExerciseEntry or None if not found
        """
        ...

    def list_by_date(self, user_id: str, entry_date: date) -> List[ExerciseEntry]:
        """All of a user's entries for one day."""
        ...

    def create(
        self, entry: Dict[str, Any], sets: List[Dict[str, Any]]
    ) -> ExerciseEntry:
        """
        Insert an entry and its sets in one transaction.

        Raises:
            TransientInfrastructureError: On database failure (nothing written)
        """
        ...

    def update(self, entry_id: str, updates: Dict[str, Any]) -> ExerciseEntry:
        """Apply a partial update to the entry row (not its sets)."""
        ...

    def replace_sets(
        self, entry_id: str, sets: List[Dict[str, Any]]
    ) -> ExerciseEntry:
        """Replace the whole set list in one transaction."""
        ...

    def delete(self, entry_id: str) -> bool:
        ...

    def create_plan_entries(
        self, user_id: str, entries: List[Dict[str, Any]]
    ) -> int:
        """
        Insert materialized entries (each with its "sets") all-or-nothing.

        Returns:
            Number of entries created
        """
        ...

    def delete_for_assignments(
        self, assignment_ids: Iterable[str], from_date: date
    ) -> int:
        """
        Delete entries produced by the given assignments dated from_date or later.

        Entries dated before from_date are never touched.

        Returns:
            Number of entries deleted (0 when nothing matched)
        """
        ...

    def find_for_exercise_on_date(
        self, user_id: str, exercise_id: str, entry_date: date
    ) -> Optional[ExerciseEntry]:
        ...

    def get_progress(
        self,
        user_id: str,
        exercise_id: str,
        start_date: date,
        end_date: date,
    ) -> List[ExerciseEntry]:
        """Entries for one exercise between two dates (inclusive), oldest first."""
        ...

    def count_for_exercise(self, exercise_id: str) -> int:
        """Number of entries (any user) referencing an exercise."""
        ...

    def recent_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        """Distinct exercise IDs the user logged most recently."""
        ...

    def top_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        """Exercise IDs the user logged most often."""
        ...
