"""
Workout Preset Repository Interface (Port).
"""
from typing import Any, Dict, Iterable, List, Optional, Protocol

from domain.models import WorkoutPreset


class WorkoutPresetRepository(Protocol):
    """
    Abstract interface for workout presets and their ordered exercises.

    A preset and its exercise list are always written together.
    """

    def get(self, preset_id: str) -> Optional[WorkoutPreset]:
        ...

    def get_many(self, preset_ids: Iterable[str]) -> Dict[str, WorkoutPreset]:
        ...

    def list_visible(
        self,
        user_id: str,
        *,
        query: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[WorkoutPreset]:
        """
        Presets the user owns or that are public, ordered by name.

        Args:
            user_id: Acting user
            query: Case-insensitive name substring
        """
        ...

    def create(
        self,
        user_id: str,
        preset: Dict[str, Any],
        exercises: List[Dict[str, Any]],
    ) -> WorkoutPreset:
        ...

    def update(
        self,
        preset_id: str,
        preset: Dict[str, Any],
        exercises: Optional[List[Dict[str, Any]]] = None,
    ) -> WorkoutPreset:
        """Update preset fields; when exercises is given, replace the list."""
        ...

    def delete(self, preset_id: str) -> bool:
        ...
