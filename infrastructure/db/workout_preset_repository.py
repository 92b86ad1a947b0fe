"""
Supabase implementation of WorkoutPresetRepository.

Tables:
- workout_presets
- workout_preset_exercises (ordered by sort_order, cascade on preset delete)

Preset + exercise writes use the create_workout_preset and
update_workout_preset RPCs.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from application.exceptions import NotFoundError
from domain.converters.db_converters import db_row_to_workout_preset
from domain.models import WorkoutPreset
from infrastructure.db.query import first, run

logger = logging.getLogger(__name__)

TABLE = "workout_presets"
PRESET_SELECT = "*, workout_preset_exercises(*, exercises(name))"


class SupabaseWorkoutPresetRepository:
    """Supabase implementation of WorkoutPresetRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, preset_id: str) -> Optional[WorkoutPreset]:
        response = run(
            self._client.table(TABLE).select(PRESET_SELECT).eq("id", preset_id).limit(1),
            "get_workout_preset",
            preset_id=preset_id,
        )
        row = first(response)
        return db_row_to_workout_preset(row) if row else None

    def _require(self, preset_id: str) -> WorkoutPreset:
        preset = self.get(preset_id)
        if preset is None:
            raise NotFoundError("Workout preset", preset_id)
        return preset

    def get_many(self, preset_ids: Iterable[str]) -> Dict[str, WorkoutPreset]:
        ids = [i for i in set(preset_ids) if i]
        if not ids:
            return {}
        response = run(
            self._client.table(TABLE).select(PRESET_SELECT).in_("id", ids),
            "get_workout_presets",
        )
        presets = [db_row_to_workout_preset(row) for row in response.data or []]
        return {p.id: p for p in presets}

    def list_visible(
        self,
        user_id: str,
        *,
        query: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[WorkoutPreset]:
        builder = (
            self._client.table(TABLE)
            .select(PRESET_SELECT)
            .or_(f"user_id.eq.{user_id},is_public.eq.true")
        )
        if query:
            builder = builder.ilike("name", f"%{query}%")
        response = run(
            builder.order("name").range(offset, offset + limit - 1),
            "list_workout_presets",
            user_id=user_id,
        )
        return [db_row_to_workout_preset(row) for row in response.data or []]

    def create(
        self,
        user_id: str,
        preset: Dict[str, Any],
        exercises: List[Dict[str, Any]],
    ) -> WorkoutPreset:
        response = run(
            self._client.rpc(
                "create_workout_preset",
                {"p_preset": {**preset, "user_id": user_id}, "p_exercises": exercises},
            ),
            "create_workout_preset",
            user_id=user_id,
        )
        return self._require(str(response.data))

    def update(
        self,
        preset_id: str,
        preset: Dict[str, Any],
        exercises: Optional[List[Dict[str, Any]]] = None,
    ) -> WorkoutPreset:
        run(
            self._client.rpc(
                "update_workout_preset",
                {"p_preset_id": preset_id, "p_preset": preset, "p_exercises": exercises},
            ),
            "update_workout_preset",
            preset_id=preset_id,
        )
        return self._require(preset_id)

    def delete(self, preset_id: str) -> bool:
        response = run(
            self._client.table(TABLE).delete().eq("id", preset_id),
            "delete_workout_preset",
            preset_id=preset_id,
        )
        return bool(response.data)
