"""
Supabase implementation of ExerciseRepository.

Queries the exercises table. JSON-array columns are jsonb; the converter
still accepts legacy JSON-encoded text.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from supabase import Client

from application.exceptions import NotFoundError
from domain.converters.db_converters import db_row_to_exercise
from domain.converters.json_arrays import JSON_ARRAY_FIELDS
from domain.models import Exercise
from infrastructure.db.query import first, run

logger = logging.getLogger(__name__)

TABLE = "exercises"


def _jsonb_payload(data: Dict[str, Any]) -> Dict[str, Any]:
    """Make sure JSON-array columns are written as lists, never as text."""
    payload = dict(data)
    for field in JSON_ARRAY_FIELDS:
        if field in payload and payload[field] is None:
            payload[field] = []
    return payload


class SupabaseExerciseRepository:
    """
    Supabase implementation of ExerciseRepository protocol.

    Visibility for search():
    - all: global (user_id is null), shared_with_public, or the user's own
    - own: user_id = user
    - public: global or shared
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get(self, exercise_id: str) -> Optional[Exercise]:
        response = run(
            self._client.table(TABLE).select("*").eq("id", exercise_id).limit(1),
            "get_exercise",
            exercise_id=exercise_id,
        )
        row = first(response)
        return db_row_to_exercise(row) if row else None

    def get_many(self, exercise_ids: Iterable[str]) -> Dict[str, Exercise]:
        ids = [i for i in set(exercise_ids) if i]
        if not ids:
            return {}
        response = run(
            self._client.table(TABLE).select("*").in_("id", ids),
            "get_exercises",
        )
        exercises = [db_row_to_exercise(row) for row in response.data or []]
        return {e.id: e for e in exercises}

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
        builder = self._client.table(TABLE).select("*", count="exact")

        if ownership == "own":
            builder = builder.eq("user_id", user_id)
        elif ownership == "public":
            builder = builder.or_("user_id.is.null,shared_with_public.eq.true")
        else:
            builder = builder.or_(
                f"user_id.is.null,shared_with_public.eq.true,user_id.eq.{user_id}"
            )

        if query:
            builder = builder.ilike("name", f"%{query}%")
        if category:
            builder = builder.ilike("category", category)

        response = run(
            builder.order("name").range(offset, offset + limit - 1),
            "search_exercises",
            user_id=user_id,
        )
        items = [db_row_to_exercise(row) for row in response.data or []]
        total = response.count if response.count is not None else len(items)
        return items, total

    def find_by_name(self, user_id: str, name: str) -> Optional[Exercise]:
        response = run(
            self._client.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("name", name)
            .limit(1),
            "find_exercise_by_name",
            user_id=user_id,
        )
        row = first(response)
        return db_row_to_exercise(row) if row else None

    def create(self, data: Dict[str, Any]) -> Exercise:
        response = run(
            self._client.table(TABLE).insert(_jsonb_payload(data)),
            "create_exercise",
            user_id=data.get("user_id"),
        )
        return db_row_to_exercise(response.data[0])

    def update(self, exercise_id: str, updates: Dict[str, Any]) -> Exercise:
        response = run(
            self._client.table(TABLE).update(_jsonb_payload(updates)).eq("id", exercise_id),
            "update_exercise",
            exercise_id=exercise_id,
        )
        row = first(response)
        if row is None:
            raise NotFoundError("Exercise", exercise_id)
        return db_row_to_exercise(row)

    def delete(self, exercise_id: str) -> bool:
        response = run(
            self._client.table(TABLE).delete().eq("id", exercise_id),
            "delete_exercise",
            exercise_id=exercise_id,
        )
        return bool(response.data)
