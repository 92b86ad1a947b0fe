"""
Supabase implementation of ExerciseEntryRepository.

Tables:
- exercise_entries: one row per logged exercise occurrence
- exercise_entry_sets: ordered sets, (entry_id, set_number) unique

Writes that touch an entry and its sets go through RPCs so they run in one
transaction:
- create_exercise_entry(p_entry, p_sets) -> uuid
- replace_exercise_entry_sets(p_entry_id, p_sets)
- create_plan_entries(p_entries) -> integer
"""
import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from supabase import Client

from application.exceptions import NotFoundError
from domain.converters.db_converters import db_row_to_exercise_entry
from domain.models import ExerciseEntry
from infrastructure.db.query import first, run

logger = logging.getLogger(__name__)

TABLE = "exercise_entries"
ENTRY_SELECT = "*, exercise_entry_sets(*), exercises(name)"

# Rows scanned when ranking a user's exercises by recency or frequency
USAGE_SCAN_LIMIT = 1000


class SupabaseExerciseEntryRepository:
    """Supabase implementation of ExerciseEntryRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def get(self, entry_id: str) -> Optional[ExerciseEntry]:
        response = run(
            self._client.table(TABLE).select(ENTRY_SELECT).eq("id", entry_id).limit(1),
            "get_exercise_entry",
            entry_id=entry_id,
        )
        row = first(response)
        return db_row_to_exercise_entry(row) if row else None

    def _require(self, entry_id: str) -> ExerciseEntry:
        entry = self.get(entry_id)
        if entry is None:
            raise NotFoundError("Exercise entry", entry_id)
        return entry

    def list_by_date(self, user_id: str, entry_date: date) -> List[ExerciseEntry]:
        response = run(
            self._client.table(TABLE)
            .select(ENTRY_SELECT)
            .eq("user_id", user_id)
            .eq("entry_date", entry_date.isoformat())
            .order("created_at"),
            "list_exercise_entries",
            user_id=user_id,
        )
        return [db_row_to_exercise_entry(row) for row in response.data or []]

    def create(self, entry: Dict[str, Any], sets: List[Dict[str, Any]]) -> ExerciseEntry:
        response = run(
            self._client.rpc("create_exercise_entry", {"p_entry": entry, "p_sets": sets}),
            "create_exercise_entry",
            user_id=entry.get("user_id"),
        )
        return self._require(str(response.data))

    def update(self, entry_id: str, updates: Dict[str, Any]) -> ExerciseEntry:
        response = run(
            self._client.table(TABLE).update(updates).eq("id", entry_id),
            "update_exercise_entry",
            entry_id=entry_id,
        )
        if not response.data:
            raise NotFoundError("Exercise entry", entry_id)
        return self._require(entry_id)

    def replace_sets(self, entry_id: str, sets: List[Dict[str, Any]]) -> ExerciseEntry:
        run(
            self._client.rpc(
                "replace_exercise_entry_sets", {"p_entry_id": entry_id, "p_sets": sets}
            ),
            "replace_exercise_entry_sets",
            entry_id=entry_id,
        )
        return self._require(entry_id)

    def delete(self, entry_id: str) -> bool:
        response = run(
            self._client.table(TABLE).delete().eq("id", entry_id),
            "delete_exercise_entry",
            entry_id=entry_id,
        )
        return bool(response.data)

    def create_plan_entries(self, user_id: str, entries: List[Dict[str, Any]]) -> int:
        if not entries:
            return 0
        response = run(
            self._client.rpc("create_plan_entries", {"p_entries": entries}),
            "create_plan_entries",
            user_id=user_id,
            entries=len(entries),
        )
        return int(response.data or 0)

    def delete_for_assignments(self, assignment_ids: Iterable[str], from_date: date) -> int:
        ids = [i for i in assignment_ids if i]
        if not ids:
            return 0
        response = run(
            self._client.table(TABLE)
            .delete()
            .in_("workout_plan_assignment_id", ids)
            .gte("entry_date", from_date.isoformat()),
            "reverse_plan_entries",
            from_date=from_date.isoformat(),
        )
        removed = len(response.data or [])
        logger.info(f"Removed {removed} planned entries from {from_date}")
        return removed

    def find_for_exercise_on_date(
        self, user_id: str, exercise_id: str, entry_date: date
    ) -> Optional[ExerciseEntry]:
        response = run(
            self._client.table(TABLE)
            .select(ENTRY_SELECT)
            .eq("user_id", user_id)
            .eq("exercise_id", exercise_id)
            .eq("entry_date", entry_date.isoformat())
            .limit(1),
            "find_exercise_entry",
            user_id=user_id,
        )
        row = first(response)
        return db_row_to_exercise_entry(row) if row else None

    def get_progress(
        self, user_id: str, exercise_id: str, start_date: date, end_date: date
    ) -> List[ExerciseEntry]:
        response = run(
            self._client.table(TABLE)
            .select(ENTRY_SELECT)
            .eq("user_id", user_id)
            .eq("exercise_id", exercise_id)
            .gte("entry_date", start_date.isoformat())
            .lte("entry_date", end_date.isoformat())
            .order("entry_date"),
            "get_exercise_progress",
            user_id=user_id,
        )
        return [db_row_to_exercise_entry(row) for row in response.data or []]

    def count_for_exercise(self, exercise_id: str) -> int:
        response = run(
            self._client.table(TABLE)
            .select("id", count="exact")
            .eq("exercise_id", exercise_id)
            .limit(1),
            "count_exercise_entries",
            exercise_id=exercise_id,
        )
        return response.count or 0

    def _usage_rows(self, user_id: str) -> List[Dict[str, Any]]:
        response = run(
            self._client.table(TABLE)
            .select("exercise_id, entry_date")
            .eq("user_id", user_id)
            .order("entry_date", desc=True)
            .order("created_at", desc=True)
            .limit(USAGE_SCAN_LIMIT),
            "exercise_usage",
            user_id=user_id,
        )
        return response.data or []

    def recent_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        seen: List[str] = []
        for row in self._usage_rows(user_id):
            exercise_id = str(row["exercise_id"])
            if exercise_id not in seen:
                seen.append(exercise_id)
            if len(seen) >= limit:
                break
        return seen

    def top_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        counts = Counter(str(row["exercise_id"]) for row in self._usage_rows(user_id))
        return [exercise_id for exercise_id, _ in counts.most_common(limit)]
