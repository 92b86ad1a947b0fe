"""
Fake ExerciseEntryRepository for testing.

Entry rows keep their sets inline under "sets" and their entry_date as an
ISO string, the way the RPC payloads carry them.
"""

import copy
import itertools
import uuid
from collections import Counter
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from application.exceptions import NotFoundError, TransientInfrastructureError
from domain.converters.db_converters import db_row_to_exercise_entry
from domain.models import ExerciseEntry
from tests.fakes.database import FakeDatabase

TABLE = "exercise_entries"

_sequence = itertools.count()


def new_entry_row(entry: Dict[str, Any], sets: List[Dict[str, Any]]) -> Dict[str, Any]:
    """A stored entry row with a fresh ID and insertion order."""
    row = {k: v for k, v in entry.items() if k != "sets"}
    if isinstance(row.get("entry_date"), date):
        row["entry_date"] = row["entry_date"].isoformat()
    row["id"] = str(uuid.uuid4())
    row["sets"] = [
        {**copy.deepcopy(s), "set_number": position}
        for position, s in enumerate(sets, start=1)
    ]
    row["created_seq"] = next(_sequence)
    return row


class FakeExerciseEntryRepository:
    """In-memory fake implementation of ExerciseEntryRepository for testing."""

    def __init__(self, db: Optional[FakeDatabase] = None):
        self._db = db or FakeDatabase()

    def _to_entry(self, row: Dict[str, Any]) -> ExerciseEntry:
        exercise = self._db.table("exercises").get(row["exercise_id"])
        return db_row_to_exercise_entry(
            {**row, "exercise_name": exercise["name"] if exercise else None}
        )

    def _row(self, entry_id: str) -> Dict[str, Any]:
        row = self._db.table(TABLE).get(entry_id)
        if row is None:
            raise NotFoundError("Exercise entry", entry_id)
        return row

    def _user_rows(self, user_id: str) -> List[Dict[str, Any]]:
        rows = [r for r in self._db.rows(TABLE) if r["user_id"] == user_id]
        return sorted(rows, key=lambda r: (r["entry_date"], r["created_seq"]))

    # -------------------------------------------------------------------------
    # Test helpers
    # -------------------------------------------------------------------------

    def all_entries(self) -> List[ExerciseEntry]:
        rows = sorted(self._db.rows(TABLE), key=lambda r: (r["entry_date"], r["created_seq"]))
        return [self._to_entry(r) for r in rows]

    def planned_entries(self, assignment_ids: Iterable[str]) -> List[ExerciseEntry]:
        ids = set(assignment_ids)
        return [e for e in self.all_entries() if e.workout_plan_assignment_id in ids]

    # -------------------------------------------------------------------------
    # Port
    # -------------------------------------------------------------------------

    def get(self, entry_id: str) -> Optional[ExerciseEntry]:
        row = self._db.table(TABLE).get(entry_id)
        return self._to_entry(row) if row else None

    def list_by_date(self, user_id: str, entry_date: date) -> List[ExerciseEntry]:
        iso = entry_date.isoformat()
        return [self._to_entry(r) for r in self._user_rows(user_id) if r["entry_date"] == iso]

    def create(self, entry: Dict[str, Any], sets: List[Dict[str, Any]]) -> ExerciseEntry:
        self._db.step("create_exercise_entry")
        row = self._db.insert(TABLE, new_entry_row(entry, sets))
        return self._to_entry(row)

    def update(self, entry_id: str, updates: Dict[str, Any]) -> ExerciseEntry:
        self._db.step("update_exercise_entry")
        row = self._row(entry_id)
        row.update(copy.deepcopy(updates))
        return self._to_entry(row)

    def replace_sets(self, entry_id: str, sets: List[Dict[str, Any]]) -> ExerciseEntry:
        self._db.step("replace_exercise_entry_sets")
        row = self._row(entry_id)
        row["sets"] = [
            {**copy.deepcopy(s), "set_number": position}
            for position, s in enumerate(sets, start=1)
        ]
        return self._to_entry(row)

    def delete(self, entry_id: str) -> bool:
        return self._db.table(TABLE).pop(entry_id, None) is not None

    def create_plan_entries(self, user_id: str, entries: List[Dict[str, Any]]) -> int:
        if not entries:
            return 0
        snapshot = self._db.snapshot()
        try:
            for entry in entries:
                self._db.step("create_plan_entry")
                self._db.insert(TABLE, new_entry_row(entry, entry.get("sets") or []))
        except TransientInfrastructureError:
            self._db.restore(snapshot)
            raise
        return len(entries)

    def delete_for_assignments(self, assignment_ids: Iterable[str], from_date: date) -> int:
        self._db.step("delete_for_assignments")
        ids = {i for i in assignment_ids if i}
        iso = from_date.isoformat()
        table = self._db.table(TABLE)
        doomed = [
            row_id for row_id, row in table.items()
            if row.get("workout_plan_assignment_id") in ids and row["entry_date"] >= iso
        ]
        for row_id in doomed:
            del table[row_id]
        return len(doomed)

    def find_for_exercise_on_date(
        self, user_id: str, exercise_id: str, entry_date: date
    ) -> Optional[ExerciseEntry]:
        for entry in self.list_by_date(user_id, entry_date):
            if entry.exercise_id == exercise_id:
                return entry
        return None

    def get_progress(
        self, user_id: str, exercise_id: str, start_date: date, end_date: date
    ) -> List[ExerciseEntry]:
        start, end = start_date.isoformat(), end_date.isoformat()
        return [
            self._to_entry(r)
            for r in self._user_rows(user_id)
            if r["exercise_id"] == exercise_id and start <= r["entry_date"] <= end
        ]

    def count_for_exercise(self, exercise_id: str) -> int:
        return sum(1 for r in self._db.rows(TABLE) if r["exercise_id"] == exercise_id)

    def recent_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        seen: List[str] = []
        for row in reversed(self._user_rows(user_id)):
            if row["exercise_id"] not in seen:
                seen.append(row["exercise_id"])
            if len(seen) >= limit:
                break
        return seen

    def top_exercise_ids(self, user_id: str, limit: int = 5) -> List[str]:
        counts = Counter(r["exercise_id"] for r in reversed(self._user_rows(user_id)))
        return [exercise_id for exercise_id, _ in counts.most_common(limit)]
