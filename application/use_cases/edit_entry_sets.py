"""
EditEntrySets Use Case.

Set-list edits on an existing entry: append, duplicate, remove and reorder.
Each edit computes the new list with domain.services.set_list (always
numbered 1..N) and replaces the stored list in one repository call.
"""

import logging
from typing import Callable, List, Optional

from application.context import RequestContext
from application.exceptions import ValidationError
from application.ports import ExerciseEntryRepository
from application.use_cases.log_exercise_entry import get_entry_for_user
from domain.converters.db_converters import entry_sets_to_db_rows
from domain.models import ExerciseEntry, ExerciseEntrySet
from domain.services import set_list

logger = logging.getLogger(__name__)


class EditEntrySetsUseCase:
    def __init__(self, entry_repo: ExerciseEntryRepository) -> None:
        self._entry_repo = entry_repo

    def _apply(
        self,
        entry_id: str,
        ctx: RequestContext,
        edit: Callable[[List[ExerciseEntrySet]], List[ExerciseEntrySet]],
    ) -> ExerciseEntry:
        entry = get_entry_for_user(self._entry_repo, entry_id, ctx.user_id, mutating=True)
        try:
            new_sets = edit(list(entry.sets))
        except IndexError as e:
            raise ValidationError(str(e)) from e
        return self._entry_repo.replace_sets(entry_id, entry_sets_to_db_rows(new_sets))

    def append(
        self,
        entry_id: str,
        ctx: RequestContext,
        new_set: Optional[ExerciseEntrySet] = None,
    ) -> ExerciseEntry:
        """Add a set at the end; without new_set the last set is repeated."""
        return self._apply(entry_id, ctx, lambda sets: set_list.append_set(sets, new_set))

    def duplicate(self, entry_id: str, ctx: RequestContext, set_number: int) -> ExerciseEntry:
        """Copy set `set_number` (1-based) right after itself."""
        return self._apply(
            entry_id, ctx, lambda sets: set_list.duplicate_set(sets, set_number - 1)
        )

    def remove(self, entry_id: str, ctx: RequestContext, set_number: int) -> ExerciseEntry:
        return self._apply(
            entry_id, ctx, lambda sets: set_list.remove_set(sets, set_number - 1)
        )

    def reorder(
        self, entry_id: str, ctx: RequestContext, from_index: int, to_index: int
    ) -> ExerciseEntry:
        """Move a set between 0-based positions."""
        return self._apply(
            entry_id, ctx, lambda sets: set_list.move_set(sets, from_index, to_index)
        )
