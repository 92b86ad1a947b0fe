"""
Set-list editing for exercise entries.

Every operation returns a new list whose set_number values are exactly
1..N in list order. Inputs are never mutated.
"""
from typing import List, Optional, Sequence

from domain.models.exercise_entry import ExerciseEntrySet, SetType


def renumber_sets(sets: Sequence[ExerciseEntrySet]) -> List[ExerciseEntrySet]:
    """Copy the sets with set_number reassigned to 1..N."""
    return [s.model_copy(update={"set_number": i}) for i, s in enumerate(sets, start=1)]


def _check_index(sets: Sequence[ExerciseEntrySet], index: int) -> None:
    if index < 0 or index >= len(sets):
        raise IndexError(f"set index {index} out of range for {len(sets)} sets")


def append_set(
    sets: Sequence[ExerciseEntrySet],
    new_set: Optional[ExerciseEntrySet] = None,
) -> List[ExerciseEntrySet]:
    """
    Add a set at the end.

    With no new_set, the last set is repeated (or a blank working set is
    added to an empty list), matching the "Add Set" button.
    """
    if new_set is None:
        new_set = sets[-1] if sets else ExerciseEntrySet()
    return renumber_sets([*sets, new_set])


def duplicate_set(sets: Sequence[ExerciseEntrySet], index: int) -> List[ExerciseEntrySet]:
    """Insert a copy of the set at index right after it."""
    _check_index(sets, index)
    result = list(sets)
    result.insert(index + 1, sets[index].model_copy())
    return renumber_sets(result)


def remove_set(sets: Sequence[ExerciseEntrySet], index: int) -> List[ExerciseEntrySet]:
    _check_index(sets, index)
    result = list(sets)
    del result[index]
    return renumber_sets(result)


def move_set(
    sets: Sequence[ExerciseEntrySet], from_index: int, to_index: int
) -> List[ExerciseEntrySet]:
    """Move one set to a new position (drag-and-drop reorder)."""
    _check_index(sets, from_index)
    _check_index(sets, to_index)
    result = list(sets)
    moved = result.pop(from_index)
    result.insert(to_index, moved)
    return renumber_sets(result)


def expand_target_sets(
    sets: Optional[int],
    reps: Optional[int] = None,
    weight: Optional[float] = None,
    duration: Optional[float] = None,
) -> List[ExerciseEntrySet]:
    """
    Build working sets from target values.

    "3 sets of 15" becomes three identical sets. A target with reps, weight
    or duration but no set count is one set. A target with nothing at all
    yields no sets.
    """
    has_values = any(v is not None for v in (reps, weight, duration))
    count = sets if sets else (1 if has_values else 0)
    return [
        ExerciseEntrySet(
            set_number=i,
            set_type=SetType.WORKING,
            reps=reps,
            weight=weight,
            duration=duration,
        )
        for i in range(1, count + 1)
    ]
