"""
Workout Plan Repository Interface (Port).

Templates and their assignments are always written together with the
materialization side effects (reversal, new entries) in one transaction.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

from domain.models import WorkoutPlanTemplate


@dataclass
class SavedPlan:
    """Outcome of an atomic plan save."""

    template: WorkoutPlanTemplate
    entries_created: int = 0
    entries_removed: int = 0


class WorkoutPlanRepository(Protocol):
    """
    Abstract interface for workout plan templates.

    Reads return templates with assignments in template order, each
    carrying the joined workout_preset_name / exercise_name.
    """

    def get(self, template_id: str) -> Optional[WorkoutPlanTemplate]:
        ...

    def list_by_user(self, user_id: str) -> List[WorkoutPlanTemplate]:
        """A user's templates, newest start_date first."""
        ...

    def get_active_for_date(
        self, user_id: str, day: date
    ) -> Optional[WorkoutPlanTemplate]:
        """
        The active template covering a day.

        When several active templates overlap, the one with the latest
        start_date wins.
        """
        ...

    def save_atomic(
        self,
        template: WorkoutPlanTemplate,
        entries: List[Dict[str, Any]],
        reverse_from: Optional[date] = None,
    ) -> SavedPlan:
        """
        Persist a template and its materialization in one transaction.

        Steps, all-or-nothing:
        1. Upsert the template row
        2. If reverse_from is set, delete entries of the template's current
           assignments dated reverse_from or later
        3. Replace all assignments with template.assignments (IDs preassigned)
        4. Insert the planned entries with their sets

        Args:
            template: Template with assignment IDs already generated
            entries: Planned entry payloads (see PlannedEntry.to_row)
            reverse_from: First day whose planned entries are removed

        Raises:
            TransientInfrastructureError: On failure; nothing was changed
        """
        ...

    def delete_atomic(
        self, template_id: str, user_id: str, reverse_from: date
    ) -> int:
        """
        Reverse future entries, then delete the template and its assignments.

        Returns:
            Number of entries removed
        """
        ...
