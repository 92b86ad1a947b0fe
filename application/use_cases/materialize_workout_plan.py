"""
MaterializeWorkoutPlan Use Case.

Expands a workout plan template into dated exercise entries, and reverses
(deletes) the future entries a template produced.

The forward pass is normally run inside SaveWorkoutPlanUseCase, which hands
the planned entries to the repository's atomic save. execute() and reverse()
are the standalone forms used by the explicit /materialize and /reverse
endpoints.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from application.context import RequestContext
from application.exceptions import NotFoundError, TransientInfrastructureError
from application.ports import (
    ExerciseEntryRepository,
    ExerciseRepository,
    WorkoutPlanRepository,
    WorkoutPresetRepository,
)
from application.use_cases.estimate_calories import EstimateCaloriesUseCase
from domain.models import Exercise, WorkoutPlanTemplate, WorkoutPreset
from domain.services.plan_materializer import (
    DEFAULT_SESSION_MINUTES,
    PlannedEntry,
    plan_entries,
    resolve_window,
)

logger = logging.getLogger(__name__)


@dataclass
class MaterializationResult:
    """Result of a standalone forward pass or reversal."""

    template_id: str
    entries_created: int = 0
    entries_removed: int = 0


def get_template_for_user(
    plan_repo: WorkoutPlanRepository, template_id: str, user_id: str
) -> WorkoutPlanTemplate:
    """Load a template the user owns; anything else reads as not found."""
    template = plan_repo.get(template_id)
    if template is None or template.user_id != user_id:
        raise NotFoundError("Workout plan template", template_id)
    return template


class MaterializeWorkoutPlanUseCase:
    """
    Plans and persists materialized entries for a template.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = MaterializeWorkoutPlanUseCase(
        ...     plan_repo, entry_repo, exercise_repo, preset_repo, estimator
        ... )
        >>> entries = use_case.plan(template, ctx)
    """

    def __init__(
        self,
        plan_repo: WorkoutPlanRepository,
        entry_repo: ExerciseEntryRepository,
        exercise_repo: ExerciseRepository,
        preset_repo: WorkoutPresetRepository,
        calorie_estimator: EstimateCaloriesUseCase,
        default_session_minutes: float = DEFAULT_SESSION_MINUTES,
    ) -> None:
        self._plan_repo = plan_repo
        self._entry_repo = entry_repo
        self._exercise_repo = exercise_repo
        self._preset_repo = preset_repo
        self._calorie_estimator = calorie_estimator
        self._default_session_minutes = default_session_minutes

    def load_targets(
        self, template: WorkoutPlanTemplate
    ) -> Tuple[Dict[str, Exercise], Dict[str, WorkoutPreset]]:
        """
        Load every exercise and preset the template's assignments reference.

        Assignments may only target presets and exercises the template's
        owner can see. Exercises inside a preset are checked against the
        preset's owner, who picked them.

        Raises:
            NotFoundError: If any referenced preset or exercise is missing
                or private to another user
        """
        user_id = template.user_id
        preset_ids = {a.workout_preset_id for a in template.assignments if a.targets_preset}
        presets = self._preset_repo.get_many(preset_ids) if preset_ids else {}
        for preset_id in preset_ids:
            preset = presets.get(preset_id)
            if preset is None or not preset.is_visible_to(user_id):
                raise NotFoundError("Workout preset", preset_id)

        viewers: Dict[str, Set[str]] = {
            a.exercise_id: {user_id} for a in template.assignments if a.exercise_id
        }
        for preset in presets.values():
            for pe in preset.exercises:
                viewers.setdefault(pe.exercise_id, set()).add(preset.user_id)

        exercises = self._exercise_repo.get_many(set(viewers)) if viewers else {}
        for exercise_id, readers in viewers.items():
            exercise = exercises.get(exercise_id)
            if exercise is None or not all(exercise.is_visible_to(r) for r in readers):
                raise NotFoundError("Exercise", exercise_id)

        return exercises, presets

    def plan(
        self,
        template: WorkoutPlanTemplate,
        ctx: RequestContext,
        *,
        rematerialize: bool = False,
    ) -> List[PlannedEntry]:
        """
        Plan the entries for a template without writing anything.

        Inactive templates and templates without assignments plan nothing,
        but their targets are still checked.

        Args:
            template: Template whose assignments already carry IDs
            ctx: Acting user and client date
            rematerialize: Start from client_today instead of start_date

        Returns:
            Planned entries in day, assignment, preset order

        Raises:
            NotFoundError: An assignment targets a missing or private item
        """
        if not template.assignments:
            return []

        exercises, presets = self.load_targets(template)
        if not template.is_active:
            return []

        window = resolve_window(template, ctx.client_today, rematerialize=rematerialize)
        if window.is_empty:
            return []

        planned = plan_entries(
            template,
            window,
            exercises,
            presets,
            self._calorie_estimator.rate_function(ctx.user_id),
            default_minutes=self._default_session_minutes,
        )
        ctx.logger.info(
            f"Planned {len(planned)} entries for template {template.id} "
            f"from {window.start} to {window.end}"
        )
        return planned

    def execute(self, template_id: str, ctx: RequestContext) -> MaterializationResult:
        """
        Standalone forward pass from the client's today onward.

        Does not reverse first; calling it twice duplicates entries.
        """
        template = get_template_for_user(self._plan_repo, template_id, ctx.user_id)
        planned = self.plan(template, ctx, rematerialize=True)
        if not planned:
            return MaterializationResult(template_id=template_id)

        try:
            created = self._entry_repo.create_plan_entries(
                ctx.user_id, [p.to_row(ctx.user_id) for p in planned]
            )
        except TransientInfrastructureError:
            logger.error(
                f"Materialization failed for template {template_id} user {ctx.user_id}"
            )
            raise

        return MaterializationResult(template_id=template_id, entries_created=created)

    def reverse(self, template_id: str, ctx: RequestContext) -> MaterializationResult:
        """
        Delete the template's entries dated client_today or later.

        Past entries are never touched. Reversing twice is a no-op the
        second time.
        """
        template = get_template_for_user(self._plan_repo, template_id, ctx.user_id)
        if not template.assignment_ids:
            return MaterializationResult(template_id=template_id)

        try:
            removed = self._entry_repo.delete_for_assignments(
                template.assignment_ids, ctx.client_today
            )
        except TransientInfrastructureError:
            logger.error(f"Reversal failed for template {template_id} user {ctx.user_id}")
            raise

        ctx.logger.info(f"Reversed {removed} entries for template {template_id}")
        return MaterializationResult(template_id=template_id, entries_removed=removed)
