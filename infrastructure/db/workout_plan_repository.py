"""
Supabase implementation of WorkoutPlanRepository.

Tables:
- workout_plan_templates
- workout_plan_template_assignments (cascade on template delete)

Saving and deleting run through plpgsql functions so that template,
assignment replacement, reversal and materialized entries commit together:
- save_workout_plan(p_template, p_assignments, p_entries, p_reverse_from)
- delete_workout_plan(p_template_id, p_user_id, p_reverse_from)
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from supabase import Client

from application.ports.workout_plan_repository import SavedPlan
from domain.converters.db_converters import (
    assignments_to_db_rows,
    db_row_to_workout_plan,
    workout_plan_to_db_row,
)
from domain.models import WorkoutPlanTemplate
from infrastructure.db.query import first, run

logger = logging.getLogger(__name__)

TABLE = "workout_plan_templates"
PLAN_SELECT = (
    "*, workout_plan_template_assignments(*, exercises(name), workout_presets(name))"
)


class SupabaseWorkoutPlanRepository:
    """
    Supabase-backed workout plan repository.

    Reads embed assignments with their exercise / preset names; writes go
    through RPCs only.
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def get(self, template_id: str) -> Optional[WorkoutPlanTemplate]:
        response = run(
            self._client.table(TABLE).select(PLAN_SELECT).eq("id", template_id).limit(1),
            "get_workout_plan",
            template_id=template_id,
        )
        row = first(response)
        return db_row_to_workout_plan(row) if row else None

    def list_by_user(self, user_id: str) -> List[WorkoutPlanTemplate]:
        response = run(
            self._client.table(TABLE)
            .select(PLAN_SELECT)
            .eq("user_id", user_id)
            .order("start_date", desc=True),
            "list_workout_plans",
            user_id=user_id,
        )
        return [db_row_to_workout_plan(row) for row in response.data or []]

    def get_active_for_date(
        self, user_id: str, day: date
    ) -> Optional[WorkoutPlanTemplate]:
        iso = day.isoformat()
        response = run(
            self._client.table(TABLE)
            .select(PLAN_SELECT)
            .eq("user_id", user_id)
            .eq("is_active", True)
            .lte("start_date", iso)
            .or_(f"end_date.is.null,end_date.gte.{iso}")
            .order("start_date", desc=True)
            .limit(1),
            "get_active_workout_plan",
            user_id=user_id,
        )
        row = first(response)
        return db_row_to_workout_plan(row) if row else None

    def save_atomic(
        self,
        template: WorkoutPlanTemplate,
        entries: List[Dict[str, Any]],
        reverse_from: Optional[date] = None,
    ) -> SavedPlan:
        """
        Save a template with its materialization in one transaction.

        Raises:
            TransientInfrastructureError: If the RPC fails (nothing committed)
        """
        response = run(
            self._client.rpc(
                "save_workout_plan",
                {
                    "p_template": workout_plan_to_db_row(template),
                    "p_assignments": assignments_to_db_rows(template),
                    "p_entries": entries,
                    "p_reverse_from": reverse_from.isoformat() if reverse_from else None,
                },
            ),
            "save_workout_plan",
            template_id=template.id,
            user_id=template.user_id,
        )
        data = response.data or {}
        saved_row = data.get("template")
        saved = db_row_to_workout_plan(saved_row) if saved_row else template
        return SavedPlan(
            template=saved,
            entries_created=int(data.get("entries_created") or 0),
            entries_removed=int(data.get("entries_removed") or 0),
        )

    def delete_atomic(self, template_id: str, user_id: str, reverse_from: date) -> int:
        response = run(
            self._client.rpc(
                "delete_workout_plan",
                {
                    "p_template_id": template_id,
                    "p_user_id": user_id,
                    "p_reverse_from": reverse_from.isoformat(),
                },
            ),
            "delete_workout_plan",
            template_id=template_id,
            user_id=user_id,
        )
        return int(response.data or 0)
