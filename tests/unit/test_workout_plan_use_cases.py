"""
Unit tests for the workout plan use cases: save (create/update), delete,
standalone materialize and reverse.

Runs on the in-memory fakes; the plan fake applies the atomic save step by
step and restores its snapshot on failure.
"""

from datetime import date

import pytest

from application.exceptions import (
    ForbiddenError,
    NotFoundError,
    TransientInfrastructureError,
    ValidationError,
)
from tests.fakes.seed_data import BENCH, OTHER_USER_ID, PRIVATE_CURL, make_ctx


def monday_bench_plan(**overrides):
    data = {
        "plan_name": "Bench Mondays",
        "description": None,
        "start_date": date(2024, 1, 1),
        "end_date": date(2024, 1, 14),
        "is_active": True,
        "assignments": [
            {"day_of_week": 1, "exercise_id": BENCH["id"], "sets": 1, "reps": 10,
             "weight": 50, "duration": 0},
        ],
    }
    data.update(overrides)
    return data


def entry_dates(entries):
    return [e.entry_date for e in entries]


@pytest.mark.unit
class TestCreateWorkoutPlan:
    def test_create_materializes_from_start_date(self, repos, save_plan):
        """Two Mondays in the window give two entries with fallback duration."""
        # Client today lies after start: creation still starts at start_date
        result = save_plan.create(make_ctx(today=date(2024, 1, 5)), monday_bench_plan())

        assert result.is_update is False
        assert result.entries_created == 2
        assert result.entries_removed == 0

        entries = repos.entries.all_entries()
        assert entry_dates(entries) == [date(2024, 1, 1), date(2024, 1, 8)]
        for entry in entries:
            assert entry.exercise_name == "Bench Press"
            assert entry.duration_minutes == 30
            # Bench Press, strength/beginner at 70 kg: 294 kcal/h
            assert entry.calories_burned == 147.0
            assert [(s.set_number, s.reps, s.weight) for s in entry.sets] == [(1, 10, 50)]
            assert entry.workout_plan_assignment_id == result.template.assignments[0].id

    def test_created_template_has_ids_and_display_names(self, ctx, save_plan):
        result = save_plan.create(ctx, monday_bench_plan())
        template = result.template

        assert template.user_id == ctx.user_id
        assert len(template.assignments) == 1
        assignment = template.assignments[0]
        assert assignment.id
        assert assignment.template_id == template.id
        assert assignment.exercise_name == "Bench Press"

    def test_preset_assignment_creates_separate_entries(self, repos, ctx, save_plan):
        repos.presets.seed(
            "preset-1",
            ctx.user_id,
            "Bodyweight",
            [
                {"exercise_id": "ex-squat", "sets": 3, "reps": 20},
                {"exercise_id": "ex-bench", "sets": 3, "reps": 15},
            ],
        )
        result = save_plan.create(
            ctx,
            monday_bench_plan(assignments=[{"day_of_week": 3, "workout_preset_id": "preset-1"}]),
        )

        assert result.template.assignments[0].workout_preset_name == "Bodyweight"
        entries = repos.entries.all_entries()
        assert [(e.entry_date, e.exercise_id) for e in entries] == [
            (date(2024, 1, 3), "ex-squat"),
            (date(2024, 1, 3), "ex-bench"),
            (date(2024, 1, 10), "ex-squat"),
            (date(2024, 1, 10), "ex-bench"),
        ]
        assert all(len(e.sets) == 3 for e in entries)

    def test_inactive_template_is_saved_without_entries(self, repos, ctx, save_plan):
        result = save_plan.create(ctx, monday_bench_plan(is_active=False))

        assert result.entries_created == 0
        assert repos.entries.all_entries() == []
        assert repos.plans.get(result.template.id) is not None

    def test_open_ended_plan_stops_after_one_year(self, repos, ctx, save_plan):
        save_plan.create(ctx, monday_bench_plan(end_date=None))
        last = max(entry_dates(repos.entries.all_entries()))
        assert last <= date(2025, 1, 1)
        assert last == date(2024, 12, 30)

    def test_missing_exercise_is_not_found_and_nothing_written(self, repos, ctx, save_plan):
        data = monday_bench_plan(assignments=[{"day_of_week": 1, "exercise_id": "nope"}])
        with pytest.raises(NotFoundError):
            save_plan.create(ctx, data)
        assert repos.plans.list_by_user(ctx.user_id) == []

    def test_missing_preset_is_not_found(self, ctx, save_plan):
        data = monday_bench_plan(assignments=[{"day_of_week": 1, "workout_preset_id": "nope"}])
        with pytest.raises(NotFoundError):
            save_plan.create(ctx, data)

    def test_other_users_private_exercise_is_not_found(self, repos, ctx, save_plan):
        data = monday_bench_plan(
            assignments=[{"day_of_week": 1, "exercise_id": PRIVATE_CURL["id"]}]
        )
        with pytest.raises(NotFoundError):
            save_plan.create(ctx, data)
        assert repos.plans.list_by_user(ctx.user_id) == []
        assert repos.entries.all_entries() == []

    def test_other_users_private_preset_is_not_found(self, repos, ctx, save_plan):
        repos.presets.seed(
            "p-priv", OTHER_USER_ID, "Others private", [{"exercise_id": "ex-squat"}]
        )
        data = monday_bench_plan(assignments=[{"day_of_week": 1, "workout_preset_id": "p-priv"}])
        with pytest.raises(NotFoundError):
            save_plan.create(ctx, data)
        assert repos.plans.list_by_user(ctx.user_id) == []
        assert repos.entries.all_entries() == []

    def test_inactive_template_still_checks_targets(self, repos, ctx, save_plan):
        data = monday_bench_plan(
            is_active=False,
            assignments=[{"day_of_week": 1, "exercise_id": PRIVATE_CURL["id"]}],
        )
        with pytest.raises(NotFoundError):
            save_plan.create(ctx, data)
        assert repos.plans.list_by_user(ctx.user_id) == []

    def test_public_preset_may_use_its_owners_private_exercise(self, repos, ctx, save_plan):
        repos.presets.seed(
            "p-shared",
            OTHER_USER_ID,
            "Shared curls",
            [{"exercise_id": PRIVATE_CURL["id"], "sets": 2}],
            is_public=True,
        )
        result = save_plan.create(
            ctx,
            monday_bench_plan(assignments=[{"day_of_week": 1, "workout_preset_id": "p-shared"}]),
        )
        assert result.entries_created == 2
        assert {e.exercise_id for e in repos.entries.all_entries()} == {PRIVATE_CURL["id"]}

    def test_assignment_without_target_is_rejected(self, repos, ctx, save_plan):
        data = monday_bench_plan(assignments=[{"day_of_week": 1}])
        with pytest.raises(ValidationError) as exc_info:
            save_plan.create(ctx, data)
        assert exc_info.value.errors
        assert repos.plans.list_by_user(ctx.user_id) == []

    def test_assignment_with_both_targets_is_rejected(self, ctx, save_plan):
        data = monday_bench_plan(
            assignments=[{"day_of_week": 1, "exercise_id": "ex-bench", "workout_preset_id": "p"}]
        )
        with pytest.raises(ValidationError):
            save_plan.create(ctx, data)

    def test_end_before_start_is_rejected(self, ctx, save_plan):
        with pytest.raises(ValidationError):
            save_plan.create(ctx, monday_bench_plan(end_date=date(2023, 12, 1)))

    def test_failed_entry_insert_rolls_back_everything(self, repos, ctx, save_plan):
        """Failing on the sixth Monday leaves no entries and no template."""
        repos.db.simulate_failure("save_workout_plan.insert_entry", after=5)

        with pytest.raises(TransientInfrastructureError):
            save_plan.create(ctx, monday_bench_plan(end_date=None))

        assert repos.db.calls.count("save_workout_plan.insert_entry") == 6
        assert repos.entries.all_entries() == []
        assert repos.plans.list_by_user(ctx.user_id) == []


@pytest.mark.unit
class TestUpdateWorkoutPlan:
    def test_edit_mid_plan_keeps_past_and_rematerializes_future(self, repos, save_plan):
        """Moving Monday to Tuesday on Jan 5 drops Jan 8 and adds Jan 9."""
        created = save_plan.create(make_ctx(today=date(2024, 1, 1)), monday_bench_plan())
        template_id = created.template.id

        data = monday_bench_plan()
        data["assignments"][0]["day_of_week"] = 2
        result = save_plan.update(template_id, make_ctx(today=date(2024, 1, 5)), data)

        assert result.is_update is True
        assert result.entries_removed == 1
        assert result.entries_created == 1

        entries = repos.entries.all_entries()
        assert entry_dates(entries) == [date(2024, 1, 1), date(2024, 1, 9)]
        past, future = entries
        # The old assignment is gone; the kept entry no longer points at it
        assert past.workout_plan_assignment_id is None
        assert future.workout_plan_assignment_id == result.template.assignments[0].id

    def test_update_replaces_all_assignments(self, repos, ctx, save_plan):
        created = save_plan.create(ctx, monday_bench_plan())
        old_ids = created.template.assignment_ids

        data = monday_bench_plan(
            assignments=[
                {"day_of_week": 2, "exercise_id": "ex-run"},
                {"day_of_week": 4, "exercise_id": "ex-squat"},
            ]
        )
        result = save_plan.update(created.template.id, ctx, data)

        new_ids = result.template.assignment_ids
        assert len(new_ids) == 2
        assert set(new_ids).isdisjoint(old_ids)
        assert [a.exercise_name for a in result.template.assignments] == [
            "Running",
            "Barbell Squat",
        ]

    def test_deactivating_reverses_without_rematerializing(self, repos, save_plan):
        created = save_plan.create(make_ctx(today=date(2024, 1, 1)), monday_bench_plan())
        result = save_plan.update(
            created.template.id,
            make_ctx(today=date(2024, 1, 5)),
            monday_bench_plan(is_active=False),
        )
        assert result.entries_removed == 1
        assert result.entries_created == 0
        assert entry_dates(repos.entries.all_entries()) == [date(2024, 1, 1)]

    def test_failed_update_leaves_previous_entries_untouched(self, repos, save_plan):
        """A failure after reversal restores both old assignments and entries."""
        created = save_plan.create(make_ctx(today=date(2024, 1, 1)), monday_bench_plan())
        before = repos.entries.all_entries()

        repos.db.simulate_failure("save_workout_plan.insert_entries")
        data = monday_bench_plan(plan_name="Renamed")
        data["assignments"][0]["day_of_week"] = 2
        with pytest.raises(TransientInfrastructureError):
            save_plan.update(created.template.id, make_ctx(today=date(2024, 1, 5)), data)

        assert repos.entries.all_entries() == before
        stored = repos.plans.get(created.template.id)
        assert stored.plan_name == "Bench Mondays"
        assert stored.assignment_ids == created.template.assignment_ids

    def test_update_missing_template(self, ctx, save_plan):
        with pytest.raises(NotFoundError):
            save_plan.update("missing", ctx, monday_bench_plan())

    def test_update_other_users_template_is_forbidden(self, ctx, save_plan):
        created = save_plan.create(make_ctx(OTHER_USER_ID), monday_bench_plan())
        with pytest.raises(ForbiddenError):
            save_plan.update(created.template.id, ctx, monday_bench_plan())


@pytest.mark.unit
class TestDeleteWorkoutPlan:
    def test_delete_reverses_future_and_keeps_past(self, repos, save_plan, delete_plan):
        created = save_plan.create(make_ctx(today=date(2024, 1, 1)), monday_bench_plan())

        result = delete_plan.execute(created.template.id, make_ctx(today=date(2024, 1, 5)))

        assert result.entries_removed == 1
        assert repos.plans.get(created.template.id) is None
        remaining = repos.entries.all_entries()
        assert entry_dates(remaining) == [date(2024, 1, 1)]
        assert remaining[0].workout_plan_assignment_id is None

    def test_failed_delete_changes_nothing(self, repos, save_plan, delete_plan):
        created = save_plan.create(make_ctx(today=date(2024, 1, 1)), monday_bench_plan())
        repos.db.simulate_failure("delete_workout_plan.delete_template")

        with pytest.raises(TransientInfrastructureError):
            delete_plan.execute(created.template.id, make_ctx(today=date(2024, 1, 5)))

        assert len(repos.entries.all_entries()) == 2
        assert repos.plans.get(created.template.id) is not None

    def test_delete_missing(self, ctx, delete_plan):
        with pytest.raises(NotFoundError):
            delete_plan.execute("missing", ctx)

    def test_delete_other_users_template_is_forbidden(self, ctx, save_plan, delete_plan):
        created = save_plan.create(make_ctx(OTHER_USER_ID), monday_bench_plan())
        with pytest.raises(ForbiddenError):
            delete_plan.execute(created.template.id, ctx)


@pytest.mark.unit
class TestMaterializeAndReverse:
    def test_reverse_twice_is_a_no_op_the_second_time(self, repos, save_plan, materializer):
        created = save_plan.create(
            make_ctx(today=date(2024, 1, 1)), monday_bench_plan(end_date=None)
        )
        ctx = make_ctx(today=date(2024, 3, 1))

        first = materializer.reverse(created.template.id, ctx)
        second = materializer.reverse(created.template.id, ctx)

        assert first.entries_removed > 0
        assert second.entries_removed == 0

    def test_reverse_never_deletes_history(self, repos, save_plan, materializer):
        created = save_plan.create(
            make_ctx(today=date(2024, 1, 1)), monday_bench_plan(end_date=None)
        )
        today = date(2024, 3, 1)
        past_before = [e for e in repos.entries.all_entries() if e.entry_date < today]

        materializer.reverse(created.template.id, make_ctx(today=today))

        remaining = repos.entries.all_entries()
        assert [e for e in remaining if e.entry_date < today] == past_before
        assert all(e.entry_date < today for e in remaining)

    def test_reverse_includes_today(self, repos, save_plan, materializer):
        created = save_plan.create(make_ctx(), monday_bench_plan())
        materializer.reverse(created.template.id, make_ctx(today=date(2024, 1, 8)))
        assert entry_dates(repos.entries.all_entries()) == [date(2024, 1, 1)]

    def test_reverse_then_materialize_restores_future(self, repos, save_plan, materializer):
        created = save_plan.create(make_ctx(), monday_bench_plan())
        ctx = make_ctx(today=date(2024, 1, 5))

        materializer.reverse(created.template.id, ctx)
        result = materializer.execute(created.template.id, ctx)

        assert result.entries_created == 1
        assert entry_dates(repos.entries.all_entries()) == [date(2024, 1, 1), date(2024, 1, 8)]

    def test_materialize_without_reverse_duplicates(self, repos, save_plan, materializer):
        created = save_plan.create(make_ctx(), monday_bench_plan())
        materializer.execute(created.template.id, make_ctx(today=date(2024, 1, 5)))
        assert entry_dates(repos.entries.all_entries()) == [
            date(2024, 1, 1),
            date(2024, 1, 8),
            date(2024, 1, 8),
        ]

    def test_materialize_failure_midway_rolls_back(self, repos, save_plan, materializer):
        created = save_plan.create(make_ctx(), monday_bench_plan(is_active=False))
        repos.plans.seed(created.template.model_copy(update={"is_active": True}))

        # The second of the two inserts fails
        repos.db.simulate_failure("create_plan_entry", after=1)
        with pytest.raises(TransientInfrastructureError):
            materializer.execute(created.template.id, make_ctx(today=date(2024, 1, 1)))

        assert repos.entries.all_entries() == []

    def test_other_users_template_reads_as_not_found(self, save_plan, materializer):
        created = save_plan.create(make_ctx(OTHER_USER_ID), monday_bench_plan())
        with pytest.raises(NotFoundError):
            materializer.execute(created.template.id, make_ctx())
        with pytest.raises(NotFoundError):
            materializer.reverse(created.template.id, make_ctx())

    def test_active_plan_lookup_prefers_latest_start(self, repos, ctx, save_plan):
        save_plan.create(ctx, monday_bench_plan(plan_name="Old", end_date=None))
        save_plan.create(
            ctx,
            monday_bench_plan(plan_name="New", start_date=date(2024, 2, 1), end_date=None),
        )
        assert repos.plans.get_active_for_date(ctx.user_id, date(2024, 1, 15)).plan_name == "Old"
        assert repos.plans.get_active_for_date(ctx.user_id, date(2024, 2, 15)).plan_name == "New"
        assert repos.plans.get_active_for_date(ctx.user_id, date(2023, 12, 31)) is None
