"""
API tests for /workout-plan-templates.

Runs the real app with every repository replaced by the in-memory fakes.
"""

import pytest

from tests.fakes.seed_data import OTHER_USER_ID, make_ctx

PLAN = {
    "plan_name": "Bench Mondays",
    "start_date": "2024-01-01",
    "end_date": "2024-01-14",
    "assignments": [
        {"day_of_week": 1, "exercise_id": "ex-bench", "sets": 1, "reps": 10, "weight": 50},
    ],
}


def entries_on(client, day):
    response = client.get("/exercise-entries", params={"date": day})
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def created(client):
    response = client.post("/workout-plan-templates", json=PLAN)
    assert response.status_code == 201
    return response.json()


@pytest.mark.integration
class TestCreateAndRead:
    def test_create_returns_template_and_counts(self, created):
        assert created["plan_name"] == "Bench Mondays"
        assert created["is_active"] is True
        assert created["entries_created"] == 2
        assert created["entries_removed"] == 0
        assert created["assignments"][0]["exercise_name"] == "Bench Press"
        assert created["assignments"][0]["id"]

    def test_entries_appear_in_the_diary(self, client, created):
        (entry,) = entries_on(client, "2024-01-08")
        assert entry["exercise_name"] == "Bench Press"
        assert entry["calories_burned"] == 147.0
        assert entry["workout_plan_assignment_id"] == created["assignments"][0]["id"]
        assert entries_on(client, "2024-01-02") == []

    def test_list_and_get(self, client, created):
        listed = client.get("/workout-plan-templates").json()
        assert [t["id"] for t in listed] == [created["id"]]

        fetched = client.get(f"/workout-plan-templates/{created['id']}").json()
        assert fetched["id"] == created["id"]
        assert "entries_created" not in fetched

    def test_active_plan_for_date(self, client, created):
        response = client.get("/workout-plan-templates/active", params={"date": "2024-01-05"})
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

        response = client.get("/workout-plan-templates/active", params={"date": "2024-02-01"})
        assert response.status_code == 404

    def test_missing_template_is_404(self, client):
        assert client.get("/workout-plan-templates/nope").status_code == 404

    def test_other_users_template_is_404(self, client, repos, save_plan):
        theirs = save_plan.create(make_ctx(user_id=OTHER_USER_ID), dict(PLAN))
        template_id = theirs.template.id
        assert client.get(f"/workout-plan-templates/{template_id}").status_code == 404
        assert client.post(f"/workout-plan-templates/{template_id}/materialize").status_code == 404


@pytest.mark.integration
class TestValidation:
    def test_assignment_needs_exactly_one_target(self, client):
        body = {**PLAN, "assignments": [{"day_of_week": 1}]}
        assert client.post("/workout-plan-templates", json=body).status_code == 422

    def test_day_of_week_range(self, client):
        body = {**PLAN, "assignments": [{"day_of_week": 7, "exercise_id": "ex-bench"}]}
        assert client.post("/workout-plan-templates", json=body).status_code == 422

    def test_end_before_start(self, client):
        body = {**PLAN, "end_date": "2023-12-31"}
        assert client.post("/workout-plan-templates", json=body).status_code == 422

    def test_unknown_exercise_is_404_and_nothing_saved(self, client, repos):
        body = {**PLAN, "assignments": [{"day_of_week": 1, "exercise_id": "nope"}]}
        assert client.post("/workout-plan-templates", json=body).status_code == 404
        assert client.get("/workout-plan-templates").json() == []
        assert repos.entries.all_entries() == []


@pytest.mark.integration
class TestUpdateAndDelete:
    def test_update_uses_client_date_from_body(self, client, created):
        body = {
            **PLAN,
            "assignments": [{**PLAN["assignments"][0], "day_of_week": 2}],
            "current_client_date": "2024-01-05",
        }
        response = client.put(f"/workout-plan-templates/{created['id']}", json=body)

        assert response.status_code == 200
        saved = response.json()
        assert saved["entries_removed"] == 1
        assert saved["entries_created"] == 1
        assert len(entries_on(client, "2024-01-01")) == 1
        assert entries_on(client, "2024-01-08") == []
        assert len(entries_on(client, "2024-01-09")) == 1

    def test_update_uses_client_date_from_query(self, client, created):
        response = client.put(
            f"/workout-plan-templates/{created['id']}",
            params={"current_client_date": "2024-01-05"},
            json={**PLAN, "plan_name": "Renamed"},
        )
        saved = response.json()
        assert saved["plan_name"] == "Renamed"
        assert saved["entries_removed"] == 1
        assert saved["entries_created"] == 1

    def test_update_other_users_template_is_403(self, client, save_plan):
        theirs = save_plan.create(make_ctx(user_id=OTHER_USER_ID), dict(PLAN))
        response = client.put(f"/workout-plan-templates/{theirs.template.id}", json=PLAN)
        assert response.status_code == 403

    def test_delete_keeps_history(self, client, created):
        response = client.delete(
            f"/workout-plan-templates/{created['id']}",
            params={"current_client_date": "2024-01-05"},
        )
        assert response.status_code == 204
        assert client.get(f"/workout-plan-templates/{created['id']}").status_code == 404

        (kept,) = entries_on(client, "2024-01-01")
        assert kept["workout_plan_assignment_id"] is None
        assert entries_on(client, "2024-01-08") == []


@pytest.mark.integration
class TestMaterializeAndReverse:
    def test_reverse_then_materialize(self, client, created):
        params = {"current_client_date": "2024-01-05"}

        reversed_ = client.post(
            f"/workout-plan-templates/{created['id']}/reverse", params=params
        ).json()
        assert reversed_ == {
            "template_id": created["id"],
            "entries_created": 0,
            "entries_removed": 1,
        }

        materialized = client.post(
            f"/workout-plan-templates/{created['id']}/materialize", params=params
        ).json()
        assert materialized["entries_created"] == 1
        assert len(entries_on(client, "2024-01-08")) == 1
        assert len(entries_on(client, "2024-01-01")) == 1

    def test_reverse_twice_removes_nothing_more(self, client, created):
        params = {"current_client_date": "2024-01-01"}
        url = f"/workout-plan-templates/{created['id']}/reverse"
        assert client.post(url, params=params).json()["entries_removed"] == 2
        assert client.post(url, params=params).json()["entries_removed"] == 0

    def test_client_date_query_wins_over_offset_header(self, client, created):
        response = client.post(
            f"/workout-plan-templates/{created['id']}/reverse",
            params={"current_client_date": "2024-01-08"},
            headers={"X-Client-UTC-Offset": "600"},
        )
        assert response.json()["entries_removed"] == 1
