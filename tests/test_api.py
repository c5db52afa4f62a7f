"""
API tests: requests go through FastAPI routing, dependencies and error mapping
against an in-memory SQLite database.
"""

from datetime import date

import pytest
import pytest_asyncio

from conftest import OTHER_USER_ID, USER_ID, store_workout
from wodlog.db.repositories import Repositories
from wodlog.models.workout import WODPerformance
from wodlog.services.seeding import seed_standard_catalog

pytestmark = pytest.mark.asyncio

API = "/api/v1"
ME = {"X-User-Id": str(USER_ID)}
SOMEONE_ELSE = {"X-User-Id": str(OTHER_USER_ID)}
ADMIN = {"X-User-Id": "99"}


@pytest_asyncio.fixture
async def seeded(session_maker):
    """Standard catalog committed, so every request session can see it."""
    async with session_maker() as session:
        await seed_standard_catalog(Repositories.for_session(session))
        await session.commit()


async def _movement_id(client, name):
    response = await client.get(f"{API}/movements/search", params={"q": name})
    return next(m["id"] for m in response.json() if m["name"] == name)


async def _wod_id(client, name):
    response = await client.get(f"{API}/wods/search", params={"q": name})
    return next(w["id"] for w in response.json() if w["name"] == name)


async def test_root_and_health(client):
    assert (await client.get("/")).json()["status"] == "ok"
    assert (await client.get(f"{API}/health")).status_code == 200
    ready = await client.get(f"{API}/health/ready")
    assert ready.json() == {"status": "ok", "database": "connected"}


async def test_missing_user_header_is_rejected(client):
    response = await client.get(f"{API}/workouts")
    assert response.status_code == 422


async def test_log_workout_flow(client, seeded):
    squat = await _movement_id(client, "Back Squat")
    fran = await _wod_id(client, "Fran")
    body = {
        "workout_name": "Tuesday",
        "workout_date": "2026-05-05",
        "movements": [
            {"movement_id": squat, "weight": 225, "reps": 5, "sets": 1, "order_index": 0},
            {"movement_id": squat, "weight": 235, "reps": 3, "sets": 1, "order_index": 1},
        ],
        "wods": [{"wod_id": fran, "time_seconds": 272}],
    }
    response = await client.post(f"{API}/workouts", json=body, headers=ME)
    assert response.status_code == 201, response.text
    workout = response.json()
    assert workout["user_id"] == USER_ID
    assert [m["is_pr"] for m in workout["movements"]] == [True, True]
    assert workout["wods"][0]["wod"]["name"] == "Fran"

    fetched = await client.get(f"{API}/workouts/{workout['id']}", headers=ME)
    assert fetched.status_code == 200
    assert (await client.get(f"{API}/workouts/{workout['id']}", headers=SOMEONE_ELSE)).status_code == 403
    assert (await client.get(f"{API}/workouts/99999", headers=ME)).status_code == 404

    prs = (await client.get(f"{API}/pr", headers=ME)).json()
    assert sorted((p["weight"], p["calculated_1rm"]) for p in prs["movements"]) == [(225, 262.5), (235, 258.5)]
    assert {p["formula"] for p in prs["movements"]} == {"Epley (2-10 reps)"}

    count = await client.get(f"{API}/workouts/monthly-count", params={"year": 2026, "month": 5}, headers=ME)
    assert count.json() == {"year": 2026, "month": 5, "count": 1}

    deleted = await client.delete(f"{API}/workouts/{workout['id']}", headers=ME)
    assert deleted.status_code == 204
    assert (await client.get(f"{API}/workouts/{workout['id']}", headers=ME)).status_code == 404


async def test_duplicate_template_log_conflicts(client, seeded):
    templates = (await client.get(f"{API}/templates", params={"standard_only": True}, headers=ME)).json()
    template_id = templates[0]["id"]
    body = {"template_id": template_id, "workout_date": "2026-05-06"}

    assert (await client.post(f"{API}/workouts", json=body, headers=ME)).status_code == 201
    again = await client.post(f"{API}/workouts", json=body, headers=ME)
    assert again.status_code == 409
    # another user may log the same template that day
    assert (await client.post(f"{API}/workouts", json=body, headers=SOMEONE_ELSE)).status_code == 201


async def test_score_mismatch_returns_details(client, seeded):
    fran = await _wod_id(client, "Fran")
    body = {
        "workout_name": "Bad score",
        "workout_date": "2026-05-07",
        "wods": [{"wod_id": fran, "rounds": 5}],
    }
    response = await client.post(f"{API}/workouts", json=body, headers=ME)
    assert response.status_code == 422
    detail = response.json()
    assert detail["expected_score_type"] == "Time (HH:MM:SS)"
    assert detail["missing"] == ["time_seconds"]
    assert (await client.get(f"{API}/workouts", headers=ME)).json() == []


async def test_workout_needs_template_or_name(client):
    response = await client.post(f"{API}/workouts", json={"workout_date": "2026-05-07"}, headers=ME)
    assert response.status_code == 422


async def test_templated_workout_cannot_carry_a_name(client, seeded):
    templates = (await client.get(f"{API}/templates", params={"standard_only": True}, headers=ME)).json()
    body = {"template_id": templates[0]["id"], "workout_name": "My name", "workout_date": "2026-05-08"}
    response = await client.post(f"{API}/workouts", json=body, headers=ME)
    assert response.status_code == 422
    assert (await client.get(f"{API}/workouts", headers=ME)).json() == []


async def test_standard_movement_is_read_only(client, seeded):
    squat = await _movement_id(client, "Back Squat")
    response = await client.patch(f"{API}/movements/{squat}", json={"name": "Squat"}, headers=ME)
    assert response.status_code == 403


async def test_custom_movement_duplicate_name(client, seeded):
    body = {"name": "Farmer Carry", "type": "cardio"}
    assert (await client.post(f"{API}/movements", json=body, headers=ME)).status_code == 201
    assert (await client.post(f"{API}/movements", json=body, headers=SOMEONE_ELSE)).status_code == 409


async def test_toggle_and_retroactive(client, seeded):
    squat = await _movement_id(client, "Back Squat")
    for day, weight in ((1, 200), (2, 180), (3, 210)):
        body = {
            "workout_name": "Squats",
            "workout_date": f"2026-06-0{day}",
            "movements": [{"movement_id": squat, "weight": weight, "reps": 1}],
        }
        await client.post(f"{API}/workouts", json=body, headers=ME)

    history = (await client.get(f"{API}/performance/movements/{squat}", headers=ME)).json()
    assert [(h["weight"], h["is_pr"]) for h in history] == [(210, True), (180, False), (200, True)]

    # flag the 180 by hand; the retroactive pass takes it back off
    toggled = await client.post(f"{API}/pr/movement-performances/{history[1]['id']}/toggle", headers=ME)
    assert toggled.json() == {"id": history[1]["id"], "is_pr": True}

    result = await client.post(f"{API}/pr/retroactive", headers=ME)
    assert result.json() == {"movement_pr_count": 0, "wod_pr_count": 0}
    history = (await client.get(f"{API}/performance/movements/{squat}", headers=ME)).json()
    assert [h["is_pr"] for h in history] == [True, False, True]

    summaries = (await client.get(f"{API}/pr/movements", headers=ME)).json()
    assert [(s["movement_name"], s["pr_count"], s["best_weight"], s["improvement_percent"]) for s in summaries] == [
        ("Back Squat", 2, 210, 5.0)
    ]


async def test_admin_mismatch_audit_and_repair(client, seeded, session_maker):
    fran = await _wod_id(client, "Fran")
    async with session_maker() as session:
        repos = Repositories.for_session(session)
        await store_workout(repos, USER_ID, date(2026, 1, 1), wod_rows=[WODPerformance(wod_id=fran, rounds=4)])
        await store_workout(
            repos, OTHER_USER_ID, date(2026, 1, 2), wod_rows=[WODPerformance(wod_id=fran, time_seconds=300)]
        )
        await session.commit()

    report = (await client.get(f"{API}/admin/wod-mismatches", headers=ADMIN)).json()
    assert report["count"] == 1
    [bad] = report["mismatches"]
    assert (bad["wod_name"], bad["user_id"], bad["violating_fields"]) == ("Fran", USER_ID, ["time_seconds"])

    invalid = await client.patch(f"{API}/admin/wod-mismatches/{bad['id']}", json={"rounds": 6}, headers=ADMIN)
    assert invalid.status_code == 422

    repaired = await client.post(f"{API}/admin/wod-mismatches/repair", headers=ADMIN)
    assert repaired.json() == {"total_found": 1, "deleted_count": 1}
    assert (await client.get(f"{API}/admin/wod-mismatches", headers=ADMIN)).json()["count"] == 0


async def test_admin_routes_need_caller_identity(client, seeded, session_maker):
    fran = await _wod_id(client, "Fran")
    async with session_maker() as session:
        repos = Repositories.for_session(session)
        await store_workout(repos, USER_ID, date(2026, 1, 1), wod_rows=[WODPerformance(wod_id=fran, rounds=4)])
        await session.commit()

    assert (await client.get(f"{API}/admin/wod-mismatches")).status_code == 422
    assert (await client.post(f"{API}/admin/wod-mismatches/repair")).status_code == 422
    assert (await client.get(f"{API}/admin/wod-mismatches", headers=ADMIN)).json()["count"] == 1


async def test_unified_search(client, seeded):
    response = await client.get(f"{API}/performance/search", params={"q": "fran"}, headers=ME)
    body = response.json()
    assert {"type": "wod", "id": await _wod_id(client, "Fran"), "name": "Fran"} in body["results"]
    assert body["count"] == len(body["results"])


async def test_one_rep_max_tool(client):
    response = await client.get(f"{API}/tools/one-rep-max", params={"weight": 225, "reps": 5})
    body = response.json()
    assert body["estimated_1rm"] == 262.5
    assert body["formula"] == "Epley (2-10 reps)"
    assert body["training_loads"][0] == {"percent": 95, "weight": 249.4}


async def test_one_rep_max_tool_rejects_bad_input(client):
    response = await client.get(f"{API}/tools/one-rep-max", params={"weight": 0, "reps": 5})
    assert response.status_code == 422
