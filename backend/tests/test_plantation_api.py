# backend/tests/test_plantation_api.py

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException

from plantation.core.auth import user_id_from_claims, verify_token
from plantation.core.clock import utcnow
from plantation.crud.farmer import tasks as crud_tasks
from plantation.crud.farmer import seasons as crud_seasons
from plantation.models.farmer.plantation import TaskStatus
from plantation.services.farmer import plantation_service
from plantation.services.farmer.schedule_service import SUMMER_IRRIGATION_TASK


def farm_body(district_ids, district="Anuradhapura", **overrides):
    body = {
        "farm_name": "Hill Estate",
        "district_id": district_ids[district],
        "soil_type_id": 1,
        "chosen_variety_id": "PANNIYUR_1",
        "farm_start_date": "2025-12-24T23:30:00+05:30",
        "area_hectares": 2.5,
        "total_vines": 800,
    }
    body.update(overrides)
    return body


async def start_farm(client, headers, district_ids, **overrides):
    resp = await client.post("/api/plantation/start", json=farm_body(district_ids, **overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ------------------------------------------------
# health + auth
# ------------------------------------------------
async def test_health_is_public(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


async def test_invalid_token_is_rejected(client):
    resp = await client.get("/api/plantation/farms", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


async def test_expired_token_is_rejected(client, user_id, token_for):
    token = token_for(user_id, expires_in=timedelta(minutes=-5))
    resp = await client.get("/api/plantation/farms", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_user_id_claim_fallback(user_id, token_for):
    payload = verify_token(token_for(user_id, claim="userId"))
    assert user_id_from_claims(payload) == user_id


def test_token_without_user_id_is_rejected():
    with pytest.raises(HTTPException) as err:
        user_id_from_claims({"role": "farmer"})
    assert err.value.status_code == 401


# ------------------------------------------------
# start plantation
# ------------------------------------------------
async def test_start_normalises_date_and_generates_schedule(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids)

    assert farm["farm_start_date"].startswith("2025-12-24T00:00:00")
    assert farm["district"] == "Anuradhapura"
    assert farm["chosen_variety"] == "Panniyur 1"

    resp = await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)
    assert resp.status_code == 200
    tasks = resp.json()

    checks = [t for t in tasks if t["task_name"] == SUMMER_IRRIGATION_TASK]
    assert [t["due_date"][:10] for t in checks] == ["2026-03-15", "2026-04-15", "2026-05-15"]

    # land clearing is seeded 30 days before start
    clearing = next(t for t in tasks if t["task_name"] == "Land Clearing and Pit Preparation")
    assert clearing["due_date"].startswith("2025-11-24")


async def test_start_in_wet_zone_has_no_irrigation_checks(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids, district="Colombo")

    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()
    assert tasks
    assert not [t for t in tasks if t["task_name"] == SUMMER_IRRIGATION_TASK]


async def test_listed_tasks_are_never_stale(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids, farm_start_date="2020-01-01T00:00:00")

    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()
    now = utcnow()
    for task in tasks:
        if datetime.fromisoformat(task["due_date"]) < now:
            assert task["status"] == TaskStatus.OVERDUE


async def test_start_survives_schedule_failure(client, headers, district_ids, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("template catalog unavailable")

    monkeypatch.setattr(plantation_service, "generate_schedule_for_farm", broken)

    farm = await start_farm(client, headers, district_ids)

    resp = await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.parametrize("override, message", [
    ({"district_id": 999}, "District with ID 999 does not exist"),
    ({"soil_type_id": 999}, "Soil type with ID 999 does not exist"),
    ({"chosen_variety_id": "UNKNOWN"}, "Variety with ID UNKNOWN does not exist"),
])
async def test_start_rejects_unknown_references(client, headers, district_ids, override, message):
    resp = await client.post("/api/plantation/start", json=farm_body(district_ids, **override), headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == message


# ------------------------------------------------
# farms
# ------------------------------------------------
async def test_farm_ownership(client, headers, district_ids, token_for):
    farm = await start_farm(client, headers, district_ids)
    stranger = {"Authorization": f"Bearer {token_for(str(uuid.uuid4()))}"}

    assert (await client.get(f"/api/plantation/farm/{farm['id']}", headers=headers)).status_code == 200
    assert (await client.get(f"/api/plantation/farm/{farm['id']}", headers=stranger)).status_code == 403
    assert (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=stranger)).status_code == 403
    assert (await client.delete(f"/api/plantation/farm/{farm['id']}", headers=stranger)).status_code == 403
    assert (await client.get("/api/plantation/farms", headers=stranger)).json() == []


async def test_unknown_farm_is_404(client, headers):
    assert (await client.get(f"/api/plantation/farm/{uuid.uuid4()}", headers=headers)).status_code == 404
    assert (await client.get("/api/plantation/farm/not-a-uuid", headers=headers)).status_code == 404


async def test_update_farm_normalises_date(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids)

    resp = await client.put(
        f"/api/plantation/farm/{farm['id']}",
        json={"farm_start_date": "2026-02-01T18:45:00-08:00", "total_vines": 900},
        headers=headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["farm_start_date"].startswith("2026-02-01T00:00:00")
    assert body["total_vines"] == 900
    assert body["farm_name"] == "Hill Estate"


async def test_delete_farm_removes_tasks_and_seasons(client, headers, district_ids, session_factory):
    farm = await start_farm(client, headers, district_ids)
    resp = await client.post("/api/seasons/", json={
        "season_name": "Maha", "start_month": 10, "start_year": 2025,
        "end_month": 3, "end_year": 2026, "farm_id": farm["id"],
    }, headers=headers)
    assert resp.status_code == 201

    resp = await client.delete(f"/api/plantation/farm/{farm['id']}", headers=headers)
    assert resp.status_code == 200

    async with session_factory() as db:
        assert await crud_tasks.list_tasks_by_farm(db, farm["id"]) == []
        assert await crud_seasons.list_seasons_by_farm(db, farm["id"]) == []
    assert (await client.get(f"/api/plantation/farm/{farm['id']}", headers=headers)).status_code == 404


# ------------------------------------------------
# tasks
# ------------------------------------------------
async def test_manual_task_lifecycle(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids, district="Colombo")

    resp = await client.post("/api/plantation/tasks/manual", json={
        "farm_id": farm["id"],
        "task_name": "Repair drainage",
        "due_date": "2030-05-01T00:00:00",
        "priority": "High",
    }, headers=headers)
    assert resp.status_code == 201
    task = resp.json()
    assert task["is_manual"] is True
    assert task["phase"] == "Maintenance"

    resp = await client.put(f"/api/plantation/tasks/{task['id']}", json={
        "task_name": "Repair drainage channel",
        "priority": "Emergency",
        "due_date": "2030-04-20T00:00:00",
    }, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["task_name"] == "Repair drainage channel"

    resp = await client.put(f"/api/plantation/task/complete/{task['id']}", json={
        "items": [{"item_name": "Pipe", "quantity": 3, "unit": "m"}],
        "labor_hours": 6,
    }, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == TaskStatus.COMPLETED

    # completed: edit and delete refused
    resp = await client.put(f"/api/plantation/tasks/{task['id']}", json={
        "task_name": "late edit", "due_date": "2030-04-20T00:00:00",
    }, headers=headers)
    assert resp.status_code == 400
    assert (await client.delete(f"/api/plantation/tasks/{task['id']}", headers=headers)).status_code == 400

    # omitted items are kept
    resp = await client.put(f"/api/plantation/tasks/{task['id']}/completion",
                            json={"labor_hours": 7, "notes": "rechecked"}, headers=headers)
    assert resp.status_code == 200
    details = resp.json()["input_details"]
    assert [i["item_name"] for i in details["items"]] == ["Pipe"]
    assert details["labor_hours"] == 7

    # explicit empty list clears
    resp = await client.put(f"/api/plantation/tasks/{task['id']}/completion",
                            json={"items": [], "labor_hours": 7}, headers=headers)
    assert resp.json()["input_details"]["items"] == []


async def test_generated_task_cannot_be_deleted(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids)
    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()

    resp = await client.delete(f"/api/plantation/tasks/{tasks[0]['id']}", headers=headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Only manual tasks can be deleted"


async def test_completion_update_before_completion_is_400(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids)
    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()

    resp = await client.put(f"/api/plantation/tasks/{tasks[0]['id']}/completion",
                            json={"labor_hours": 1}, headers=headers)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Task must be completed before updating completion details"


async def test_task_routes_check_ownership(client, headers, district_ids, token_for):
    farm = await start_farm(client, headers, district_ids)
    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()
    stranger = {"Authorization": f"Bearer {token_for(str(uuid.uuid4()))}"}

    resp = await client.put(f"/api/plantation/task/complete/{tasks[0]['id']}", json={}, headers=stranger)
    assert resp.status_code == 403

    resp = await client.post("/api/plantation/tasks/manual", json={
        "farm_id": farm["id"], "task_name": "sneaky", "due_date": "2030-01-01T00:00:00",
    }, headers=stranger)
    assert resp.status_code == 403


async def test_unknown_and_malformed_task_ids(client, headers):
    resp = await client.put(f"/api/plantation/task/complete/{uuid.uuid4()}", json={}, headers=headers)
    assert resp.status_code == 404

    resp = await client.put("/api/plantation/task/complete/nope", json={}, headers=headers)
    assert resp.status_code == 400


async def test_unexpected_failure_is_generic_500(client, headers, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(plantation_service, "get_farms_for_user", boom)

    resp = await client.get("/api/plantation/farms", headers=headers)

    assert resp.status_code == 500
    body = resp.json()
    assert body["detail"] == "Internal server error"
    assert body["request_id"] == resp.headers["x-request-id"]


async def test_manual_task_mutations_never_return_stale_status(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids, district="Colombo")

    resp = await client.post("/api/plantation/tasks/manual", json={
        "farm_id": farm["id"], "task_name": "Missed inspection", "due_date": "2020-01-01T00:00:00",
    }, headers=headers)
    assert resp.status_code == 201
    task = resp.json()
    assert task["status"] == TaskStatus.OVERDUE

    resp = await client.post("/api/plantation/tasks/manual", json={
        "farm_id": farm["id"], "task_name": "Re-stake vines", "due_date": "2030-01-01T00:00:00",
    }, headers=headers)
    upcoming = resp.json()
    assert upcoming["status"] == TaskStatus.SCHEDULED

    resp = await client.put(f"/api/plantation/tasks/{upcoming['id']}", json={
        "task_name": "Re-stake vines", "due_date": "2020-02-01T00:00:00",
    }, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == TaskStatus.OVERDUE
    # priority omitted: kept
    assert resp.json()["priority"] == "Medium"


async def test_completing_twice_is_400(client, headers, district_ids):
    farm = await start_farm(client, headers, district_ids)
    tasks = (await client.get(f"/api/plantation/tasks/{farm['id']}", headers=headers)).json()
    url = f"/api/plantation/task/complete/{tasks[0]['id']}"

    assert (await client.put(url, json={"labor_hours": 2}, headers=headers)).status_code == 200

    resp = await client.put(url, json={"labor_hours": 5}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Task is already completed")
