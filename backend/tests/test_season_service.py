# backend/tests/test_season_service.py

import uuid

import pytest

from plantation.core.exceptions import InvalidRequestError
from plantation.models.farmer.season import SeasonStatus
from plantation.schemas.farmer.season import SeasonCreate, SeasonUpdate
from plantation.services.farmer import season_service


def season_payload(farm, user_id, name="Maha", start=(10, 2024), end=(3, 2025)):
    return SeasonCreate(
        season_name=name,
        start_month=start[0],
        start_year=start[1],
        end_month=end[0],
        end_year=end[1],
        farm_id=farm.id,
        created_by=user_id,
    )


async def test_create_season_starts_open(db, farm, user_id):
    season = await season_service.create_season(season_payload(farm, user_id), db)

    assert season.status == SeasonStatus.STARTED
    assert season.farm_id == farm.id
    assert season.created_by == user_id
    assert float(season.total_harvested_yield) == 0


@pytest.mark.parametrize("farm_id, created_by, message", [
    ("not-a-farm", None, "Invalid farm ID format"),
    (None, "not-a-user", "Invalid user ID format"),
])
async def test_create_season_rejects_malformed_ids(db, farm, user_id, farm_id, created_by, message):
    payload = season_payload(farm, user_id)
    if farm_id:
        payload.farm_id = farm_id
    if created_by:
        payload.created_by = created_by

    with pytest.raises(InvalidRequestError, match=message):
        await season_service.create_season(payload, db)


async def test_seasons_listed_newest_first(db, farm, user_id):
    await season_service.create_season(season_payload(farm, user_id, "old", start=(4, 2023)), db)
    await season_service.create_season(season_payload(farm, user_id, "newest", start=(11, 2024)), db)
    await season_service.create_season(season_payload(farm, user_id, "middle", start=(2, 2024)), db)

    by_farm = await season_service.get_seasons_for_farm(farm.id, db)
    by_user = await season_service.get_seasons_for_user(user_id, db)

    assert [s.season_name for s in by_farm] == ["newest", "middle", "old"]
    assert [s.season_name for s in by_user] == ["newest", "middle", "old"]


async def test_list_for_malformed_ids_is_empty(db):
    assert await season_service.get_seasons_for_user("x", db) == []
    assert await season_service.get_seasons_for_farm("y", db) == []


async def test_partial_update_keeps_other_fields(db, farm, user_id):
    season = await season_service.create_season(season_payload(farm, user_id), db)

    updated = await season_service.update_season(season.id, SeasonUpdate(end_month=5), db)

    assert updated.end_month == 5
    assert updated.season_name == "Maha"
    assert updated.start_month == 10


async def test_end_season(db, farm, user_id):
    season = await season_service.create_season(season_payload(farm, user_id), db)

    ended = await season_service.end_season(season.id, db)

    assert ended.status == SeasonStatus.ENDED


async def test_missing_season(db):
    missing = str(uuid.uuid4())
    assert await season_service.get_season(missing, db) is None
    assert await season_service.update_season(missing, SeasonUpdate(end_month=1), db) is None
    assert await season_service.end_season(missing, db) is None
    assert await season_service.delete_season(missing, db) is False


async def test_delete_season(db, farm, user_id):
    season = await season_service.create_season(season_payload(farm, user_id), db)

    assert await season_service.delete_season(season.id, db) is True
    assert await season_service.get_season(season.id, db) is None
