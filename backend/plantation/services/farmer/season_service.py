# backend/plantation/services/farmer/season_service.py

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from plantation.core.ids import normalize_uuid, require_uuid
from plantation.crud.farmer import seasons as crud_seasons
from plantation.models.farmer.season import HarvestSeason, SeasonStatus
from plantation.schemas.farmer.season import SeasonCreate, SeasonUpdate


# ----------------------------------------------------------
# CREATE
# ----------------------------------------------------------

async def create_season(payload: SeasonCreate, db: AsyncSession) -> HarvestSeason:
    farm_id = require_uuid(payload.farm_id, "farm ID")
    created_by = require_uuid(payload.created_by, "user ID")

    season = HarvestSeason(
        season_name=payload.season_name,
        start_month=payload.start_month,
        start_year=payload.start_year,
        end_month=payload.end_month,
        end_year=payload.end_year,
        farm_id=farm_id,
        created_by=created_by,
        status=SeasonStatus.STARTED,
        total_harvested_yield=0,
    )
    return await crud_seasons.create_season(db, season)


# ----------------------------------------------------------
# READ
# ----------------------------------------------------------

async def get_seasons_for_user(user_id: str, db: AsyncSession) -> List[HarvestSeason]:
    user_id = normalize_uuid(user_id)
    if user_id is None:
        return []
    return await crud_seasons.list_seasons_by_user(db, user_id)


async def get_seasons_for_farm(farm_id: str, db: AsyncSession) -> List[HarvestSeason]:
    farm_id = normalize_uuid(farm_id)
    if farm_id is None:
        return []
    return await crud_seasons.list_seasons_by_farm(db, farm_id)


async def get_season(season_id: str, db: AsyncSession) -> Optional[HarvestSeason]:
    season_id = normalize_uuid(season_id)
    if season_id is None:
        return None
    return await crud_seasons.get_season(db, season_id)


# ----------------------------------------------------------
# UPDATE
# ----------------------------------------------------------

async def update_season(season_id: str, payload: SeasonUpdate, db: AsyncSession) -> Optional[HarvestSeason]:
    season = await get_season(season_id, db)
    if not season:
        return None

    if payload.season_name and payload.season_name.strip():
        season.season_name = payload.season_name

    if payload.start_month is not None:
        season.start_month = payload.start_month
    if payload.start_year is not None:
        season.start_year = payload.start_year
    if payload.end_month is not None:
        season.end_month = payload.end_month
    if payload.end_year is not None:
        season.end_year = payload.end_year

    if payload.farm_id and payload.farm_id.strip():
        season.farm_id = require_uuid(payload.farm_id, "farm ID")

    return await crud_seasons.update_season(db, season)


async def end_season(season_id: str, db: AsyncSession) -> Optional[HarvestSeason]:
    season = await get_season(season_id, db)
    if not season:
        return None

    season.status = SeasonStatus.ENDED
    return await crud_seasons.update_season(db, season)


# ----------------------------------------------------------
# DELETE
# ----------------------------------------------------------

async def delete_season(season_id: str, db: AsyncSession) -> bool:
    season = await get_season(season_id, db)
    if not season:
        return False

    await crud_seasons.delete_season(db, season)
    return True
