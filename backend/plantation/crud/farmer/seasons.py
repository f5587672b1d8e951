# backend/plantation/crud/farmer/seasons.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Optional, List

from plantation.models.farmer.season import HarvestSeason


async def create_season(db: AsyncSession, season: HarvestSeason) -> HarvestSeason:
    db.add(season)
    await db.commit()
    await db.refresh(season)
    return season


async def get_season(db: AsyncSession, season_id: str) -> Optional[HarvestSeason]:
    return await db.get(HarvestSeason, season_id)


def _newest_first(query):
    return query.order_by(HarvestSeason.start_year.desc(), HarvestSeason.start_month.desc())


async def list_seasons_by_user(db: AsyncSession, user_id: str) -> List[HarvestSeason]:
    rows = await db.scalars(_newest_first(select(HarvestSeason).where(HarvestSeason.created_by == user_id)))
    return rows.all()


async def list_seasons_by_farm(db: AsyncSession, farm_id: str) -> List[HarvestSeason]:
    rows = await db.scalars(_newest_first(select(HarvestSeason).where(HarvestSeason.farm_id == farm_id)))
    return rows.all()


async def update_season(db: AsyncSession, season: HarvestSeason) -> HarvestSeason:
    db.add(season)
    await db.commit()
    await db.refresh(season)
    return season


async def delete_season(db: AsyncSession, season: HarvestSeason) -> None:
    await db.delete(season)
    await db.commit()


async def delete_seasons_by_farm(db: AsyncSession, farm_id: str) -> None:
    await db.execute(delete(HarvestSeason).where(HarvestSeason.farm_id == farm_id))
    await db.commit()
