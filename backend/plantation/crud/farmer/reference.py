# backend/plantation/crud/farmer/reference.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List

from plantation.models.farmer.plantation import District, SoilType, PepperVariety


async def get_district(db: AsyncSession, district_id: int) -> Optional[District]:
    return await db.get(District, district_id)


async def get_soil_type(db: AsyncSession, soil_type_id: int) -> Optional[SoilType]:
    return await db.get(SoilType, soil_type_id)


async def get_variety(db: AsyncSession, variety_id: str) -> Optional[PepperVariety]:
    return await db.get(PepperVariety, variety_id)


async def district_names(db: AsyncSession, ids) -> dict:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    rows = await db.scalars(select(District).where(District.id.in_(ids)))
    return {d.id: d.name for d in rows.all()}


async def variety_names(db: AsyncSession, ids) -> dict:
    ids = {i for i in ids if i}
    if not ids:
        return {}
    rows = await db.scalars(select(PepperVariety).where(PepperVariety.id.in_(ids)))
    return {v.id: v.name for v in rows.all()}


async def list_districts(db: AsyncSession) -> List[District]:
    rows = await db.scalars(select(District).order_by(District.name.asc()))
    return rows.all()
