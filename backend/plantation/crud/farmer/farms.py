# backend/plantation/crud/farmer/farms.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional, List

from plantation.core.clock import utcnow
from plantation.core.ids import normalize_uuid
from plantation.models.farmer.plantation import Farm
from plantation.crud.farmer import reference as crud_reference


async def attach_reference_names(db: AsyncSession, farms: List[Farm]) -> List[Farm]:
    """
    Fill the non-persisted `district` / `chosen_variety` names on each farm.
    One query per reference table regardless of how many farms are passed.
    """
    districts = await crud_reference.district_names(db, [f.district_id for f in farms])
    varieties = await crud_reference.variety_names(db, [f.chosen_variety_id for f in farms])

    for farm in farms:
        farm.district = districts.get(farm.district_id, "") if farm.district_id is not None else ""
        farm.chosen_variety = varieties.get(farm.chosen_variety_id, "") if farm.chosen_variety_id else ""

    return farms


async def create_farm(db: AsyncSession, farm: Farm) -> Farm:
    farm.created_at = utcnow()
    db.add(farm)
    await db.commit()
    await db.refresh(farm)
    return farm


async def get_farm(db: AsyncSession, farm_id: str) -> Optional[Farm]:
    farm_id = normalize_uuid(farm_id)
    if farm_id is None:
        return None

    farm = await db.get(Farm, farm_id)
    if not farm:
        return None

    await attach_reference_names(db, [farm])
    return farm


async def list_farms_by_user(db: AsyncSession, user_id: str) -> List[Farm]:
    user_id = normalize_uuid(user_id)
    if user_id is None:
        return []

    rows = await db.scalars(
        select(Farm).where(Farm.user_id == user_id).order_by(Farm.created_at.desc())
    )
    farms = rows.all()
    return await attach_reference_names(db, farms)


async def update_farm(db: AsyncSession, farm: Farm) -> Farm:
    db.add(farm)
    await db.commit()
    await db.refresh(farm)
    await attach_reference_names(db, [farm])
    return farm


async def delete_farm(db: AsyncSession, farm_id: str) -> bool:
    farm = await db.get(Farm, farm_id)
    if not farm:
        return False

    await db.delete(farm)
    await db.commit()
    return True
