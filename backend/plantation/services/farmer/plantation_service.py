# backend/plantation/services/farmer/plantation_service.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from plantation.core.exceptions import InvalidRequestError
from plantation.core.ids import require_uuid
from plantation.core.logger import get_logger
from plantation.core.utils_logging import describe_exception
from plantation.crud.farmer import farms as crud_farms
from plantation.crud.farmer import reference as crud_reference
from plantation.crud.farmer import seasons as crud_seasons
from plantation.crud.farmer import tasks as crud_tasks
from plantation.crud.farmer.tasks import TaskStore
from plantation.crud.farmer.templates import TemplateCatalog
from plantation.models.farmer.plantation import Farm
from plantation.schemas.farmer.plantation import FarmCreate, FarmUpdate
from plantation.services.farmer.schedule_service import generate_schedule_for_farm

logger = get_logger("plantation")


def normalize_start_date(value: datetime) -> datetime:
    """
    Midnight of the date the caller picked.

    The calendar fields are read before any timezone conversion, so
    2025-12-24T23:30+05:30 stays the 24th instead of sliding to the 23rd.
    """
    return datetime(value.year, value.month, value.day)


# ----------------------------------------------------------
# REFERENCE VALIDATION
# ----------------------------------------------------------

async def _check_district(db: AsyncSession, district_id: int) -> str:
    district = await crud_reference.get_district(db, district_id)
    if not district:
        raise InvalidRequestError(f"District with ID {district_id} does not exist")
    return district.name


async def _check_soil_type(db: AsyncSession, soil_type_id: int) -> None:
    if not await crud_reference.get_soil_type(db, soil_type_id):
        raise InvalidRequestError(f"Soil type with ID {soil_type_id} does not exist")


async def _check_variety(db: AsyncSession, variety_id: str) -> None:
    if not await crud_reference.get_variety(db, variety_id):
        raise InvalidRequestError(f"Variety with ID {variety_id} does not exist")


# ----------------------------------------------------------
# START PLANTATION
# ----------------------------------------------------------

async def start_plantation(user_id: str, payload: FarmCreate, db: AsyncSession) -> Farm:
    user_id = require_uuid(user_id, "user ID")

    district_name = await _check_district(db, payload.district_id)
    await _check_soil_type(db, payload.soil_type_id)
    await _check_variety(db, payload.chosen_variety_id)

    farm = Farm(
        user_id=user_id,
        farm_name=payload.farm_name,
        district_id=payload.district_id,
        soil_type_id=payload.soil_type_id,
        chosen_variety_id=payload.chosen_variety_id,
        farm_start_date=normalize_start_date(payload.farm_start_date),
        area_hectares=payload.area_hectares,
        total_vines=payload.total_vines,
    )

    try:
        farm = await crud_farms.create_farm(db, farm)
    except SQLAlchemyError as exc:
        logger.error(f"Database error creating farm: {describe_exception(exc)}", exc_info=True)
        raise

    farm_id = farm.id
    log_extra = {"farm_id": farm_id, "user_id": user_id}

    # schedule generation must never undo the farm insert
    try:
        logger.info(f"Starting schedule generation for farm {farm_id}", extra=log_extra)
        created = await generate_schedule_for_farm(
            farm, TemplateCatalog(db), TaskStore(db), district_name=district_name
        )
        logger.info(f"Successfully generated schedule for farm {farm_id} ({len(created)} tasks)", extra=log_extra)
    except Exception as exc:
        logger.error(
            f"Failed to generate schedule for farm {farm_id}, but farm was created successfully. "
            f"Error: {describe_exception(exc)}",
            exc_info=True,
            extra=log_extra,
        )
        await db.rollback()

    # the rollback above (or one inside the task store) expires the instance
    await db.refresh(farm)
    await crud_farms.attach_reference_names(db, [farm])
    return farm


# ----------------------------------------------------------
# READ
# ----------------------------------------------------------

async def get_farms_for_user(user_id: str, db: AsyncSession) -> List[Farm]:
    return await crud_farms.list_farms_by_user(db, user_id)


async def get_farm(farm_id: str, db: AsyncSession) -> Optional[Farm]:
    return await crud_farms.get_farm(db, farm_id)


# ----------------------------------------------------------
# UPDATE
# ----------------------------------------------------------

async def update_farm(farm_id: str, payload: FarmUpdate, db: AsyncSession) -> Optional[Farm]:
    """
    Partial update. A new start date is stored normalised but does not
    regenerate the existing schedule.
    """
    farm_id = require_uuid(farm_id, "farm ID")

    farm = await crud_farms.get_farm(db, farm_id)
    if not farm:
        return None

    if payload.district_id is not None:
        await _check_district(db, payload.district_id)
        farm.district_id = payload.district_id

    if payload.soil_type_id is not None:
        await _check_soil_type(db, payload.soil_type_id)
        farm.soil_type_id = payload.soil_type_id

    if payload.chosen_variety_id:
        await _check_variety(db, payload.chosen_variety_id)
        farm.chosen_variety_id = payload.chosen_variety_id

    if payload.farm_name:
        farm.farm_name = payload.farm_name

    if payload.farm_start_date is not None:
        farm.farm_start_date = normalize_start_date(payload.farm_start_date)

    if payload.area_hectares is not None:
        farm.area_hectares = payload.area_hectares

    if payload.total_vines is not None:
        farm.total_vines = payload.total_vines

    return await crud_farms.update_farm(db, farm)


# ----------------------------------------------------------
# DELETE
# ----------------------------------------------------------

async def delete_farm(farm_id: str, db: AsyncSession) -> bool:
    farm_id = require_uuid(farm_id, "farm ID")

    try:
        # children first: tasks and seasons reference the farm
        await crud_tasks.delete_tasks_by_farm(db, farm_id)
        await crud_seasons.delete_seasons_by_farm(db, farm_id)
        return await crud_farms.delete_farm(db, farm_id)
    except SQLAlchemyError as exc:
        logger.error(
            f"Database error deleting farm {farm_id}: {describe_exception(exc)}",
            exc_info=True,
            extra={"farm_id": farm_id},
        )
        raise
