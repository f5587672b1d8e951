# backend/plantation/api/farmer/seasons.py

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from plantation.api.farmer.plantation import owned_farm
from plantation.core.auth import get_current_user_id
from plantation.core.database import get_db
from plantation.core.exceptions import PlantationError
from plantation.core.ids import normalize_uuid
from plantation.crud.farmer import farms as crud_farms

from plantation.schemas.farmer.season import SeasonCreate, SeasonUpdate, SeasonOut
from plantation.services.farmer import season_service


router = APIRouter(prefix="/seasons", tags=["seasons"])


async def owned_season(season_id: str, user_id: str, db: AsyncSession):
    season = await season_service.get_season(season_id, db)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")

    # ownership follows the farm, not the creator
    farm = await crud_farms.get_farm(db, season.farm_id)
    if not farm or farm.user_id != user_id:
        raise HTTPException(status_code=403, detail="Season does not belong to user")
    return season


@router.post("/", response_model=SeasonOut, status_code=status.HTTP_201_CREATED)
async def create_season(
    payload: SeasonCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_farm(payload.farm_id, user_id, db)
    payload.created_by = user_id
    try:
        return await season_service.create_season(payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/user/{user_id}", response_model=List[SeasonOut])
async def list_seasons_for_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if normalize_uuid(user_id) != current_user_id:
        raise HTTPException(status_code=403, detail="Cannot read another user's seasons")
    return await season_service.get_seasons_for_user(current_user_id, db)


@router.get("/farm/{farm_id}", response_model=List[SeasonOut])
async def list_seasons_for_farm(
    farm_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    farm = await owned_farm(farm_id, user_id, db)
    return await season_service.get_seasons_for_farm(farm.id, db)


@router.get("/{season_id}", response_model=SeasonOut)
async def get_season(season_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return await owned_season(season_id, user_id, db)


@router.put("/{season_id}", response_model=SeasonOut)
async def update_season(
    season_id: str,
    payload: SeasonUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    season = await owned_season(season_id, user_id, db)

    # moving a season is only allowed onto another farm of the same user
    if payload.farm_id and normalize_uuid(payload.farm_id) != season.farm_id:
        new_farm = await crud_farms.get_farm(db, payload.farm_id)
        if not new_farm or new_farm.user_id != user_id:
            raise HTTPException(status_code=400, detail="New farm not found or does not belong to user")

    try:
        updated = await season_service.update_season(season_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not updated:
        raise HTTPException(status_code=404, detail="Season not found")
    return updated


@router.post("/{season_id}/end", response_model=SeasonOut)
async def end_season(season_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    await owned_season(season_id, user_id, db)
    season = await season_service.end_season(season_id, db)
    if not season:
        raise HTTPException(status_code=404, detail="Season not found")
    return season


@router.delete("/{season_id}", status_code=status.HTTP_200_OK)
async def delete_season(season_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    season_id = (await owned_season(season_id, user_id, db)).id
    deleted = await season_service.delete_season(season_id, db)
    if not deleted:
        raise HTTPException(status_code=404, detail="Season not found")
    return {"ok": True, "deleted": season_id}
