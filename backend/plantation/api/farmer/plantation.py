# backend/plantation/api/farmer/plantation.py

from fastapi import APIRouter, Depends, HTTPException, status
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from plantation.core.auth import get_current_user_id
from plantation.core.database import get_db
from plantation.core.exceptions import PlantationError
from plantation.crud.farmer import farms as crud_farms
from plantation.core.ids import normalize_uuid

from plantation.schemas.farmer.plantation import FarmCreate, FarmUpdate, FarmOut
from plantation.schemas.farmer.task import (
    CompleteTaskRequest,
    ManualTaskCreate,
    TaskDetailsUpdate,
    TaskOut,
    UpdateCompletionDetailsRequest,
)
from plantation.services.farmer import plantation_service, task_service


router = APIRouter(prefix="/plantation", tags=["plantation"])


# ------------------------------------------------
# OWNERSHIP HELPERS
# ------------------------------------------------
async def owned_farm(farm_id: str, user_id: str, db: AsyncSession):
    farm = await crud_farms.get_farm(db, farm_id)
    if not farm:
        raise HTTPException(status_code=404, detail="Farm not found")
    if farm.user_id != user_id:
        raise HTTPException(status_code=403, detail="Farm does not belong to user")
    return farm


async def owned_task(task_id: str, user_id: str, db: AsyncSession):
    task_key = normalize_uuid(task_id)
    if task_key is None:
        raise HTTPException(status_code=400, detail="Invalid task ID format")

    task = await task_service.get_task(task_key, db)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    farm = await crud_farms.get_farm(db, task.farm_id)
    if not farm or farm.user_id != user_id:
        raise HTTPException(status_code=403, detail="Task does not belong to user")
    return task


# ============================================================
# FARMS
# ============================================================

@router.post("/start", response_model=FarmOut, status_code=status.HTTP_201_CREATED)
async def start_plantation(
    payload: FarmCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await plantation_service.start_plantation(user_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/farms", response_model=List[FarmOut])
async def list_farms(user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return await plantation_service.get_farms_for_user(user_id, db)


@router.get("/farm/{farm_id}", response_model=FarmOut)
async def get_farm(farm_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    return await owned_farm(farm_id, user_id, db)


@router.put("/farm/{farm_id}", response_model=FarmOut)
async def update_farm(
    farm_id: str,
    payload: FarmUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_farm(farm_id, user_id, db)
    try:
        farm = await plantation_service.update_farm(farm_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not farm:
        raise HTTPException(status_code=404, detail="Farm not found")
    return farm


@router.delete("/farm/{farm_id}", status_code=status.HTTP_200_OK)
async def delete_farm(farm_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    farm = await owned_farm(farm_id, user_id, db)
    farm_id = farm.id
    deleted = await plantation_service.delete_farm(farm_id, db)
    if not deleted:
        raise HTTPException(status_code=404, detail="Farm not found")
    return {"ok": True, "deleted": farm_id}


# ============================================================
# TASKS
# ============================================================

@router.get("/tasks/{farm_id}", response_model=List[TaskOut])
async def list_tasks(farm_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    farm = await owned_farm(farm_id, user_id, db)
    return await task_service.get_tasks_for_farm(farm.id, db)


@router.put("/task/complete/{task_id}", response_model=TaskOut)
async def complete_task(
    task_id: str,
    payload: CompleteTaskRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_task(task_id, user_id, db)
    try:
        task = await task_service.complete_task(task_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/tasks/manual", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_manual_task(
    payload: ManualTaskCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_farm(payload.farm_id, user_id, db)
    try:
        return await task_service.create_manual_task(payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.put("/tasks/{task_id}", response_model=TaskOut)
async def update_task_details(
    task_id: str,
    payload: TaskDetailsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_task(task_id, user_id, db)
    try:
        task = await task_service.update_task_details(task_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.put("/tasks/{task_id}/completion", response_model=TaskOut)
async def update_completion_details(
    task_id: str,
    payload: UpdateCompletionDetailsRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await owned_task(task_id, user_id, db)
    try:
        task = await task_service.update_completion_details(task_id, payload, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.delete("/tasks/{task_id}", status_code=status.HTTP_200_OK)
async def delete_task(task_id: str, user_id: str = Depends(get_current_user_id), db: AsyncSession = Depends(get_db)):
    task_id = (await owned_task(task_id, user_id, db)).id
    try:
        deleted = await task_service.delete_task(task_id, db)
    except PlantationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"ok": True, "deleted": task_id}
