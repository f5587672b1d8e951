# backend/plantation/services/farmer/task_service.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from plantation.core.clock import utcnow, to_naive_utc
from plantation.core.exceptions import InvalidRequestError, InvalidStateError
from plantation.core.ids import normalize_uuid, require_uuid
from plantation.core.logger import get_logger
from plantation.crud.farmer import farms as crud_farms
from plantation.crud.farmer import tasks as crud_tasks
from plantation.models.farmer.plantation import FarmTask, TaskStatus, WILDCARD_VARIETY
from plantation.schemas.farmer.task import (
    CompleteTaskRequest,
    InputItem,
    ManualTaskCreate,
    TaskDetailsUpdate,
    UpdateCompletionDetailsRequest,
)

logger = get_logger("tasks")

DEFAULT_UNIT = "kg"
DEFAULT_PHASE = "Maintenance"


# ====================================================================
# OVERDUE PROMOTION
# ====================================================================

def projected_status(task: FarmTask, now: datetime) -> str:
    """Status the caller should see: a Scheduled task past its due date reads as Overdue."""
    if task.status == TaskStatus.SCHEDULED and task.due_date < now:
        return TaskStatus.OVERDUE
    return task.status


async def _promote_if_overdue(db: AsyncSession, task: FarmTask, now: datetime) -> FarmTask:
    status = projected_status(task, now)
    if status == task.status:
        return task

    task.status = status
    logger.info(f"Task {task.id} is past due; marked {status}", extra={"task_id": task.id})
    return await crud_tasks.update_task(db, task)


async def get_tasks_for_farm(farm_id: str, db: AsyncSession, now: Optional[datetime] = None) -> List[FarmTask]:
    farm_id = require_uuid(farm_id, "farm ID")
    now = now or utcnow()

    tasks = await crud_tasks.list_tasks_by_farm(db, farm_id)
    for task in tasks:
        await _promote_if_overdue(db, task, now)

    return tasks


async def get_task(task_id: str, db: AsyncSession, now: Optional[datetime] = None) -> Optional[FarmTask]:
    task_id = normalize_uuid(task_id)
    if task_id is None:
        return None

    task = await crud_tasks.get_task(db, task_id)
    if task is None:
        return None

    return await _promote_if_overdue(db, task, now or utcnow())


# ====================================================================
# COMPLETION
# ====================================================================

def _item_to_record(item: InputItem) -> dict:
    return {
        "item_name": item.item_name or "",
        "quantity": item.quantity,
        "unit_cost_lkr": item.unit_cost_lkr,
        "unit": item.unit or DEFAULT_UNIT,
    }


async def _load_task(task_id: str, db: AsyncSession) -> Optional[FarmTask]:
    return await crud_tasks.get_task(db, require_uuid(task_id, "task ID"))


async def complete_task(task_id: str, payload: CompleteTaskRequest, db: AsyncSession) -> Optional[FarmTask]:
    task = await _load_task(task_id, db)
    if task is None:
        return None

    if task.status == TaskStatus.COMPLETED:
        raise InvalidStateError("Task is already completed. Use update completion details instead.")

    task.status = TaskStatus.COMPLETED
    task.date_completed = utcnow()
    task.input_details = {
        "items": [_item_to_record(i) for i in payload.items or []],
        "labor_hours": payload.labor_hours,
        "notes": payload.notes,
    }

    return await crud_tasks.update_task(db, task)


async def update_completion_details(
    task_id: str, payload: UpdateCompletionDetailsRequest, db: AsyncSession
) -> Optional[FarmTask]:
    task = await _load_task(task_id, db)
    if task is None:
        return None

    if task.status != TaskStatus.COMPLETED:
        raise InvalidStateError("Task must be completed before updating completion details")

    current = task.input_details or {}
    if payload.items is not None:
        # explicit list, possibly empty: replace
        items = [_item_to_record(i) for i in payload.items]
        logger.info(f"Updating completion details of task {task.id}: {len(items)} items", extra={"task_id": task.id})
    else:
        items = list(current.get("items") or [])
        logger.info(f"Updating completion details of task {task.id}: items omitted, keeping existing", extra={"task_id": task.id})

    # new dict so the JSON column is flagged dirty
    task.input_details = {
        "items": items,
        "labor_hours": payload.labor_hours,
        "notes": payload.notes,
    }

    return await crud_tasks.update_task(db, task)


# ====================================================================
# MANUAL TASKS
# ====================================================================

async def create_manual_task(payload: ManualTaskCreate, db: AsyncSession) -> FarmTask:
    farm_id = require_uuid(payload.farm_id, "farm ID")

    farm = await crud_farms.get_farm(db, farm_id)
    if farm is None:
        raise InvalidRequestError("Farm not found")

    task = FarmTask(
        farm_id=farm_id,
        task_name=payload.task_name,
        phase=payload.phase or DEFAULT_PHASE,
        task_type=payload.task_type,
        variety_key=WILDCARD_VARIETY,  # manual tasks are not variety-specific
        due_date=to_naive_utc(payload.due_date),
        status=TaskStatus.SCHEDULED,
        detailed_steps=list(payload.detailed_steps or []),
        reason_why=payload.reason_why or "",
        is_manual=True,
        priority=payload.priority,
    )
    task = await crud_tasks.create_task(db, task)
    return await _promote_if_overdue(db, task, utcnow())


async def update_task_details(task_id: str, payload: TaskDetailsUpdate, db: AsyncSession) -> Optional[FarmTask]:
    task = await _load_task(task_id, db)
    if task is None:
        return None

    if not task.is_manual:
        raise InvalidStateError("Only manual tasks can be updated before completion")
    if task.status == TaskStatus.COMPLETED:
        raise InvalidStateError("Cannot update task details after completion. Use update completion details instead.")

    task.task_name = payload.task_name
    task.due_date = to_naive_utc(payload.due_date)
    if payload.priority is not None:
        task.priority = payload.priority
    if payload.phase is not None:
        task.phase = payload.phase
    if payload.detailed_steps is not None:
        task.detailed_steps = list(payload.detailed_steps)
    if payload.reason_why is not None:
        task.reason_why = payload.reason_why

    task = await crud_tasks.update_task(db, task)
    return await _promote_if_overdue(db, task, utcnow())


async def delete_task(task_id: str, db: AsyncSession) -> bool:
    task = await _load_task(task_id, db)
    if task is None:
        return False

    if not task.is_manual:
        raise InvalidStateError("Only manual tasks can be deleted")
    if task.status == TaskStatus.COMPLETED:
        raise InvalidStateError("Cannot delete completed tasks")

    return await crud_tasks.delete_task(db, task.id)
