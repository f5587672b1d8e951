# backend/plantation/crud/farmer/tasks.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Optional, List

from plantation.core.clock import utcnow
from plantation.models.farmer.plantation import FarmTask


async def _commit_or_rollback(db: AsyncSession) -> None:
    # a failed flush leaves the session unusable until rolled back
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise


async def create_task(db: AsyncSession, task: FarmTask) -> FarmTask:
    task.created_at = utcnow()
    db.add(task)
    await _commit_or_rollback(db)
    await db.refresh(task)
    return task


async def list_tasks_by_farm(db: AsyncSession, farm_id: str) -> List[FarmTask]:
    rows = await db.scalars(
        select(FarmTask).where(FarmTask.farm_id == farm_id).order_by(FarmTask.due_date.asc())
    )
    return rows.all()


async def get_task(db: AsyncSession, task_id: str) -> Optional[FarmTask]:
    return await db.get(FarmTask, task_id)


async def update_task(db: AsyncSession, task: FarmTask) -> FarmTask:
    db.add(task)
    await _commit_or_rollback(db)
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: str) -> bool:
    task = await db.get(FarmTask, task_id)
    if not task:
        return False

    await db.delete(task)
    await _commit_or_rollback(db)
    return True


async def delete_tasks_by_farm(db: AsyncSession, farm_id: str) -> bool:
    # nothing to delete is not an error
    await db.execute(delete(FarmTask).where(FarmTask.farm_id == farm_id))
    await _commit_or_rollback(db)
    return True


class TaskStore:
    """Task Store bound to one session; handed to the schedule generator."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, task: FarmTask) -> FarmTask:
        return await create_task(self.db, task)
