# backend/plantation/crud/farmer/templates.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from typing import List

from plantation.models.farmer.plantation import AgronomyTemplate, WILDCARD_VARIETY


async def list_templates_by_variety_key(db: AsyncSession, variety_key: str) -> List[AgronomyTemplate]:
    """Templates for `variety_key` plus the wildcard ("ALL") ones, in timing order."""
    rows = await db.scalars(
        select(AgronomyTemplate)
        .where(or_(AgronomyTemplate.variety_key == variety_key,
                   AgronomyTemplate.variety_key == WILDCARD_VARIETY))
        .order_by(AgronomyTemplate.timing_days_after_start.asc(), AgronomyTemplate.id.asc())
    )
    return rows.all()


async def list_templates(db: AsyncSession) -> List[AgronomyTemplate]:
    rows = await db.scalars(select(AgronomyTemplate).order_by(AgronomyTemplate.id.asc()))
    return rows.all()


class TemplateCatalog:
    """Template Catalog bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_variety_key(self, variety_key: str) -> List[AgronomyTemplate]:
        return await list_templates_by_variety_key(self.db, variety_key)

    async def get_all(self) -> List[AgronomyTemplate]:
        return await list_templates(self.db)
