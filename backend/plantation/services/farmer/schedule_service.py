# backend/plantation/services/farmer/schedule_service.py

"""
Farm schedule generator.

- Expands the agronomy template catalog into dated FarmTask rows for one farm.
- Offset 0 templates are "immediate": never dated before the moment of generation.
- Dry-zone districts get three extra "Summer Irrigation Check" tasks (15 Mar/Apr/May).
- Tasks are persisted one by one; a failed insert is logged and the batch continues.

The template catalog and the task store are passed in, so the generator can run
against the database (crud.farmer.templates.TemplateCatalog / crud.farmer.tasks.TaskStore)
or against in-memory fakes.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Protocol

from plantation.core.clock import utcnow
from plantation.core.logger import get_logger
from plantation.core.utils_logging import describe_exception
from plantation.models.farmer.plantation import (
    AgronomyTemplate,
    Farm,
    FarmTask,
    TaskPriority,
    TaskStatus,
    WILDCARD_VARIETY,
)

logger = get_logger("schedule")

DEFAULT_PHASE = "Maintenance"

# district names compared case-insensitively
DRY_ZONE_DISTRICTS = frozenset(
    name.lower() for name in (
        "Hambantota",
        "Anuradhapura",
        "Polonnaruwa",
        "Kurunegala",
        "Monaragala",
    )
)

SUMMER_IRRIGATION_MONTHS = (3, 4, 5)
SUMMER_IRRIGATION_DAY = 15
SUMMER_IRRIGATION_TASK = "Summer Irrigation Check"
SUMMER_IRRIGATION_STEPS = [
    "Inspect soil moisture at 15–20cm depth.",
    "If soil is dry and no rain in last 5 days, schedule supplementary irrigation.",
    "Check mulch cover around vines and repair any gaps.",
]
SUMMER_IRRIGATION_REASON = (
    "Dry-zone districts face high evapotranspiration from March to May. "
    "Regular irrigation checks prevent vine stress and yield loss."
)

# how many variety keys to print when the catalog has nothing for a farm
_DIAGNOSTIC_SAMPLE = 5


class TemplateSource(Protocol):
    async def get_by_variety_key(self, variety_key: str) -> List[AgronomyTemplate]: ...

    async def get_all(self) -> List[AgronomyTemplate]: ...


class TaskSink(Protocol):
    async def create(self, task: FarmTask) -> FarmTask: ...


def is_dry_zone(district_name: Optional[str]) -> bool:
    return bool(district_name) and district_name.strip().lower() in DRY_ZONE_DISTRICTS


def first_season_year(start_date: datetime) -> int:
    """First calendar year whose March falls inside the farm's lifetime."""
    return start_date.year if start_date.month <= 3 else start_date.year + 1


def compute_due_date(start_date: datetime, offset_days: int, now: datetime) -> datetime:
    if offset_days == 0:
        # immediate task: the start date, or now if the farm already started
        return start_date if start_date > now else now
    return start_date + timedelta(days=offset_days)


def build_template_task(farm_id: str, template: AgronomyTemplate,
                        start_date: datetime, now: datetime) -> FarmTask:
    return FarmTask(
        farm_id=farm_id,
        task_name=template.task_name,
        phase=template.phase or DEFAULT_PHASE,
        task_type=template.task_type or "",
        variety_key=template.variety_key,
        due_date=compute_due_date(start_date, template.timing_days_after_start or 0, now),
        status=TaskStatus.SCHEDULED,
        detailed_steps=template.get_detailed_steps_list(),
        reason_why="",
        is_manual=False,
        priority=TaskPriority.MEDIUM,
    )


def build_summer_irrigation_tasks(farm_id: str, start_date: datetime) -> List[FarmTask]:
    year = first_season_year(start_date)
    return [
        FarmTask(
            farm_id=farm_id,
            task_name=SUMMER_IRRIGATION_TASK,
            phase="Maintenance",
            task_type="Irrigation",
            variety_key=WILDCARD_VARIETY,
            due_date=datetime(year, month, SUMMER_IRRIGATION_DAY),
            status=TaskStatus.SCHEDULED,
            detailed_steps=list(SUMMER_IRRIGATION_STEPS),
            reason_why=SUMMER_IRRIGATION_REASON,
            is_manual=False,
            priority=TaskPriority.MEDIUM,
        )
        for month in SUMMER_IRRIGATION_MONTHS
    ]


async def _log_empty_catalog(templates: TemplateSource, variety_key: str) -> None:
    logger.warning(f"No templates found for variety key '{variety_key}'. Checking if any templates exist at all...")
    all_templates = await templates.get_all()
    logger.info(f"Total templates in catalog: {len(all_templates)}")
    if all_templates:
        sample = ", ".join(t.variety_key for t in all_templates[:_DIAGNOSTIC_SAMPLE])
        logger.info(f"Sample template variety keys: {sample}")


async def generate_schedule_for_farm(
    farm: Farm,
    templates: TemplateSource,
    tasks: TaskSink,
    district_name: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[FarmTask]:
    """
    Build and persist the task schedule for `farm`.

    Returns the tasks that were stored. Per-task persistence failures are
    logged and skipped; a failing template catalog propagates.
    """
    # read everything off the farm up front: a rollback inside the task
    # store expires ORM instances
    farm_id = farm.id
    start_date = farm.farm_start_date
    variety_key = farm.chosen_variety_id or WILDCARD_VARIETY
    log_extra = {"farm_id": farm_id}

    if start_date is None:
        logger.warning(f"Farm {farm_id} does not have a start date. Cannot generate schedule.", extra=log_extra)
        return []

    now = now or utcnow()
    logger.info(f"Starting schedule generation for farm {farm_id}, variety key: {variety_key}", extra=log_extra)

    matching = await templates.get_by_variety_key(variety_key)
    logger.info(f"Found {len(matching)} templates matching variety key '{variety_key}'", extra=log_extra)
    if not matching:
        await _log_empty_catalog(templates, variety_key)

    batch: List[FarmTask] = []
    for template in matching:
        try:
            batch.append(build_template_task(farm_id, template, start_date, now))
        except Exception as exc:
            logger.error(
                f"Error processing template '{getattr(template, 'task_name', 'Unknown')}' "
                f"for farm {farm_id}: {describe_exception(exc)}",
                extra=log_extra,
            )

    if is_dry_zone(district_name):
        logger.info(f"District '{district_name}' is in the dry zone; adding summer irrigation checks", extra=log_extra)
        batch.extend(build_summer_irrigation_tasks(farm_id, start_date))

    created: List[FarmTask] = []
    logger.info(f"Attempting to create {len(batch)} tasks for farm {farm_id}", extra=log_extra)
    for task in batch:
        name, due = task.task_name, task.due_date
        try:
            created.append(await tasks.create(task))
        except Exception as exc:
            logger.error(
                f"Failed to create task '{name}' for farm {farm_id}: {describe_exception(exc)}",
                exc_info=True,
                extra=log_extra,
            )
            continue
        logger.info(f"Created task '{name}' (due {due:%Y-%m-%d})", extra=log_extra)

    logger.info(
        f"Generated {len(batch)} tasks, successfully created {len(created)} tasks for farm {farm_id}",
        extra=log_extra,
    )
    if len(created) < len(batch):
        logger.warning(f"Only {len(created)} out of {len(batch)} tasks were created for farm {farm_id}", extra=log_extra)

    return created
