# backend/plantation/core/seed_reference.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from plantation.core.logger import logger
from plantation.models.farmer.plantation import (
    AgronomyTemplate,
    District,
    PepperVariety,
    SoilType,
    WILDCARD_VARIETY,
)


DEFAULT_DISTRICTS = [
    "Ampara", "Anuradhapura", "Badulla", "Batticaloa", "Colombo",
    "Galle", "Gampaha", "Hambantota", "Jaffna", "Kalutara",
    "Kandy", "Kegalle", "Kilinochchi", "Kurunegala", "Mannar",
    "Matale", "Matara", "Monaragala", "Mullaitivu", "Nuwara Eliya",
    "Polonnaruwa", "Puttalam", "Ratnapura", "Trincomalee", "Vavuniya",
]

DEFAULT_SOIL_TYPES = [
    "Red Yellow Podzolic",
    "Reddish Brown Earth",
    "Reddish Brown Latosolic",
    "Alluvial",
    "Sandy Loam",
    "Laterite",
]

DEFAULT_VARIETIES = [
    ("PANNIYUR_1", "Panniyur 1"),
    ("KUCHING", "Kuching"),
    ("DINGIRALA", "Dingirala"),
    ("BOMBAWA", "Bombawa"),
    ("LOCAL_SL", "Local (Sri Lankan)"),
]

# (task_name, phase, task_type, variety_key, days_after_start, steps)
DEFAULT_TEMPLATES = [
    ("Land Clearing and Pit Preparation", "Establishment", "Preparation", WILDCARD_VARIETY, -30, [
        "Clear weeds and debris from the planting area.",
        "Dig pits of 45cm x 45cm x 45cm at 2.5m spacing.",
        "Fill pits with topsoil mixed with 5kg of compost.",
    ]),
    ("Plant Support Trees (Gliricidia)", "Establishment", "Planting", WILDCARD_VARIETY, -14, [
        "Plant Gliricidia cuttings beside each pit as live standards.",
        "Water the cuttings until they are established.",
    ]),
    ("Plant Pepper Cuttings", "Establishment", "Planting", WILDCARD_VARIETY, 0, [
        "Plant rooted cuttings on the north-east side of the standard.",
        "Tie the vines loosely to the standard.",
        "Provide temporary shade for the first weeks.",
    ]),
    ("First Fertilizer Application", "Vegetative", "Fertilization", WILDCARD_VARIETY, 30, [
        "Apply 100g of NPK mixture in a ring 30cm from the vine base.",
        "Lightly cover the fertilizer with soil and mulch.",
    ]),
    ("Weeding and Mulching", "Vegetative", "Maintenance", WILDCARD_VARIETY, 60, [
        "Remove weeds within a 1m radius of each vine.",
        "Apply a fresh layer of mulch.",
    ]),
    ("Foot Rot Preventive Spray", "Vegetative", "Pest Control", "PANNIYUR_1", 90, [
        "Spray 1% Bordeaux mixture on the vine base and lower leaves.",
        "Drench the soil around the base with the same solution.",
    ]),
    ("Vine Training and Tying", "Vegetative", "Maintenance", WILDCARD_VARIETY, 120, [
        "Tie new shoots to the standard at 20cm intervals.",
        "Remove runner shoots growing along the ground.",
    ]),
    ("Second Fertilizer Application", "Vegetative", "Fertilization", WILDCARD_VARIETY, 180, [
        "Apply 200g of NPK mixture with the onset of rains.",
    ]),
]


async def seed_reference_data(db: AsyncSession):

    # 1. Districts
    for name in DEFAULT_DISTRICTS:
        exists = await db.scalar(select(District).where(District.name == name))
        if not exists:
            db.add(District(name=name))

    # 2. Soil types
    for name in DEFAULT_SOIL_TYPES:
        exists = await db.scalar(select(SoilType).where(SoilType.name == name))
        if not exists:
            db.add(SoilType(name=name))

    # 3. Pepper varieties
    for variety_id, name in DEFAULT_VARIETIES:
        exists = await db.get(PepperVariety, variety_id)
        if not exists:
            db.add(PepperVariety(id=variety_id, name=name))

    await db.commit()

    # 4. Agronomy templates, matched on name + variety
    for task_name, phase, task_type, variety_key, offset, steps in DEFAULT_TEMPLATES:
        exists = await db.scalar(
            select(AgronomyTemplate).where(
                AgronomyTemplate.task_name == task_name,
                AgronomyTemplate.variety_key == variety_key,
            )
        )
        if not exists:
            db.add(AgronomyTemplate(
                task_name=task_name,
                phase=phase,
                task_type=task_type,
                variety_key=variety_key,
                timing_days_after_start=offset,
                detailed_steps=list(steps),
            ))

    await db.commit()

    logger.info("Reference data seeded successfully")
