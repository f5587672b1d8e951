from .farmer.plantation import (
    District,
    SoilType,
    PepperVariety,
    Farm,
    AgronomyTemplate,
    FarmTask,
)
from .farmer.season import HarvestSeason
from ..core.database import Base
__all__ = [
    "District",
    "SoilType",
    "PepperVariety",
    "Farm",
    "AgronomyTemplate",
    "FarmTask",
    "HarvestSeason",
    "Base"
]
