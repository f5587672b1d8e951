# backend/plantation/models/farmer/plantation.py

from sqlalchemy import (
    Column, String, Integer, ForeignKey, DateTime,
    Text, Boolean, Numeric, JSON
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID, JSONB
import uuid

from plantation.core.clock import utcnow
from plantation.core.database import Base

# jsonb on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

WILDCARD_VARIETY = "ALL"


def gen_uuid():
    return str(uuid.uuid4())


class TaskStatus:
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


class TaskPriority:
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EMERGENCY = "Emergency"


# ============================================================
# REFERENCE DATA
# ============================================================
class District(Base):
    __tablename__ = "districts"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)


class SoilType(Base):
    __tablename__ = "soil_types"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)


class PepperVariety(Base):
    __tablename__ = "pepper_varieties"

    id = Column(String(50), primary_key=True)   # variety key used by templates
    name = Column(String(100), nullable=False)


# ============================================================
# FARM
# ============================================================
class Farm(Base):
    __tablename__ = "farms"

    id = Column(PG_UUID(as_uuid=False), primary_key=True, default=gen_uuid)
    user_id = Column(PG_UUID(as_uuid=False), nullable=False, index=True)
    farm_name = Column(String(255), nullable=False)

    district_id = Column(Integer, ForeignKey("districts.id"), nullable=True)
    soil_type_id = Column(Integer, ForeignKey("soil_types.id"), nullable=True)
    chosen_variety_id = Column(String(50), ForeignKey("pepper_varieties.id"), nullable=True)

    # midnight UTC, only the calendar date is meaningful
    farm_start_date = Column(DateTime, nullable=True)
    area_hectares = Column(Numeric, nullable=True)
    total_vines = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    # resolved reference names, filled in by crud.farmer.farms (not persisted)
    district = None
    chosen_variety = None


# ============================================================
# AGRONOMY TEMPLATES (Template Catalog rows)
# ============================================================
class AgronomyTemplate(Base):
    __tablename__ = "agronomy_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    task_name = Column(String(255), nullable=False)
    phase = Column(String(50), nullable=True)
    task_type = Column(String(50), nullable=False, default="")
    variety_key = Column(String(50), nullable=False, default=WILDCARD_VARIETY, index=True)

    # negative = before start, 0 = immediate, positive = after start
    timing_days_after_start = Column(Integer, nullable=False, default=0)
    detailed_steps = Column(JSONType, nullable=True)

    def get_detailed_steps_list(self):
        return list(self.detailed_steps or [])


# ============================================================
# FARM TASKS
# ============================================================
class FarmTask(Base):
    __tablename__ = "farm_tasks"

    id = Column(PG_UUID(as_uuid=False), primary_key=True, default=gen_uuid)
    farm_id = Column(PG_UUID(as_uuid=False), ForeignKey("farms.id"), nullable=False, index=True)
    task_name = Column(String(255), nullable=False)
    phase = Column(String(50), nullable=False, default="")
    task_type = Column(String(50), nullable=False, default="")
    variety_key = Column(String(50), nullable=False, default="")

    due_date = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=TaskStatus.SCHEDULED)
    date_completed = Column(DateTime, nullable=True)

    # {"items": [...], "labor_hours": float, "notes": str | None}
    input_details = Column(JSONType, nullable=True)
    detailed_steps = Column(JSONType, nullable=True)
    reason_why = Column(Text, nullable=True)

    is_manual = Column(Boolean, nullable=False, default=False)
    priority = Column(String(20), nullable=False, default=TaskPriority.MEDIUM)

    created_at = Column(DateTime, default=utcnow)
