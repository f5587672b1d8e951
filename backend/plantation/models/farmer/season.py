# backend/plantation/models/farmer/season.py

from sqlalchemy import Column, String, Integer, ForeignKey, Numeric
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from plantation.core.database import Base
from plantation.models.farmer.plantation import gen_uuid


class SeasonStatus:
    STARTED = "season-start"
    ENDED = "season-end"


class HarvestSeason(Base):
    __tablename__ = "harvest_seasons"

    id = Column(PG_UUID(as_uuid=False), primary_key=True, default=gen_uuid)
    season_name = Column(String(100), nullable=False, default="")
    start_month = Column(Integer, nullable=False)
    start_year = Column(Integer, nullable=False)
    end_month = Column(Integer, nullable=False)
    end_year = Column(Integer, nullable=False)

    farm_id = Column(PG_UUID(as_uuid=False), ForeignKey("farms.id"), nullable=False, index=True)
    total_harvested_yield = Column(Numeric, nullable=False, default=0)
    status = Column(String(50), nullable=False, default=SeasonStatus.STARTED)
    created_by = Column(PG_UUID(as_uuid=False), nullable=False, index=True)
