# backend/plantation/schemas/farmer/season.py

from typing import Optional
from pydantic import BaseModel, Field


class SeasonCreate(BaseModel):
    season_name: str = Field(..., min_length=1, max_length=100)
    start_month: int = Field(..., ge=1, le=12)
    start_year: int = Field(..., ge=2000, le=2100)
    end_month: int = Field(..., ge=1, le=12)
    end_year: int = Field(..., ge=2000, le=2100)
    farm_id: str
    created_by: Optional[str] = None  # filled from the token by the router


class SeasonUpdate(BaseModel):
    season_name: Optional[str] = Field(None, min_length=1, max_length=100)
    start_month: Optional[int] = Field(None, ge=1, le=12)
    start_year: Optional[int] = Field(None, ge=2000, le=2100)
    end_month: Optional[int] = Field(None, ge=1, le=12)
    end_year: Optional[int] = Field(None, ge=2000, le=2100)
    farm_id: Optional[str] = None


class SeasonOut(BaseModel):
    id: str
    season_name: str
    start_month: int
    start_year: int
    end_month: int
    end_year: int
    farm_id: str
    total_harvested_yield: float = 0
    status: str
    created_by: str

    class Config:
        from_attributes = True
