# backend/plantation/schemas/farmer/plantation.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class FarmCreate(BaseModel):
    farm_name: str = Field(..., min_length=1, max_length=200)
    district_id: int
    soil_type_id: int
    chosen_variety_id: str = Field(..., min_length=1, max_length=50)
    farm_start_date: datetime
    area_hectares: float = Field(..., gt=0)
    total_vines: int = Field(..., ge=1)


class FarmUpdate(BaseModel):
    farm_name: Optional[str] = Field(None, max_length=200)
    district_id: Optional[int] = None
    soil_type_id: Optional[int] = None
    chosen_variety_id: Optional[str] = Field(None, max_length=50)
    farm_start_date: Optional[datetime] = None
    area_hectares: Optional[float] = Field(None, gt=0)
    total_vines: Optional[int] = Field(None, ge=1)


class FarmOut(BaseModel):
    id: str
    user_id: str
    farm_name: str
    district_id: Optional[int] = None
    soil_type_id: Optional[int] = None
    chosen_variety_id: Optional[str] = None
    district: Optional[str] = None
    chosen_variety: Optional[str] = None
    farm_start_date: Optional[datetime] = None
    area_hectares: Optional[float] = None
    total_vines: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
