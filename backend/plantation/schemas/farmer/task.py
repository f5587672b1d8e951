# backend/plantation/schemas/farmer/task.py

from typing import Optional, List, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

Priority = Literal["Low", "Medium", "High", "Emergency"]


# ============================================================
# COMPLETION RECORD
# ============================================================

class InputItem(BaseModel):
    item_name: str = ""
    quantity: float = 0
    unit_cost_lkr: Optional[float] = None
    unit: Optional[str] = "kg"


class InputDetails(BaseModel):
    items: List[InputItem] = []
    labor_hours: float = 0
    notes: Optional[str] = None


class CompleteTaskRequest(BaseModel):
    items: Optional[List[InputItem]] = None
    labor_hours: float = 0
    notes: Optional[str] = None


class UpdateCompletionDetailsRequest(BaseModel):
    # None (omitted) keeps the stored items, [] clears them
    items: Optional[List[InputItem]] = None
    labor_hours: float = 0
    notes: Optional[str] = None


# ============================================================
# MANUAL TASKS
# ============================================================

class ManualTaskCreate(BaseModel):
    farm_id: str
    task_name: str = Field(..., min_length=1, max_length=255)
    phase: Optional[str] = Field(None, max_length=50)
    task_type: str = Field("", max_length=50)
    due_date: datetime
    priority: Priority = "Medium"
    detailed_steps: Optional[List[str]] = None
    reason_why: Optional[str] = None


class TaskDetailsUpdate(BaseModel):
    task_name: str = Field(..., min_length=1, max_length=255)
    phase: Optional[str] = Field(None, max_length=50)
    priority: Optional[Priority] = None
    due_date: datetime
    detailed_steps: Optional[List[str]] = None
    reason_why: Optional[str] = None


# ============================================================
# RESPONSE
# ============================================================

class TaskOut(BaseModel):
    id: str
    farm_id: str
    task_name: str
    phase: str
    task_type: str
    variety_key: str
    due_date: datetime
    status: str
    date_completed: Optional[datetime] = None
    input_details: Optional[InputDetails] = None
    detailed_steps: List[str] = []
    reason_why: Optional[str] = None
    is_manual: bool
    priority: str
    created_at: Optional[datetime] = None

    @field_validator("detailed_steps", mode="before")
    @classmethod
    def _steps_default(cls, v):
        return v or []

    class Config:
        from_attributes = True
