# backend/plantation/schemas/farmer/prediction.py

from datetime import datetime
from pydantic import BaseModel, Field


class PricePredictionRequest(BaseModel):
    usd_buy_rate: float
    usd_sell_rate: float
    temperature: float
    precipitation: float
    date: datetime
    location: str = Field(..., min_length=1)
    grade: str = Field(..., min_length=1)


class PricePredictionResult(BaseModel):
    highest_price: float
    average_price: float
    currency: str = "LKR"
