# backend/plantation/api/farmer/prediction.py

from fastapi import APIRouter, HTTPException

from plantation.core.logger import get_logger
from plantation.core.utils_logging import describe_exception
from plantation.schemas.farmer.prediction import PricePredictionRequest, PricePredictionResult
from plantation.services.farmer import price_prediction_service

router = APIRouter(prefix="/prediction", tags=["prediction"])
logger = get_logger("prediction")


@router.post("/predict", response_model=PricePredictionResult)
def predict_price(payload: PricePredictionRequest):
    """
    Predict the highest and average pepper price (LKR) for a market, grade and date.
    """
    try:
        return price_prediction_service.predict(payload)
    except Exception as e:
        logger.error(f"Price prediction failed: {describe_exception(e)}")
        raise HTTPException(
            status_code=500,
            detail={"message": "An error occurred during prediction.", "details": str(e)},
        )
