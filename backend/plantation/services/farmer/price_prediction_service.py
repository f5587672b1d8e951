# backend/plantation/services/farmer/price_prediction_service.py

"""
Pepper price prediction
-----------------------

Wraps a pre-trained multi-output regressor exported to ONNX. The model takes
one row of 18 float32 features and returns [highest_price, average_price]
in LKR.

Feature layout:
  0-3    USD buy rate, USD sell rate, temperature, precipitation
  4-6    year, month, day of the prediction date
  7-15   one-hot market location, in ORDERED_LOCATIONS order
  16-17  grade flags GR-2, WHITE (GR-1 is both zero)
"""

import os
from typing import List

import numpy as np
import onnxruntime as ort

from plantation.core.config import settings
from plantation.core.logger import get_logger
from plantation.schemas.farmer.prediction import PricePredictionRequest, PricePredictionResult

logger = get_logger("prediction")

ORDERED_LOCATIONS = [
    "Colombo", "Galle", "Hambantota", "Kandy", "Kegalle",
    "Kurunegala", "Matale", "Matara", "Monaragala",
]
GRADE_FLAGS = ["GR-2", "WHITE"]

FEATURE_COUNT = 7 + len(ORDERED_LOCATIONS) + len(GRADE_FLAGS)

# loaded on first use
_session = None


def build_features(request: PricePredictionRequest) -> List[float]:
    features = [
        request.usd_buy_rate,
        request.usd_sell_rate,
        request.temperature,
        request.precipitation,
        request.date.year,
        request.date.month,
        request.date.day,
    ]

    # unknown locations encode as all zeros
    location = request.location.lower()
    features += [1.0 if location == loc.lower() else 0.0 for loc in ORDERED_LOCATIONS]

    grade = request.grade.upper()
    features += [1.0 if grade == flag else 0.0 for flag in GRADE_FLAGS]

    return [float(f) for f in features]


def get_session():
    global _session
    if _session is None:
        model_path = settings.PRICE_MODEL_PATH
        if not os.path.exists(model_path):
            raise FileNotFoundError(f"Model file not found at {model_path}")

        _session = ort.InferenceSession(model_path, providers=["CPUExecutionProvider"])
        logger.info(f"Loaded price model from {model_path}")
    return _session


def predict(request: PricePredictionRequest, session=None) -> PricePredictionResult:
    session = session or get_session()

    tensor = np.asarray([build_features(request)], dtype=np.float32)
    input_name = session.get_inputs()[0].name
    outputs = session.run(None, {input_name: tensor})

    # first output, shape [1, 2]
    row = np.asarray(outputs[0], dtype=np.float32).reshape(-1)
    return PricePredictionResult(highest_price=float(row[0]), average_price=float(row[1]))
