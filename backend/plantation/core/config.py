from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required
    DATABASE_URL: str

    # Bearer tokens issued by the auth service
    JWT_SECRET_KEY: str = "super-secret-key-change-in-prod"
    JWT_ALGORITHM: str = "HS256"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # Seed districts, soil types, varieties and agronomy templates on startup
    SEED_REFERENCE_DATA: bool = True

    # ONNX price regressor
    PRICE_MODEL_PATH: str = "models/multi_output_regressor_model.onnx"

    class Config:
        env_file = ".env"


settings = Settings()
