# backend/plantation/main.py

# FORCE logger module import so handlers attach

import plantation.core.logger
from plantation.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from plantation.core.config import settings
from plantation.core.database import AsyncSessionLocal, engine, Base
from plantation.core.seed_reference import seed_reference_data

from plantation.core.request_middleware import RequestLoggingMiddleware
from plantation.core.error_middleware import ExceptionLoggingMiddleware

# register every table on Base.metadata
import plantation.models  # noqa: F401

# ---------------------------------------------------
# Create FastAPI instance FIRST
# ---------------------------------------------------
app = FastAPI(title="Pepper Plantation API", version="1.0")


# ---------------------------------------------------
# CORS MUST be added immediately after app creation
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------
# Logging middlewares
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)


# ---------------------------------------------------
# IMPORT ROUTERS AFTER APP IS CREATED
# ---------------------------------------------------
from plantation.api.farmer import plantation as farmer_plantation
from plantation.api.farmer import seasons as farmer_seasons
from plantation.api.farmer import prediction as farmer_prediction


# ---------------------------------------------------
# Include Routers
# ---------------------------------------------------
app.include_router(farmer_plantation.router, prefix="/api")
app.include_router(farmer_seasons.router, prefix="/api")
app.include_router(farmer_prediction.router, prefix="/api")


# ---------------------------------------------------
# Startup: create tables + seed reference data
# ---------------------------------------------------
@app.on_event("startup")
async def startup_event():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.SEED_REFERENCE_DATA:
        async with AsyncSessionLocal() as db:
            await seed_reference_data(db)

    logger.info("Server started with JSON logging")


# ---------------------------------------------------
# Health endpoint
# ---------------------------------------------------
@app.get("/health")
async def health_check():
    return {"status": "ok"}
