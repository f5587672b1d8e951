# backend/tests/conftest.py

import os
import tempfile
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path

# settings are read at import time: point them at a scratch location first
_TMP = Path(tempfile.mkdtemp(prefix="plantation-tests-"))
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP / 'import.db'}")
os.environ.setdefault("LOG_DIR", str(_TMP / "logs"))
os.environ.setdefault("SEED_REFERENCE_DATA", "false")

import jwt
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

import plantation.models  # noqa: F401
from plantation.core.config import settings
from plantation.core.database import Base, get_db
from plantation.core.seed_reference import seed_reference_data
from plantation.crud.farmer import farms as crud_farms
from plantation.main import app
from plantation.models.farmer.plantation import District, Farm


# ------------------------------------------------
# DATABASE
# ------------------------------------------------
@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'plantation.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
    async with session_factory() as session:
        await seed_reference_data(session)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def district_ids(db):
    rows = await db.scalars(select(District))
    return {d.name: d.id for d in rows.all()}


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


@pytest.fixture
async def farm(db, user_id, district_ids):
    return await crud_farms.create_farm(db, Farm(
        user_id=user_id,
        farm_name="Test Farm",
        district_id=district_ids["Kandy"],
        chosen_variety_id="PANNIYUR_1",
        farm_start_date=datetime(2025, 1, 10),
        area_hectares=1.5,
        total_vines=400,
    ))


# ------------------------------------------------
# AUTH
# ------------------------------------------------
def make_token(user_id: str, claim: str = "sub", expires_in: timedelta = timedelta(hours=1)) -> str:
    payload = {claim: user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


# ------------------------------------------------
# HTTP CLIENT
# ------------------------------------------------
@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def headers(user_id):
    return auth_headers(user_id)


@pytest.fixture
def token_for():
    return make_token
