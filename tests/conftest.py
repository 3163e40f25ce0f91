"""
Shared pytest fixtures.

Every test gets a fresh SQLite database file, so sessions opened in
parallel (the concurrent booking tests) see each other's commits.
"""
import os
from datetime import date, timedelta
from typing import AsyncGenerator, Dict, List, Optional

# Ensure test environment before the app reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.main import app
from app.database.connection import Base, get_db
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.system_services.slot_locks import SlotLockRegistry
from app.users.auth_cache import AuthCache
from app.users.security import issue_access_token
from app.users.user_models.user_model import User

FUTURE_DAY = (date.today() + timedelta(days=30)).isoformat()
OTHER_FUTURE_DAY = (date.today() + timedelta(days=31)).isoformat()
YESTERDAY = (date.today() - timedelta(days=1)).isoformat()


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def async_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'telehealth.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(async_engine) -> async_sessionmaker:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        yield session


@pytest.fixture
def slot_locks() -> SlotLockRegistry:
    return SlotLockRegistry()


# ============================================================================
# RECORD FACTORIES
# ============================================================================


@pytest.fixture
def make_patient(db_session):
    async def _make(email: str = "pat@example.com", name: str = "Pat Patient") -> User:
        user = User(name=name, email=email, hashed_password="not-a-hash", role="patient")
        db_session.add(user)
        await db_session.flush()
        db_session.add(Patient(user_id=user.id))
        await db_session.commit()
        return user

    return _make


@pytest.fixture
def make_doctor(db_session):
    async def _make(
        email: str = "doc@example.com",
        name: str = "Dr. Dana",
        slots: Optional[List[Dict]] = None,
        is_active: bool = True,
    ) -> Doctor:
        user = User(name=name, email=email, hashed_password="not-a-hash", role="doctor")
        db_session.add(user)
        await db_session.flush()
        doctor = Doctor(
            user_id=user.id,
            specialization="General Physician",
            experience=5,
            address="1 Clinic Way",
            is_active=is_active,
            available_slots=slots if slots is not None else [{"date": FUTURE_DAY, "slots": ["10:00 AM"]}],
        )
        db_session.add(doctor)
        await db_session.commit()
        return doctor

    return _make


@pytest.fixture
def make_admin(db_session):
    async def _make(email: str = "admin@example.com") -> User:
        user = User(name="Admin", email=email, hashed_password="not-a-hash", role="admin")
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


def auth_headers(user_id: int, role: str, email: str = "user@example.com") -> Dict[str, str]:
    token = issue_access_token(user_id, email, role)
    return {"Authorization": f"Bearer {token}"}


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def api_client(async_session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with async_session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.state.auth_cache = AuthCache(ttl_seconds=300)
    app.state.slot_locks = SlotLockRegistry()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
