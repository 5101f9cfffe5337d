"""Integration test configuration with a real SQLite database (aiosqlite)."""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import report_tracker.models  # noqa: F401
from report_tracker.database import Base
from report_tracker.repositories.report_repository import ReportRepository
from report_tracker.repositories.user_repository import UserRepository
from report_tracker.services.auth_service import AuthService
from report_tracker.services.report_service import ReportService


def pytest_collection_modifyitems(items):
    """Apply integration marker to all tests in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed engine so that separate sessions use separate connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reports.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def alice(session_factory):
    """Committed user who owns reports in the lifecycle tests."""
    async with session_factory() as session:
        user = await UserRepository(session).create(
            email="alice@example.com", password_hash=AuthService.hash_password("alice-pass")
        )
        await session.commit()
        return user


@pytest.fixture
async def bob(session_factory):
    """Committed user who owns nothing."""
    async with session_factory() as session:
        user = await UserRepository(session).create(
            email="bob@example.com", password_hash=AuthService.hash_password("bob-pass")
        )
        await session.commit()
        return user


@pytest.fixture
def make_service(artifact_store):
    """Build a ReportService bound to the given session."""

    def _make(session: AsyncSession) -> ReportService:
        return ReportService(
            session=session,
            report_repository=ReportRepository(session),
            artifact_store=artifact_store,
        )

    return _make
