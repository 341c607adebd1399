"""
Pytest configuration and fixtures for testing.

Every test gets a fresh SQLite file and an empty backups directory. The
environment is pointed at a temp dir before the app is imported so the
engine and backup manager pick those paths up.
"""
import os
import shutil
import tempfile
from pathlib import Path

import httpx
import pytest

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="prompto-tests-"))
os.environ["DATABASE_PATH"] = str(_TEST_ROOT / "prompto.db")
os.environ["BACKUP_DIR"] = str(_TEST_ROOT / "backups")

from prompto.database import async_session, engine  # noqa: E402
from prompto.main import app  # noqa: E402
from prompto.models import Base  # noqa: E402
from prompto.services.backup_manager import backup_manager  # noqa: E402


@pytest.fixture
async def fresh_database():
    """Recreate all tables and empty the backups directory."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    shutil.rmtree(backup_manager.backups_dir, ignore_errors=True)
    backup_manager.ensure_dir()

    yield

    # Pooled aiosqlite connections are tied to this test's event loop
    await engine.dispose()


@pytest.fixture
async def client(fresh_database):
    """Async HTTP client talking to the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def db(fresh_database):
    """A bare AsyncSession for service-level tests."""
    async with async_session() as session:
        yield session


@pytest.fixture
def backups_dir() -> Path:
    return backup_manager.backups_dir


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)
