"""Root conftest — shared test configuration and database fixture.

Design Decisions:
    - File-backed SQLite under tmp_path: separate connections per session, like
      a server database, so background subscriptions and requests do not share
      one connection
"""

import os

import pytest

# Tests never touch a real database or production secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-use-0123456789")

from applixy.infrastructure.database import DatabaseSessionManager  # noqa: E402


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'applixy.db'}")
    await manager.create_tables()
    yield manager
    await manager.dispose()
