"""
Shared fixtures: a throwaway SQLite database per test and an app bound to it.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config.settings import Settings
from core.context import AppContext
from database.helpers import init_schema
from main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
    )

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

@pytest_asyncio.fixture
async def ctx(settings):
    context = AppContext.from_settings(settings)
    await init_schema(context.engine)
    yield context
    await context.close()
