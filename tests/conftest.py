"""
Shared fixtures: an app wired to an in-memory SQLite database.
"""

from typing import Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config.settings import Settings
from database.session import build_engine, build_session_factory, init_models
from main import create_app

MEMORY_DB = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url=MEMORY_DB,
        jwt_secret="test-secret",
        jwt_expiry_seconds=3600,
        bcrypt_rounds=4,
        api_prefix="/api",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def session(settings):
    engine = build_engine(settings)
    await init_models(engine)
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db
    await engine.dispose()


def register(client: TestClient, username: str = "testuser", password: str = "password123") -> Dict:
    res = client.post("/api/auth/register", json={"username": username, "password": password})
    assert res.status_code == 201, res.text
    return res.json()


def auth_header(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
