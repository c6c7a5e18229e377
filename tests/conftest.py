# tests/conftest.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import create_app
from taskkeeper.config.settings import Settings
from taskkeeper.database import create_schema, make_engine, make_session_factory
from taskkeeper.services.memory_store import MemoryTaskStore, MemoryUserStore
from taskkeeper.services.sql_store import SqlTaskStore, SqlUserStore
from taskkeeper.services.stores import Stores


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        secret_key="test-secret",
        database_url="",
        session_cookie_secure=False,
        session_ttl_minutes=30,
        cors_origins=["http://localhost:3000"],
        log_level="WARNING",
    )


def _memory_stores() -> Stores:
    return Stores(users=MemoryUserStore(), tasks=MemoryTaskStore())


def _sql_stores() -> Stores:
    engine = make_engine("sqlite://")
    create_schema(engine)
    factory = make_session_factory(engine)
    return Stores(users=SqlUserStore(factory), tasks=SqlTaskStore(factory), close=engine.dispose)


@pytest.fixture(params=["memory", "sql"])
def stores(request) -> Stores:
    """Both storage backends; every test using this runs once per backend"""
    built = _memory_stores() if request.param == "memory" else _sql_stores()
    yield built
    built.close()


@pytest.fixture()
def app(settings: Settings, stores: Stores):
    return create_app(settings=settings, stores=stores)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def other_client(app) -> TestClient:
    """A second browser with its own cookie jar"""
    return TestClient(app)
