"""
Shared fixtures: every test gets its own SQLite file so rows never leak
between tests.
"""
import asyncio
import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

# Must be set before core.db builds its module-level engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from core.db import build_engine, init_models, get_db
from apps.models.blueprint_config import BlueprintConfiguration
from apps.models.blueprints import Blueprint


def _database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'blueprints_test.db'}"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = build_engine(_database_url(tmp_path), echo=False, poolclass=NullPool)
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def client(tmp_path):
    """TestClient wired to an isolated database.

    The client is not entered as a context manager, so the app's lifespan
    (logging setup, tables on the default engine) does not run.
    """
    from fastapi.testclient import TestClient
    from apps.main import app

    engine = build_engine(_database_url(tmp_path), echo=False, poolclass=NullPool)
    asyncio.run(init_models(engine))
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture
def make_blueprint():
    """Factory for transient blueprints with consistent configuration rows."""
    def _make(name="cluster1", configs=None):
        blueprint = Blueprint(blueprint_name=name, stack_name="HDP", stack_version="2.1", configurations=[])
        for config_type, data in (configs or {}).items():
            record = BlueprintConfiguration(blueprint_name=name, type=config_type, config_data=data)
            record.blueprint = blueprint
            blueprint.configurations.append(record)
        return blueprint
    return _make
