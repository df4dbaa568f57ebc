"""
Configuración de fixtures para pytest.

La base de datos de prueba es un archivo SQLite (aiosqlite) por test, creado
con el mismo build_engine que usa la app (SAVEPOINT habilitados).
"""
import os

# Antes de importar la app: el engine global no debe apuntar a PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import portlink.infrastructure.database  # noqa: F401  (registra los modelos)
from portlink.core.config import Settings
from portlink.infrastructure.database.session import Base, build_engine, build_session_factory


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Engine sobre un archivo SQLite nuevo con todas las tablas creadas."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Sesión de base de datos para tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def test_settings() -> Settings:
    """Settings aislados del .env local: sin secretos, sin mock, sin reintentos."""
    return Settings(
        _env_file=None,
        CRON_SECRET="",
        MAWANI_WEBHOOK_SECRET="",
        VESSEL_API_MOCK_MODE=False,
        VESSEL_API_MAX_RETRIES=0,
        ORG_SYNC_CONCURRENCY=1,
        ORG_SYNC_TIMEOUT_S=0.0,
    )
