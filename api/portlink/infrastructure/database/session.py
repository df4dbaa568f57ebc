"""
Engine, sesiones y dependencias de base de datos.

PostgreSQL (asyncpg) en produccion; SQLite (aiosqlite) en desarrollo y tests.
El sync de buques escribe cada fila en un SAVEPOINT, asi que en SQLite el
BEGIN lo emite SQLAlchemy y no el driver.
"""
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from portlink.core.config import Settings, settings

Base = declarative_base()


def _enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, config: Settings = settings) -> AsyncEngine:
    """
    Crea el engine async para la URL dada.

    - PostgreSQL: pool acotado por DB_POOL_SIZE / DB_MAX_OVERFLOW con pre-ping.
    - SQLite: sin pool y con SAVEPOINT habilitados.
    """
    options = {"echo": config.DEBUG, "future": True}
    if url.startswith("postgresql"):
        options.update(
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
        )

    async_engine = create_async_engine(url, **options)
    if url.startswith("sqlite"):
        _enable_sqlite_savepoints(async_engine)
    return async_engine


def build_session_factory(async_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.effective_database_url)

# Una sesion por request; el sync de buques abre una por organizacion
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia FastAPI: sesion del request.
    Confirma al terminar el handler y revierte si algo fallo.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_session_factory() -> async_sessionmaker:
    """Dependencia que entrega la session factory (sobrescribible en tests)."""
    return AsyncSessionLocal


async def init_db() -> None:
    """Crea las tablas que falten (desarrollo; en produccion se usa Alembic)."""
    from portlink.infrastructure.database import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
