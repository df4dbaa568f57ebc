"""
Entorno de Alembic para PortLink.

La URL sale de Settings (misma fuente que la app). Las migraciones corren
sincronas: asyncpg se cambia por psycopg y aiosqlite por el driver sqlite
estandar.
"""
import sys
from logging.config import fileConfig
from pathlib import Path

from sqlalchemy import create_engine, pool

from alembic import context

API_DIR = Path(__file__).resolve().parent.parent
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

from portlink.core.config import settings  # noqa: E402
from portlink.infrastructure.database.session import Base  # noqa: E402
import portlink.infrastructure.database  # noqa: F401,E402

_SYNC_DRIVERS = {"+asyncpg": "+psycopg", "+aiosqlite": ""}

config = context.config
if config.config_file_name and Path(config.config_file_name).exists():
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    for async_driver, sync_driver in _SYNC_DRIVERS.items():
        url = url.replace(async_driver, sync_driver)
    return url


def _configure(**kwargs) -> None:
    url = kwargs.get("url", "")
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # ALTER en SQLite requiere modo batch
        render_as_batch=str(url).startswith("sqlite"),
        **kwargs,
    )


def run_offline(url: str) -> None:
    """Emite el SQL de las migraciones sin conectarse."""
    _configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_online(url: str) -> None:
    connectable = create_engine(url, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()
    connectable.dispose()


database_url = sync_database_url(settings.effective_database_url)
config.set_main_option("sqlalchemy.url", database_url)

if context.is_offline_mode():
    run_offline(database_url)
else:
    run_online(database_url)
