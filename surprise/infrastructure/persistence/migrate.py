"""Alembic migrations for the surprises schema.

Alembic is synchronous, so `surprise serve` migrates before uvicorn starts
the event loop.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)

# Shipped inside the package so installed copies can migrate too
MIGRATIONS_DIR = Path(__file__).resolve().parents[2] / "migrations"

# Async driver -> sync driver Alembic can use
SYNC_DRIVERS = {
    "sqlite+aiosqlite": "sqlite",
    "postgresql+asyncpg": "postgresql",
}


def to_sync_url(database_url: str) -> str:
    """Swap the async driver for its sync counterpart, expanding ~ in SQLite paths."""
    url = make_url(database_url)
    url = url.set(drivername=SYNC_DRIVERS.get(url.drivername, url.drivername))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        url = url.set(database=str(Path(url.database).expanduser()))
    return url.render_as_string(hide_password=False)


def get_alembic_config(database_url: str) -> AlembicConfig:
    config = AlembicConfig()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # ConfigParser interpolation would choke on a literal % in passwords
    config.set_main_option("sqlalchemy.url", to_sync_url(database_url).replace("%", "%%"))
    return config


def run_migrations(database_url: str) -> None:
    """Upgrade the database to the latest revision."""
    url = make_url(to_sync_url(database_url))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    command.upgrade(get_alembic_config(database_url), "head")
    logger.info("Database migrated to head (%s)", url.get_backend_name())
