"""
Connection Engine (SQLAlchemy)

Purpose
-------
Centralizes database initialization for the application:
- Builds the SQLAlchemy connection URL from environment-backed settings.
- Creates the Engine (connection pool + SQL execution entry point).
- Defines shared MetaData for table and schema objects.
- Exposes a Declarative Base class for ORM models.

Notes
-----
- SQLite URLs get ``check_same_thread=False``; an in-memory SQLite database
  additionally uses a ``StaticPool`` so every session sees the same data.
- ``init_db()`` creates any missing tables; it is called once at startup.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import MetaData
from techmatch.database.config.config import settings

# --------------------------------------------------------------------
# Construct the SQLAlchemy connection URL using values from Settings.
# --------------------------------------------------------------------
connection_url = URL.create(
    drivername=settings.DB_DRIVER_NAME,   # e.g., "postgresql+psycopg2", "sqlite"
    username=settings.DB_USERNAME,
    password=settings.DB_PASSWORD,
    host=settings.DB_HOST,
    port=settings.DB_PORT,
    database=settings.DB_DATABASE_NAME,
)
"""Constructs the SQLAlchemy connection URL using values from Settings."""


def _engine_options(url: URL) -> dict:
    if not url.drivername.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


connection_engine = create_engine(connection_url, **_engine_options(connection_url))
"""Engine object: Core interface to the database.
Responsible for managing connections, executing SQL, and pooling.
"""

metadata = MetaData()
"""Metadata object: Stores schema-level information about tables, constraints, indexes, etc."""

declarativeBase = declarative_base(metadata=metadata)
"""Declarative Base: Root class for ORM models."""


def init_db() -> None:
    """Create all tables registered on `metadata` that do not exist yet."""
    # entities must be imported so their tables are registered
    import techmatch.database.entities  # noqa: F401

    metadata.create_all(connection_engine)
