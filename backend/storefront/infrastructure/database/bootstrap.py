"""Startup helper that provisions the catalog database on a fresh PostgreSQL server."""

import logging

import asyncpg
from sqlalchemy.engine import make_url

logger = logging.getLogger(__name__)


def maintenance_target(database_url: str) -> tuple[str, str] | None:
    """Return ``(asyncpg_dsn, database_name)`` for the server's ``postgres`` database.

    ``None`` for non-PostgreSQL URLs or URLs without a database name.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "postgresql" or not url.database:
        return None
    admin = url.set(drivername="postgresql", database="postgres")
    return admin.render_as_string(hide_password=False), url.database


async def ensure_catalog_database(database_url: str) -> None:
    """Create the catalog database when the server does not have it yet."""
    target = maintenance_target(database_url)
    if target is None:
        return
    dsn, name = target

    try:
        conn = await asyncpg.connect(dsn)
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        logger.warning("Could not reach PostgreSQL to check database '%s': %s", name, exc)
        return

    try:
        if await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", name):
            return
        # Not allowed inside a transaction block
        await conn.execute(f'CREATE DATABASE "{name}"')
        logger.info("Created catalog database '%s'", name)
    except asyncpg.PostgresError as exc:
        logger.warning("Could not create catalog database '%s': %s", name, exc)
    finally:
        await conn.close()
