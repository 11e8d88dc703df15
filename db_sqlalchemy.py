import logging
import os
import ssl

from sqlalchemy import MetaData, Table, Column, Integer, Text, DateTime, func
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

import config

logger = logging.getLogger(__name__)

metadata = MetaData()

# sqlite_autoincrement keeps ids from being handed out again after a delete
pastes = Table(
    "pastes",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", Text, nullable=True),
    Column("body", Text, nullable=False),
    Column("creation_date", DateTime, server_default=func.now(), nullable=False),
    sqlite_autoincrement=True,
)

_ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgresql": "postgresql+asyncpg",
}


def async_url(url: str) -> str:
    """Swap a bare dialect for its asyncio driver (sqlite -> aiosqlite, postgresql -> asyncpg)."""
    parsed = make_url(url)
    driver = _ASYNC_DRIVERS.get(parsed.drivername)
    if driver:
        parsed = parsed.set(drivername=driver)
    return parsed.render_as_string(hide_password=False)


def _connect_args(url: str) -> dict:
    """Connection options for the database link.

    Postgres gets TLS unless LOCAL is set. Certificates are only checked when
    DATABASE_SSL_VERIFY=1, hosted databases usually present self-signed ones.
    """
    if make_url(url).get_backend_name() != "postgresql":
        return {}
    if config.LOCAL:
        return {"ssl": False}
    ctx = ssl.create_default_context()
    if not config.DATABASE_SSL_VERIFY:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return {"ssl": ctx}


def build_engine(url: str = None) -> AsyncEngine:
    """Create the async engine for ``url`` (defaults to DATABASE_URL). Nothing is opened yet."""
    url = async_url(config.normalize_db_url(url or config.DATABASE_URL))
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        # ensure folder exists before any DB IO
        os.makedirs(os.path.dirname(os.path.abspath(parsed.database)), exist_ok=True)
    logger.debug("Using database driver %s", parsed.drivername)
    return create_async_engine(url, echo=False, connect_args=_connect_args(url))


async def init_db(engine: AsyncEngine):
    """Create tables if they are missing. Call this at application startup."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
