import logging
from typing import List, Optional

from sqlalchemy import select, insert, update, delete, text
from sqlalchemy.ext.asyncio import AsyncEngine

from db_sqlalchemy import pastes, build_engine, init_db

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class PasteStore:
    """Storage accessor for the pastes table.

    Every call runs exactly one statement and returns the matched rows as a
    list of dicts (possibly empty). Driver errors are not caught here.
    """

    def __init__(self, url: str = None, engine: AsyncEngine = None):
        self._url = url
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("PasteStore is not connected, call connect() first")
        return self._engine

    async def connect(self):
        if self._engine is None:
            self._engine = build_engine(self._url)
        try:
            await init_db(self._engine)
        except Exception:
            logger.exception("Could not connect to the database")
            raise
        logger.info("Connected to database (%s)", self._engine.url.get_backend_name())

    async def disconnect(self):
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database connection closed")

    async def _rows(self, query) -> List[dict]:
        async with self.engine.begin() as conn:
            result = await conn.execute(query)
            return [dict(r._mapping) for r in result]

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def list_all(self) -> List[dict]:
        return await self._rows(select(pastes))

    async def list_recent(self, limit: int = RECENT_LIMIT) -> List[dict]:
        # id breaks ties between rows created within the same clock tick
        query = (
            select(pastes)
            .order_by(pastes.c.creation_date.desc(), pastes.c.id.desc())
            .limit(limit)
        )
        return await self._rows(query)

    async def get_by_id(self, paste_id: int) -> List[dict]:
        return await self._rows(select(pastes).where(pastes.c.id == paste_id))

    async def insert(self, title: Optional[str], body: str) -> List[dict]:
        query = insert(pastes).values(title=title, body=body).returning(*pastes.c)
        return await self._rows(query)

    async def update(self, paste_id: int, title: Optional[str], body: str) -> List[dict]:
        query = (
            update(pastes)
            .where(pastes.c.id == paste_id)
            .values(title=title, body=body)
            .returning(*pastes.c)
        )
        return await self._rows(query)

    async def delete(self, paste_id: int) -> List[dict]:
        query = delete(pastes).where(pastes.c.id == paste_id).returning(*pastes.c)
        return await self._rows(query)
