"""Async SQLAlchemy engine and session factory for the SQLite store.

Usage in routes:
    from prompto.database import get_db

    @router.get("/items")
    async def list_items(db: AsyncSession = Depends(get_db)):
        result = await db.execute(select(Item))
        return result.scalars().all()
"""
from pathlib import Path

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from prompto.config import settings

settings.database_file.parent.mkdir(parents=True, exist_ok=True)

engine = create_async_engine(
    settings.database_url,
    echo=False,
)


@event.listens_for(engine.sync_engine, "connect")
def _set_sqlite_pragmas(dbapi_connection, connection_record):
    # SQLite leaves FK enforcement off per connection unless asked.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.close()


async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """FastAPI dependency that yields an async DB session."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


async def checkpoint_and_snapshot(target: Path) -> None:
    """Flush the WAL into the main file, then write a compacted copy to `target`.

    VACUUM INTO cannot run inside a transaction, so both statements go
    through an AUTOCOMMIT connection.
    """
    async with engine.connect() as conn:
        conn = await conn.execution_options(isolation_level="AUTOCOMMIT")
        await conn.execute(text("PRAGMA wal_checkpoint(TRUNCATE)"))
        await conn.execute(text("VACUUM INTO :target"), {"target": str(target)})


async def release_connections() -> None:
    """Close every pooled connection; the next checkout reopens the file."""
    await engine.dispose()
