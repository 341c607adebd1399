"""Seed default settings on startup.

Idempotent: only inserts keys that are missing, never overwrites a value
the user already changed.
"""
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.models.setting import Setting

logger = logging.getLogger(__name__)

CATEGORIES_VISIBLE_KEY = "categories_visible"

DEFAULT_SETTINGS = {
    CATEGORIES_VISIBLE_KEY: "true",
}


async def seed_default_settings(db: AsyncSession) -> int:
    """Insert missing default settings. Returns how many rows were added."""
    result = await db.execute(
        select(Setting.key).where(Setting.key.in_(DEFAULT_SETTINGS.keys()))
    )
    existing = set(result.scalars().all())

    added = 0
    for key, value in DEFAULT_SETTINGS.items():
        if key in existing:
            continue
        db.add(Setting(key=key, value=value))
        added += 1

    if added:
        await db.commit()
        logger.info(f"Seeded {added} default setting(s)")
    return added
