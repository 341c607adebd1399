"""Settings API routes."""
import json
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.database import get_db
from prompto.models.base import utcnow
from prompto.models.setting import Setting
from prompto.schemas.common import DeleteResponse
from prompto.schemas.setting import SettingUpdate, SettingResponse

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _stringify(value) -> str:
    """Settings are stored as text; booleans as 'true'/'false'."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value)


@router.get("", response_model=list[SettingResponse])
async def list_settings(db: AsyncSession = Depends(get_db)):
    """List every setting."""
    result = await db.execute(select(Setting).order_by(Setting.key))
    return result.scalars().all()


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(
    key: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a single setting by key."""
    setting = await db.get(Setting, key)
    if not setting:
        raise HTTPException(status_code=404, detail="Setting not found")
    return setting


@router.put("/{key}", response_model=SettingResponse)
async def upsert_setting(
    key: str,
    body: SettingUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Upsert a setting (insert or update if exists)."""
    if body.value is None:
        raise HTTPException(status_code=400, detail="value is required")

    value = _stringify(body.value)
    stmt = sqlite_insert(Setting).values(
        key=key,
        value=value,
        updated_at=utcnow(),
    ).on_conflict_do_update(
        index_elements=[Setting.key],
        set_={"value": value, "updated_at": utcnow()},
    )
    await db.execute(stmt)
    await db.commit()

    result = await db.execute(
        select(Setting)
        .where(Setting.key == key)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


@router.delete("/{key}", response_model=DeleteResponse)
async def delete_setting(
    key: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a setting."""
    setting = await db.get(Setting, key)
    if not setting:
        raise HTTPException(status_code=404, detail="Setting not found")

    await db.delete(setting)
    await db.commit()
    return {"deleted": True, "id": key}
