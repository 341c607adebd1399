"""Categories API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.database import get_db
from prompto.models.category import Category, DEFAULT_CATEGORY_COLOR
from prompto.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryReorder, CategoryResponse, IconCatalogResponse,
)
from prompto.schemas.common import DeleteResponse
from prompto.services.icons import COMMON_ICONS, FALLBACK_ICON, resolve_icon
from prompto.services.ordering import apply_order, next_position

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["categories"])


async def _all_categories(db: AsyncSession) -> list[Category]:
    result = await db.execute(
        select(Category)
        .order_by(Category.position, Category.created_at)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


@router.get("", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List all categories ordered by position."""
    return await _all_categories(db)


@router.get("/icons", response_model=IconCatalogResponse)
async def list_icons():
    """Icon names a category may use, plus the fallback for unknown names."""
    return {"icons": list(COMMON_ICONS), "fallback": FALLBACK_ICON}


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    body: CategoryCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a category at the end of the list."""
    name = body.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Category name is required")

    category = Category(
        name=name,
        color=body.color or DEFAULT_CATEGORY_COLOR,
        icon=resolve_icon(body.icon),
        position=await next_position(db, Category),
    )
    db.add(category)
    await db.commit()
    await db.refresh(category)
    return category


@router.put("/reorder", response_model=list[CategoryResponse])
async def reorder_categories(
    body: CategoryReorder,
    db: AsyncSession = Depends(get_db),
):
    """Assign position = index for the given id order, in one transaction."""
    await apply_order(db, Category, body.category_ids)
    await db.commit()
    return await _all_categories(db)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update a category. Only provided fields are updated."""
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    if body.name is not None:
        if not body.name.strip():
            raise HTTPException(status_code=400, detail="Category name cannot be empty")
        category.name = body.name.strip()
    if body.color:
        category.color = body.color
    if body.icon is not None:
        category.icon = resolve_icon(body.icon)

    await db.commit()
    await db.refresh(category)
    return category


@router.delete("/{category_id}", response_model=DeleteResponse)
async def delete_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a category. Prompts keep existing with category_id = NULL."""
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")

    await db.delete(category)
    await db.commit()
    logger.info(f"Category deleted: {category_id}")
    return {"deleted": True, "id": category_id}
