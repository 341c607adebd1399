"""Prompts API routes."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.database import get_db
from prompto.models.category import Category
from prompto.models.project import Project
from prompto.models.prompt import Prompt
from prompto.schemas.common import DeleteResponse
from prompto.schemas.prompt import (
    PromptCreate, PromptUpdate, PromptReorder, PromptMove, PromptArchive, PromptResponse,
)
from prompto.services.ordering import (
    apply_order, list_partition, move_prompt, prepend_prompt, prompt_ordering,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prompts", tags=["prompts"])

# category_id filter values that are not ids
ALL_CATEGORIES = "all"
NO_CATEGORY = "none"


async def _get_prompt(db: AsyncSession, prompt_id: str) -> Prompt:
    prompt = await db.get(Prompt, prompt_id)
    if not prompt:
        raise HTTPException(status_code=404, detail="Prompt not found")
    return prompt


async def _require_project(db: AsyncSession, project_id: str, detail: str = "Project not found") -> Project:
    project = await db.get(Project, project_id) if project_id else None
    if not project:
        raise HTTPException(status_code=404, detail=detail)
    return project


async def _require_category(db: AsyncSession, category_id: str) -> Category:
    category = await db.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.get("", response_model=list[PromptResponse])
async def list_prompts(
    archived: bool = Query(False),
    category_id: Optional[str] = Query(None, description="Category id, 'all' or 'none'"),
    project_id: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List active (default) or archived prompts across projects.

    Active prompts come back grouped by project in position order; archived
    prompts come back most recently archived first.
    """
    query = select(Prompt).where(Prompt.archived.is_(archived))
    if category_id == NO_CATEGORY:
        query = query.where(Prompt.category_id.is_(None))
    elif category_id and category_id != ALL_CATEGORIES:
        query = query.where(Prompt.category_id == category_id)
    if project_id:
        query = query.where(Prompt.project_id == project_id)

    if archived:
        query = query.order_by(*prompt_ordering(True))
    else:
        query = query.order_by(Prompt.project_id, *prompt_ordering(False))

    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalars().all()


@router.get("/project/{project_id}", response_model=list[PromptResponse])
async def list_project_prompts(
    project_id: str,
    archived: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    """Prompts of one project, in display order."""
    await _require_project(db, project_id)
    return await list_partition(db, project_id, archived)


# Registered before /{prompt_id} routes so "reorder" is never read as an id
@router.put("/reorder", response_model=list[PromptResponse])
async def reorder_prompts(
    body: PromptReorder,
    db: AsyncSession = Depends(get_db),
):
    """Reorder the active prompts of one project.

    Ids that are archived or belong to another project are ignored.
    """
    await _require_project(db, body.project_id)
    await apply_order(
        db, Prompt, body.prompt_ids,
        Prompt.project_id == body.project_id,
        Prompt.archived.is_(False),
    )
    await db.commit()
    return await list_partition(db, body.project_id)


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(
    prompt_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a single prompt by ID."""
    return await _get_prompt(db, prompt_id)


@router.post("", response_model=PromptResponse, status_code=201)
async def create_prompt(
    body: PromptCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a prompt at the top of its project (newest first)."""
    if not body.project_id:
        raise HTTPException(status_code=400, detail="project_id is required")
    content = body.content.strip()
    if not content:
        raise HTTPException(status_code=400, detail="content is required")

    await _require_project(db, body.project_id)
    if body.category_id:
        await _require_category(db, body.category_id)

    prompt = Prompt(
        project_id=body.project_id,
        category_id=body.category_id or None,
        content=content,
    )
    await prepend_prompt(db, prompt)
    await db.commit()
    await db.refresh(prompt)
    return prompt


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: str,
    body: PromptUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update content and/or category. An explicit null category clears it."""
    prompt = await _get_prompt(db, prompt_id)
    update_data = body.model_dump(exclude_unset=True)

    if "content" in update_data:
        content = (body.content or "").strip()
        if not content:
            raise HTTPException(status_code=400, detail="content cannot be empty")
        prompt.content = content

    if "category_id" in update_data:
        if body.category_id:
            await _require_category(db, body.category_id)
        prompt.category_id = body.category_id or None

    await db.commit()
    await db.refresh(prompt)
    return prompt


@router.put("/{prompt_id}/move", response_model=PromptResponse)
async def move_prompt_route(
    prompt_id: str,
    body: PromptMove,
    db: AsyncSession = Depends(get_db),
):
    """Move a prompt to another project, at `position` or at the end."""
    prompt = await _get_prompt(db, prompt_id)
    await _require_project(db, body.target_project_id, detail="Target project not found")

    await move_prompt(db, prompt, body.target_project_id, body.position)
    await db.commit()
    await db.refresh(prompt)
    return prompt


@router.put("/{prompt_id}/archive", response_model=PromptResponse)
async def archive_prompt(
    prompt_id: str,
    body: Optional[PromptArchive] = None,
    db: AsyncSession = Depends(get_db),
):
    """Set the archived flag, or toggle it when no value is given.

    Position is left alone; archiving only changes which list the prompt
    sorts into.
    """
    prompt = await _get_prompt(db, prompt_id)
    requested = body.archived if body else None
    prompt.archived = (not prompt.archived) if requested is None else requested

    await db.commit()
    await db.refresh(prompt)
    return prompt


@router.delete("/{prompt_id}", response_model=DeleteResponse)
async def delete_prompt(
    prompt_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a prompt."""
    prompt = await _get_prompt(db, prompt_id)
    await db.delete(prompt)
    await db.commit()
    return {"deleted": True, "id": prompt_id}
