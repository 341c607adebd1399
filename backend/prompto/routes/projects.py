"""Projects API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.database import get_db
from prompto.models.project import Project, DEFAULT_PROJECT_COLOR
from prompto.schemas.common import DeleteResponse
from prompto.schemas.project import ProjectCreate, ProjectUpdate, ProjectReorder, ProjectResponse
from prompto.services.ordering import apply_order, next_position

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


async def _all_projects(db: AsyncSession) -> list[Project]:
    result = await db.execute(
        select(Project)
        .order_by(Project.position, Project.created_at)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


@router.get("", response_model=list[ProjectResponse])
async def list_projects(db: AsyncSession = Depends(get_db)):
    """List all projects ordered by position."""
    return await _all_projects(db)


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a project at the end of the board."""
    name = body.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Project name is required")

    project = Project(
        name=name,
        color=body.color or DEFAULT_PROJECT_COLOR,
        position=await next_position(db, Project),
    )
    db.add(project)
    await db.commit()
    await db.refresh(project)
    return project


# Registered before /{project_id} so "reorder" is never read as an id
@router.put("/reorder", response_model=list[ProjectResponse])
async def reorder_projects(
    body: ProjectReorder,
    db: AsyncSession = Depends(get_db),
):
    """Assign position = index for the given id order, in one transaction."""
    await apply_order(db, Project, body.project_ids)
    await db.commit()
    return await _all_projects(db)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update name and/or color. Only provided fields are updated."""
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    if body.name is not None:
        if not body.name.strip():
            raise HTTPException(status_code=400, detail="Project name cannot be empty")
        project.name = body.name.strip()
    if body.color:
        project.color = body.color

    await db.commit()
    await db.refresh(project)
    return project


@router.delete("/{project_id}", response_model=DeleteResponse)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Delete a project. Its prompts go with it (ON DELETE CASCADE)."""
    project = await db.get(Project, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    await db.delete(project)
    await db.commit()
    logger.info(f"Project deleted: {project_id}")
    return {"deleted": True, "id": project_id}
