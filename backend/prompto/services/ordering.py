"""Position bookkeeping for projects, categories and prompts.

Three independent scopes carry an integer `position` column:
  - all projects
  - all categories
  - prompts sharing a (project_id, archived) partition

Callers own the transaction. Nothing in here commits; the route commits once
after the whole mutation so a failure part-way leaves the scope untouched.

Prompt creation prepends (newest first) by shifting the whole active
partition, which is O(n) per insert. Fine for single-user boards.
"""
import logging
from typing import Any, Sequence

from sqlalchemy import select, update, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from prompto.models.prompt import Prompt

logger = logging.getLogger(__name__)


async def next_position(db: AsyncSession, model, *scope: Any) -> int:
    """Return max(position) + 1 within the scope, or 0 when it is empty."""
    result = await db.execute(select(func.max(model.position)).where(*scope))
    max_pos = result.scalar()
    return 0 if max_pos is None else max_pos + 1


async def apply_order(db: AsyncSession, model, ids: Sequence[str], *scope: Any) -> int:
    """Set position = index for every id in `ids` that belongs to the scope.

    Ids outside the scope (or unknown) are skipped. Members of the scope that
    the caller left out keep their current position. Returns the number of
    rows touched.
    """
    touched = 0
    for index, row_id in enumerate(ids):
        result = await db.execute(
            update(model)
            .where(model.id == row_id, *scope)
            .values(position=index)
        )
        touched += result.rowcount or 0
    if touched != len(ids):
        logger.info(
            f"Reorder of {model.__tablename__} ignored {len(ids) - touched} id(s) outside the scope"
        )
    return touched


async def shift_active_prompts(db: AsyncSession, project_id: str) -> None:
    """Push every active prompt of a project down one slot."""
    await db.execute(
        update(Prompt)
        .where(
            Prompt.project_id == project_id,
            Prompt.archived.is_(False),
        )
        .values(position=Prompt.position + 1)
    )


async def prepend_prompt(db: AsyncSession, prompt: Prompt) -> Prompt:
    """Insert `prompt` at the top of its project's active list."""
    await shift_active_prompts(db, prompt.project_id)
    prompt.position = 0
    prompt.archived = False
    db.add(prompt)
    await db.flush()
    return prompt


async def move_prompt(
    db: AsyncSession,
    prompt: Prompt,
    target_project_id: str,
    position: int | None = None,
) -> Prompt:
    """Re-home a prompt into another project.

    With no position it lands after the last member of the target partition.
    With a position the target members at or after it move down one slot.
    The source partition is left with a gap; the next reorder compacts it.
    """
    partition = (
        Prompt.project_id == target_project_id,
        Prompt.archived.is_(prompt.archived),
        Prompt.id != prompt.id,
    )
    if position is None:
        position = await next_position(db, Prompt, *partition)
    else:
        # Archived siblings sort on updated_at, so a shift must not bump it
        await db.execute(
            update(Prompt)
            .where(*partition, Prompt.position >= position)
            .values(position=Prompt.position + 1, updated_at=Prompt.updated_at)
        )

    prompt.project_id = target_project_id
    prompt.position = position
    await db.flush()
    return prompt


def prompt_ordering(archived: bool) -> tuple:
    """ORDER BY clause for one partition.

    Active prompts follow their position; archived prompts show the most
    recently archived first.
    """
    if archived:
        return (desc(Prompt.updated_at), Prompt.position)
    return (Prompt.position, desc(Prompt.created_at))


async def list_partition(db: AsyncSession, project_id: str, archived: bool = False) -> list[Prompt]:
    result = await db.execute(
        select(Prompt)
        .where(Prompt.project_id == project_id, Prompt.archived.is_(archived))
        .order_by(*prompt_ordering(archived))
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())
