"""Prompt request/response schemas."""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from prompto.schemas.base import CamelModel


class PromptCreate(BaseModel):
    project_id: str = ""
    content: str = ""
    category_id: Optional[str] = None


class PromptUpdate(BaseModel):
    content: Optional[str] = None
    category_id: Optional[str] = None


class PromptReorder(CamelModel):
    project_id: str
    prompt_ids: list[str]


class PromptMove(CamelModel):
    target_project_id: str
    position: Optional[int] = Field(None, ge=0)


class PromptArchive(BaseModel):
    archived: Optional[bool] = None


class PromptResponse(BaseModel):
    id: str
    project_id: str
    category_id: Optional[str] = None
    content: str
    position: int
    archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
