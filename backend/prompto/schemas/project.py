"""Project request/response schemas."""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from prompto.schemas.base import CamelModel


class ProjectCreate(BaseModel):
    name: str = ""
    color: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None


class ProjectReorder(CamelModel):
    project_ids: list[str]


class ProjectResponse(BaseModel):
    id: str
    name: str
    color: str
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
