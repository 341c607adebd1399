"""Category request/response schemas."""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from prompto.schemas.base import CamelModel


class CategoryCreate(BaseModel):
    name: str = ""
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None


class CategoryReorder(CamelModel):
    category_ids: list[str]


class CategoryResponse(BaseModel):
    id: str
    name: str
    color: str
    icon: str
    position: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class IconCatalogResponse(BaseModel):
    icons: list[str]
    fallback: str
