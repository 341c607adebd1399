"""Setting request/response schemas."""
from datetime import datetime
from pydantic import BaseModel
from typing import Any


class SettingUpdate(BaseModel):
    value: Any


class SettingResponse(BaseModel):
    key: str
    value: str
    updated_at: datetime

    model_config = {"from_attributes": True}
