"""Database backup/restore response schemas."""
from datetime import datetime
from pydantic import BaseModel
from prompto.schemas.base import CamelORMModel


class BackupCreated(BaseModel):
    success: bool = True
    filename: str
    size: int
    message: str = "Backup created successfully"


class BackupInfo(CamelORMModel):
    name: str
    size: int
    created_at: datetime


class BackupList(BaseModel):
    backups: list[BackupInfo]


class RestoreResult(CamelORMModel):
    success: bool = True
    message: str
    pre_restore_backup: str
    restart_required: bool = True


class MessageResponse(BaseModel):
    success: bool = True
    message: str
