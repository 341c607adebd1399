"""Database backup/restore API routes.

Every failure is reported with an explicit status and message; see
services/backup_manager.py for the restore ordering guarantees.
"""
import logging
from fastapi import APIRouter, HTTPException, UploadFile, File as FastAPIFile
from fastapi.responses import FileResponse, StreamingResponse
from starlette.background import BackgroundTask

from prompto.schemas.database import (
    BackupCreated, BackupInfo, BackupList, MessageResponse, RestoreResult,
)
from prompto.services.backup_manager import BackupError, backup_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/database", tags=["database"])


def _http_error(e: BackupError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/backup", response_model=BackupCreated)
async def create_backup():
    """Snapshot the live database into the backups directory."""
    try:
        backup = await backup_manager.create_backup()
    except BackupError as e:
        raise _http_error(e) from e
    return {"filename": backup.name, "size": backup.size}


@router.get("/backups", response_model=BackupList)
async def list_backups():
    """List retained backups, newest first."""
    backups = backup_manager.list_backups()
    return {
        "backups": [
            BackupInfo(name=b.name, size=b.size, created_at=b.created_at)
            for b in backups
        ]
    }


@router.get("/backups/{filename}")
async def download_backup(filename: str):
    """Download a backup file verbatim."""
    try:
        path = backup_manager.resolve(filename)
    except BackupError as e:
        raise _http_error(e) from e
    return FileResponse(
        path=path,
        filename=filename,
        media_type="application/octet-stream",
    )


@router.delete("/backups/{filename}", response_model=MessageResponse)
async def delete_backup(filename: str):
    """Delete a backup file."""
    try:
        backup_manager.delete_backup(filename)
    except BackupError as e:
        raise _http_error(e) from e
    return {"message": "Backup deleted"}


@router.post("/restore", response_model=RestoreResult)
async def restore_database(database: UploadFile = FastAPIFile(...)):
    """Replace the live database with an uploaded SQLite file.

    A pre-restore snapshot is always taken first. The running process keeps
    serving, but a restart is still advised so every component starts from
    the restored file.
    """
    try:
        staged = await backup_manager.stage_upload(database)
        outcome = await backup_manager.restore(staged)
    except BackupError as e:
        logger.warning(f"Restore rejected: {e}")
        raise _http_error(e) from e
    finally:
        await database.close()

    return RestoreResult(
        message=outcome.message,
        pre_restore_backup=outcome.pre_restore_backup,
    )


@router.get("/download")
async def download_current():
    """Stream a fresh snapshot of the live database.

    The temporary snapshot is deleted when the stream ends. The background
    task covers clients that disconnect before the first chunk is read.
    """
    try:
        path, download_name = await backup_manager.snapshot_for_download()
    except BackupError as e:
        raise _http_error(e) from e
    return StreamingResponse(
        backup_manager.stream_and_remove(path),
        background=BackgroundTask(backup_manager.discard, path),
        media_type="application/octet-stream",
        headers={
            "Content-Disposition": f'attachment; filename="{download_name}"',
            "Content-Length": str(path.stat().st_size),
        },
    )
