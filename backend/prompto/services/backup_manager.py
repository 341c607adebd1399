"""Backups of the live SQLite file: snapshot, list, download, delete, restore.

Snapshots never copy the raw file. They checkpoint the WAL and then use
VACUUM INTO, which produces a compacted, self-contained copy while other
connections keep reading and writing.

Restore is the risky path, so it runs in a fixed order:
  1. check the upload really is a SQLite file (nothing touched on failure)
  2. snapshot the current database as pre-restore-*.db
  3. close pooled connections so no stale handle checkpoints old WAL pages
     into the new file
  4. copy the upload over the live file and drop its -wal/-shm sidecars
  5. delete the staged upload (also on failure)
A crash between 4 and 5 is a known, accepted window for a local tool.
"""
import asyncio
import logging
import os
import shutil
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import aiofiles

from prompto.config import settings
from prompto.database import checkpoint_and_snapshot, release_connections

logger = logging.getLogger(__name__)

SQLITE_HEADER = b"SQLite format 3\x00"
BACKUP_EXT = ".db"
BACKUP_PREFIX = "backup"
PRE_RESTORE_PREFIX = "pre-restore"
DOWNLOAD_PREFIX = "download"
UPLOAD_PREFIX = "upload"
CHUNK_SIZE = 1024 * 1024


class BackupError(Exception):
    """Base class for backup/restore failures. `status_code` maps to HTTP."""
    status_code = 500


class InvalidBackupName(BackupError):
    status_code = 400


class BackupNotFound(BackupError):
    status_code = 404


class InvalidDatabaseFile(BackupError):
    status_code = 400


class UploadTooLarge(BackupError):
    status_code = 413


class BackupFailed(BackupError):
    status_code = 500


@dataclass
class BackupFile:
    name: str
    path: Path
    size: int
    created_at: datetime


@dataclass
class RestoreOutcome:
    pre_restore_backup: str
    message: str = "Database restored. Please restart the application."


def format_backup_date(moment: datetime | None = None) -> str:
    return (moment or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")


def validate_filename(filename: str) -> str:
    """Reject anything that could escape the backups directory."""
    if not filename:
        raise InvalidBackupName("Invalid filename")
    if ".." in filename or "/" in filename or "\\" in filename:
        raise InvalidBackupName("Invalid filename")
    if not filename.endswith(BACKUP_EXT):
        raise InvalidBackupName("Invalid filename")
    return filename


class BackupManager:
    """Manages snapshot files next to the live database."""

    def __init__(self, database_file: Path | None = None, backups_dir: Path | None = None):
        self.database_file = database_file or settings.database_file
        self.backups_dir = backups_dir or settings.backups_dir

    def ensure_dir(self) -> Path:
        self.backups_dir.mkdir(parents=True, exist_ok=True)
        return self.backups_dir

    def _reserve_path(self, prefix: str) -> Path:
        """Claim a fresh backup name by creating it empty with O_EXCL.

        VACUUM INTO writes into an existing empty file but refuses anything
        else. The exclusive create keeps two same-second snapshots apart.
        """
        stem = f"{prefix}-{format_backup_date()}"
        self.ensure_dir()
        counter = 0
        while True:
            suffix = f"-{counter}" if counter else ""
            candidate = self.backups_dir / f"{stem}{suffix}{BACKUP_EXT}"
            try:
                fd = os.open(candidate, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
            except FileExistsError:
                counter += 1
                continue
            os.close(fd)
            return candidate

    def discard(self, path: Path) -> None:
        """Remove a file this manager created, if it is still there."""
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        logger.debug(f"Removed {path.name}")

    async def create_backup(self, prefix: str = BACKUP_PREFIX) -> BackupFile:
        """Checkpoint and snapshot the live database into the backups dir."""
        path = self._reserve_path(prefix)
        try:
            await checkpoint_and_snapshot(path)
        except Exception as e:
            # The reserved name belongs to this call alone
            self.discard(path)
            logger.error(f"Snapshot to {path.name} failed: {e}")
            raise BackupFailed(f"Failed to create backup: {e}") from e

        stat = path.stat()
        if stat.st_size == 0:
            self.discard(path)
            raise BackupFailed("Backup file is empty")

        logger.info(f"Backup created: {path.name} ({stat.st_size} bytes)")
        return BackupFile(
            name=path.name,
            path=path,
            size=stat.st_size,
            created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )

    def list_backups(self) -> list[BackupFile]:
        """All retained backups, newest first. Upload staging files are hidden."""
        backups = []
        for path in self.ensure_dir().iterdir():
            if not path.is_file() or path.suffix != BACKUP_EXT:
                continue
            if path.name.startswith(f"{UPLOAD_PREFIX}-"):
                continue
            stat = path.stat()
            backups.append(BackupFile(
                name=path.name,
                path=path,
                size=stat.st_size,
                created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            ))
        backups.sort(key=lambda b: (b.created_at, b.name), reverse=True)
        return backups

    def resolve(self, filename: str) -> Path:
        """Validated path of an existing backup."""
        validate_filename(filename)
        path = self.ensure_dir() / filename
        if not path.is_file():
            raise BackupNotFound("Backup not found")
        return path

    def delete_backup(self, filename: str) -> None:
        path = self.resolve(filename)
        os.remove(path)
        logger.info(f"Backup deleted: {filename}")

    async def snapshot_for_download(self) -> tuple[Path, str]:
        """Fresh temporary snapshot plus the name offered to the browser."""
        stamp = format_backup_date()
        backup = await self.create_backup(DOWNLOAD_PREFIX)
        return backup.path, f"prompto-backup-{stamp}{BACKUP_EXT}"

    async def stream_and_remove(self, path: Path, chunk_size: int = CHUNK_SIZE):
        """Yield the file in chunks, deleting it however the stream ends."""
        try:
            async with aiofiles.open(path, "rb") as f:
                while True:
                    chunk = await f.read(chunk_size)
                    if not chunk:
                        break
                    yield chunk
        finally:
            self.discard(path)

    async def stage_upload(self, upload, max_bytes: int | None = None) -> Path:
        """Write an uploaded database to upload-<ms>.db, enforcing the size cap."""
        max_bytes = max_bytes or settings.MAX_UPLOAD_BYTES
        if not (upload.filename or "").endswith(BACKUP_EXT):
            raise InvalidDatabaseFile("Only .db files are allowed")

        path = self.ensure_dir() / f"{UPLOAD_PREFIX}-{int(time.time() * 1000)}{BACKUP_EXT}"
        written = 0
        try:
            async with aiofiles.open(path, "wb") as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise UploadTooLarge(
                            f"Uploaded file exceeds the {max_bytes // (1024 * 1024)} MB limit"
                        )
                    await f.write(chunk)
        except BaseException:
            if path.exists():
                os.remove(path)
            raise
        return path

    async def has_sqlite_header(self, path: Path) -> bool:
        async with aiofiles.open(path, "rb") as f:
            header = await f.read(len(SQLITE_HEADER))
        return header == SQLITE_HEADER

    async def restore(self, staged: Path) -> RestoreOutcome:
        """Swap `staged` in as the live database. See module docstring."""
        try:
            if not await self.has_sqlite_header(staged):
                raise InvalidDatabaseFile("Invalid SQLite database file")

            pre_restore = await self.create_backup(PRE_RESTORE_PREFIX)
            logger.info(f"Pre-restore backup created: {pre_restore.name}")

            await release_connections()
            try:
                await asyncio.to_thread(shutil.copyfile, staged, self.database_file)
            except OSError as e:
                logger.error(f"Restore copy failed, pre-restore backup kept at {pre_restore.name}: {e}")
                raise BackupFailed(
                    f"Failed to restore database: {e}. "
                    f"Previous data is in {pre_restore.name}"
                ) from e

            for suffix in ("-wal", "-shm"):
                sidecar = Path(f"{self.database_file}{suffix}")
                if sidecar.exists():
                    os.remove(sidecar)

            logger.info("Database restored successfully")
            return RestoreOutcome(pre_restore_backup=pre_restore.name)
        finally:
            if staged.exists():
                os.remove(staged)


backup_manager = BackupManager()
