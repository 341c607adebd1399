"""Application configuration from environment variables."""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config comes from env vars or .env file.

    The desktop shell sets DATABASE_PATH, API_PORT and ELECTRON=true before
    spawning the server; the web build relies on the defaults below.
    """

    DATABASE_PATH: str = "./data/prompto.db"
    BACKUP_DIR: str = ""  # defaults to <dir of DATABASE_PATH>/backups
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 5080
    ELECTRON: bool = False
    CORS_ORIGINS: str = "http://localhost:3080,http://127.0.0.1:3080"
    CLIENT_URL: str = ""
    STATIC_DIR: str = ""  # built client, served when set
    MAX_UPLOAD_BYTES: int = 50 * 1024 * 1024
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def database_file(self) -> Path:
        return Path(self.DATABASE_PATH).expanduser().resolve()

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.database_file}"

    @property
    def backups_dir(self) -> Path:
        if self.BACKUP_DIR:
            return Path(self.BACKUP_DIR).expanduser().resolve()
        return self.database_file.parent / "backups"

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        if self.CLIENT_URL:
            origins.append(self.CLIENT_URL)
        return origins


settings = Settings()
