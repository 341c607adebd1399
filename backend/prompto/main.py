"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from prompto.config import settings
from prompto.database import engine, get_db, async_session
from prompto.logging_config import configure_logging
from prompto.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed defaults on startup, release the pool on shutdown."""
    configure_logging(settings.LOG_LEVEL)

    from prompto.services.backup_manager import backup_manager
    backup_manager.ensure_dir()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    from prompto.services.seed_defaults import seed_default_settings
    async with async_session() as session:
        await seed_default_settings(session)

    logger.info(
        f"Database ready at {settings.database_file} "
        f"({'desktop' if settings.ELECTRON else 'web'} mode)"
    )

    yield

    await engine.dispose()


app = FastAPI(
    title="Prompto API",
    version="1.0.0",
    description="Kanban organizer for reusable AI prompts.",
    lifespan=lifespan,
)

# CORS: the desktop shell loads the client from a local origin we do not know up front
if settings.ELECTRON:
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and answer with a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/api/health")
async def health_check():
    """Verify API and database connectivity."""
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        async for db in get_db():
            await db.execute(text("SELECT 1"))
            return {"status": "healthy", "database": "connected", "timestamp": timestamp}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unavailable", "timestamp": timestamp},
        )


# Register routers
from prompto.routes.projects import router as projects_router
from prompto.routes.categories import router as categories_router
from prompto.routes.prompts import router as prompts_router
from prompto.routes.settings import router as settings_router
from prompto.routes.database import router as database_router
app.include_router(projects_router)
app.include_router(categories_router)
app.include_router(prompts_router)
app.include_router(settings_router)
app.include_router(database_router)


# Built client, with index.html as the fallback for client-side routes
if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
    static_dir = Path(settings.STATIC_DIR)
    if (static_dir / "assets").is_dir():
        app.mount("/assets", StaticFiles(directory=static_dir / "assets"), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str):
        if full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and static_dir.resolve() in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(static_dir / "index.html")


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    run()
