import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.concurrency import run_in_threadpool

from app.api.api import api_router
from app.core.config import Settings, get_settings
from app.core.exceptions import add_exception_handlers
from app.core.middleware import add_middleware
from app.core.security import TokenService
from app.db.init_db import init_db
from app.db.session import DatabaseMonitor, build_engine, build_session_factory
from app.services.credential_store import CredentialStore
from app.services.inventory_store import InventoryStore
from app.storage import StorageSelector, create_memory_backend, create_sql_backend

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application with its own engine, storage backings and token service."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="AutoRent API for user accounts and the rental car catalog",
        version="0.1.0",
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=None,
    )

    # Set CORS middleware
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_middleware(app)
    add_exception_handlers(app)

    engine = build_engine(settings.DATABASE_URL, connect_timeout=settings.DB_CONNECT_TIMEOUT_SECONDS)
    monitor = DatabaseMonitor(
        engine,
        reconnect_interval=settings.DB_RECONNECT_INTERVAL_SECONDS,
        on_connect=init_db,
    )
    storage = StorageSelector(
        probe=monitor,
        durable=create_sql_backend(build_session_factory(engine)),
        fallback=create_memory_backend(),
    )

    app.state.settings = settings
    app.state.db_monitor = monitor
    app.state.storage = storage
    app.state.credential_store = CredentialStore(storage, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    app.state.inventory_store = InventoryStore(storage)
    app.state.token_service = TokenService(
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    # Include API router
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def startup_event():
        """Connect to the database, or fall back to in-memory storage."""
        logger.info("Starting AutoRent server...")
        logger.info("Connecting to database...")
        if await run_in_threadpool(monitor.probe):
            logger.info("Database: SQL database")
        else:
            logger.warning("Using in-memory storage as fallback")
        monitor.start()

    @app.on_event("shutdown")
    async def shutdown_event():
        await run_in_threadpool(monitor.dispose)

    frontend_dir = Path(settings.FRONTEND_DIR).resolve()
    api_prefix = settings.API_PREFIX.strip("/")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        """Serve frontend files; unknown non-API paths get the entry document."""
        if full_path == api_prefix or full_path.startswith(api_prefix + "/"):
            return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Not found"})

        requested = (frontend_dir / full_path).resolve()
        if full_path and requested.is_file() and frontend_dir in requested.parents:
            return FileResponse(requested)

        index = frontend_dir / "index.html"
        if index.is_file():
            return FileResponse(index)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Frontend not found"})

    return app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:create_app", factory=True, host="0.0.0.0", port=get_settings().PORT)
