"""
Application factory — Driver Document Verification.

Architecture:
  - PostgreSQL (prod) / SQLite (dev) for documents and driver aggregates
  - Local disk or MinIO for document images
  - Upload → review → resend workflow with a recomputed driver status
"""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from src.api.dependencies import ServiceContainer, build_container
from src.api.routes.admin import router as admin_router
from src.api.routes.documents import router as documents_router
from src.core.exceptions import (
    AuthorizationError,
    InternalError,
    NotFoundError,
    StorageError,
    ValidationError,
    VerificationError,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

_STATUS_CODES = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    StorageError: 502,
    InternalError: 500,
}


def _status_for(exc: VerificationError) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS_CODES:
            return _STATUS_CODES[cls]
    return 500


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Build the app. Tests pass their own container."""
    container = container or build_container()
    settings = container.settings

    app = FastAPI(
        title="Driver Document Verification",
        description="Driver onboarding documents: upload, admin review, resend, and the driver's aggregate status.",
        version=VERSION,
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Startup ──
    @app.on_event("startup")
    async def startup():
        container.init_db()
        logger.info(f"Driver document service started (storage={settings.storage_backend})")

    # ── Errors ──
    @app.exception_handler(VerificationError)
    async def verification_error_handler(request: Request, exc: VerificationError):
        status = _status_for(exc)
        if status >= 500:
            logger.error(f"{request.method} {request.url.path} → {status}: {exc}")
        else:
            logger.info(f"{request.method} {request.url.path} → {status}: {exc}")
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    # ── Routes ──
    app.include_router(documents_router, prefix="/api/v1", tags=["Documents"])
    app.include_router(admin_router, prefix="/api/v1", tags=["Admin"])

    # ── Health ──
    @app.get("/health")
    async def health():
        db_ok = True
        try:
            with container.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning(f"Health check DB ping failed: {e}")
            db_ok = False
        db_url = str(container.engine.url)
        return {
            "status": "ok" if db_ok else "degraded",
            "version": VERSION,
            "database": "PostgreSQL" if "postgres" in db_url else "SQLite",
            "storage": settings.storage_backend,
            "vehicle_types": list(container.catalog.vehicle_types()),
        }

    # ── Serve local uploads ──
    if settings.storage_backend == "local":
        upload_dir = Path(settings.upload_dir)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount("/uploads", StaticFiles(directory=str(upload_dir)), name="uploads")

    return app
