"""
Member API Service
==================
Team roster backend: lists, shows, and registers members. Member records
live in a SQL database (SQLAlchemy); profile images are written to a local
uploads directory and served back read-only.

Routes:
    GET  /api/members               all members, newest first
    GET  /api/members/{id}          one member
    POST /api/members               multipart create with profileImage
    GET  /api/uploads/{filename}    stored image bytes

Port: 5000
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roster.controllers import member_controller, system_controller, upload_controller
from roster.controllers.errors import register_error_handlers
from roster.core.config import Settings, settings as default_settings
from roster.core.errors import StoreUnavailable
from roster.core.logging import get_logger
from roster.middleware import MetricsMiddleware, RequestIDMiddleware
from roster.repositories.member_store import MemberStore
from roster.repositories.upload_store import UploadStore
from roster.services.member_service import MemberService

logger = get_logger("member-api")


@asynccontextmanager
async def lifespan(application: FastAPI):
    cfg: Settings = application.state.settings
    member_store: MemberStore = application.state.member_store
    upload_store: UploadStore = application.state.upload_store

    member_store.connect()
    upload_store.ensure_directory()
    try:
        application.state.member_service.seed_gauges()
    except StoreUnavailable:
        logger.warning("Could not seed gauges — DB may not be ready yet")

    logger.info("Server running on port %d", cfg.SERVICE_PORT)
    logger.info("API available at http://localhost:%d/api", cfg.SERVICE_PORT)
    logger.info("Uploads directory: %s", upload_store.directory.resolve())
    logger.info("CORS origin: %s", ", ".join(cfg.CORS_ORIGINS))
    yield
    member_store.close()
    logger.info("Shutting down — member store disconnected")


def create_app(cfg: Optional[Settings] = None,
               member_store: Optional[MemberStore] = None,
               upload_store: Optional[UploadStore] = None) -> FastAPI:
    cfg = cfg or default_settings
    member_store = member_store or MemberStore(cfg.DATABASE_URL, pool_recycle=cfg.POOL_RECYCLE)
    upload_store = upload_store or UploadStore(cfg.UPLOADS_DIR, max_bytes=cfg.MAX_UPLOAD_BYTES)

    application = FastAPI(
        title="Member API",
        description="Team roster members with profile images.",
        version=cfg.SERVICE_VERSION,
        lifespan=lifespan,
    )
    application.state.settings = cfg
    application.state.member_store = member_store
    application.state.upload_store = upload_store
    application.state.member_service = MemberService(member_store, upload_store)

    application.add_middleware(MetricsMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=cfg.CORS_MAX_AGE,
    )

    register_error_handlers(application)
    application.include_router(system_controller.router)
    application.include_router(member_controller.router)
    application.include_router(upload_controller.router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=default_settings.SERVICE_PORT, log_level="info")
