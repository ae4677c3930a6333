"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from buildhub.application.services.auth_service import ensure_default_admin
from buildhub.application.services.notification_service import NotificationCenter
from buildhub.config import Settings, get_settings
from buildhub.core.exceptions import register_exception_handlers
from buildhub.core.logging import configure_logging
from buildhub.core.middleware import setup_middleware
from buildhub.core.rate_limit import setup_rate_limiting
from buildhub.infrastructure.backends import Backend, build_backend
from buildhub.infrastructure.file_storage import LocalFileStorage, StorageProvider

# Import all models so SQLAlchemy knows about them
from buildhub.domain.models.material import Material  # noqa: F401
from buildhub.domain.models.password_reset import PasswordResetToken  # noqa: F401
from buildhub.domain.models.project import Project  # noqa: F401
from buildhub.domain.models.stored_file import StoredFile  # noqa: F401
from buildhub.domain.models.user import User  # noqa: F401

# Import routers
from buildhub.interfaces.api.analytics import router as analytics_router
from buildhub.interfaces.api.auth import router as auth_router
from buildhub.interfaces.api.files import router as files_router
from buildhub.interfaces.api.materials import router as materials_router
from buildhub.interfaces.api.notifications import router as notifications_router
from buildhub.interfaces.api.projects import router as projects_router
from buildhub.interfaces.api.users import router as users_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    settings: Settings = app.state.settings
    backend: Backend = app.state.backend
    logger.info("Starting BuildHub API...", env=settings.ENVIRONMENT, backend=backend.name)

    backend.init()

    # Create default admin user if none exists
    with backend.repositories() as repos:
        ensure_default_admin(
            repos.users,
            email=settings.DEFAULT_ADMIN_EMAIL,
            password=settings.DEFAULT_ADMIN_PASSWORD,
            name=settings.DEFAULT_ADMIN_NAME,
            rounds=settings.BCRYPT_ROUNDS,
        )

    yield

    backend.dispose()
    logger.info("BuildHub API stopped")


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[Backend] = None,
    file_storage: Optional[StorageProvider] = None,
    notifications: Optional[NotificationCenter] = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="BuildHub — Construction Project Management",
        description="API Backend — projects, materials, documents and portfolio analytics",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.backend = backend or build_backend(settings)
    app.state.file_storage = file_storage or LocalFileStorage(settings.UPLOAD_DIR)
    app.state.notifications = notifications or NotificationCenter()

    # Setup Middleware (Correlation ID, Logging, Rate limits)
    setup_middleware(app)
    setup_rate_limiting(app, settings)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(materials_router)
    app.include_router(files_router)
    app.include_router(analytics_router)
    app.include_router(notifications_router)
    app.include_router(users_router)

    @app.get("/")
    def root():
        return {
            "name": "BuildHub API",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy", "backend": app.state.backend.name}

    @app.get("/api/ping")
    def ping():
        return {"message": "pong"}

    return app


app = create_app()
