from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopkeep.application.use_cases.activity import ActivityLogger
from shopkeep.config import get_settings
from shopkeep.infrastructure.database import SessionLocal, engine, initialize_database
from shopkeep.infrastructure.diagnostics import ActivityDiagnostics
from shopkeep.infrastructure.notifications import (
    ActivitySignalPublisher,
    notification_manager,
)
from shopkeep.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build the FastAPI application with its activity writer."""

    settings = get_settings()
    app = FastAPI(title="Shopkeep", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    diagnostics = ActivityDiagnostics()
    app.state.activity_logger = ActivityLogger(
        SessionLocal,
        diagnostics=diagnostics,
        publisher=ActivitySignalPublisher(notification_manager, diagnostics),
    )

    register_routes(app)
    return app


app = create_app()
