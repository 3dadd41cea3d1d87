from fastapi import FastAPI

from .activity import router as activity_router
from .auth import router as auth_router
from .inventory import router as inventory_router
from .notifications import router as notifications_router
from .products import router as products_router
from .sessions import router as sessions_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(activity_router)
    app.include_router(notifications_router)
    app.include_router(inventory_router)
    app.include_router(sessions_router)
    app.include_router(products_router)
