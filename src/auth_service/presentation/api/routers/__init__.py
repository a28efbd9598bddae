from auth_service.presentation.api.routers.auth import router as auth_router
from auth_service.presentation.api.routers.health import router as health_router
from auth_service.presentation.api.routers.metrics import router as metrics_router

__all__ = [
    "auth_router",
    "health_router",
    "metrics_router",
]
