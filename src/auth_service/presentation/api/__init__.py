"""REST API presentation layer for the auth service.

Structure:
    api/
    ├── app.py                # FastAPI application factory
    ├── config.py             # API configuration
    ├── dependencies.py       # Dependency injection
    ├── exception_handlers.py # Error kind to HTTP response mapping
    ├── middleware.py         # Request logging
    ├── routers/              # API route handlers
    └── schemas/              # Pydantic request/response schemas
"""

from auth_service.presentation.api.app import create_app

__all__ = ["create_app"]
