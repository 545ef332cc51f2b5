# src/forum_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import site_router, user_router

__all__ = [
    "site_router",
    "user_router",
]
