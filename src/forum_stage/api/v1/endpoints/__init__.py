# src/forum_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .site import router as site_router
from .user import router as user_router

__all__ = [
    "site_router",
    "user_router",
]
