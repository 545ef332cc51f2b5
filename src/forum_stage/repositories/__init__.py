"""Data access helpers."""

from .site_repo import SiteRepository

__all__ = ["SiteRepository"]
