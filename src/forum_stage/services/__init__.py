# src/forum_stage/services/__init__.py
"""Business logic services for the Forum Stage application."""

from .moderation import SlurFilter
from .modlog import ModlogAggregator
from .search import SearchAggregator

__all__ = [
    "ModlogAggregator",
    "SearchAggregator",
    "SlurFilter",
]
