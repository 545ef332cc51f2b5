# src/forum_stage/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def naive_now() -> datetime:
    """Return the current UTC time without tzinfo, as stored in timestamp columns."""
    return datetime.now(UTC).replace(tzinfo=None)
