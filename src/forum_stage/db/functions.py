"""SQL functions used by listing queries.

``hot_rank`` exists as a plpgsql function on PostgreSQL and is registered as
a Python callable on every SQLite connection so the same query text runs on
both backends.
"""

from __future__ import annotations

import math
import sqlite3
from datetime import datetime

from sqlalchemy import event, text
from sqlalchemy.engine import Connection, Engine

from forum_stage.db.time import naive_now

HOT_RANK_GRAVITY = 1.8

POSTGRES_HOT_RANK_DDL = """
CREATE OR REPLACE FUNCTION hot_rank(score numeric, published timestamp without time zone)
RETURNS integer AS $$
BEGIN
  RETURN floor(
    10000 * log(greatest(1, score + 3))
    / power(((EXTRACT(EPOCH FROM (timezone('utc', now()) - published)) / 3600) + 2), 1.8)
  )::integer;
END; $$
LANGUAGE plpgsql
"""


def hot_rank(score: int | None, published: datetime | str | None) -> int:
    """Rank by score, decayed by hours since ``published``."""
    if published is None:
        return 0
    if isinstance(published, str):
        published = datetime.fromisoformat(published)
    hours = max((naive_now() - published).total_seconds(), 0.0) / 3600
    return math.floor(
        10000 * math.log10(max(1, (score or 0) + 3)) / math.pow(hours + 2, HOT_RANK_GRAVITY)
    )


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("hot_rank", 2, hot_rank)


def install_functions(connection: Connection) -> None:
    """Create server-side functions on backends that need them."""
    if connection.dialect.name == "postgresql":
        connection.execute(text(POSTGRES_HOT_RANK_DDL))
