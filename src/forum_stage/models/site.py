"""The singleton site row."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import naive_now

# Primary key of the only row the site table may hold.
SITE_ID = 1


class Site(Base):
    """Instance-wide configuration owned by its creator."""

    __tablename__ = "site"
    __table_args__ = (CheckConstraint(f"id = {SITE_ID}", name="site_singleton"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_.id", ondelete="CASCADE"),
        nullable=False,
    )
    enable_downvotes: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    open_registration: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    enable_nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=naive_now)
    updated: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
