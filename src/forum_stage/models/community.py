"""SQLAlchemy models for communities, their categories and membership."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import naive_now


class Category(Base):
    """Topic bucket every community is filed under."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)


class Community(Base):
    """Community metadata used for grouping posts and members."""

    __tablename__ = "community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("category.id"), nullable=False)
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_.id", ondelete="CASCADE"),
        nullable=False,
    )
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    nsfw: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    published: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=naive_now)
    updated: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)


class CommunityModerator(Base):
    """Users allowed to moderate a community."""

    __tablename__ = "community_moderator"
    __table_args__ = (UniqueConstraint("community_id", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_.id", ondelete="CASCADE"),
        nullable=False,
    )
    published: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=naive_now)


class CommunityFollower(Base):
    """Subscription of a user to a community."""

    __tablename__ = "community_follower"
    __table_args__ = (UniqueConstraint("community_id", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    community_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("community.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_.id", ondelete="CASCADE"),
        nullable=False,
    )
    published: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=naive_now)
