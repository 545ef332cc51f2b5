# src/forum_stage/models/moderation.py
"""Moderation log tables.

Each table records one kind of moderator action. Rows are append-only: a
reversal (restore, unlock, unban) is a new row with the outcome flag false.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, MappedColumn, mapped_column

from forum_stage.db.session import Base
from forum_stage.db.time import naive_now


def _user_fk() -> MappedColumn[int]:
    return mapped_column(Integer, ForeignKey("user_.id", ondelete="CASCADE"), nullable=False)


def _when() -> MappedColumn[datetime]:
    return mapped_column("when_", DateTime, nullable=False, default=naive_now)


class ModRemovePost(Base):
    """A post removed from (or restored to) its community."""

    __tablename__ = "mod_remove_post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    when_: Mapped[datetime] = _when()


class ModLockPost(Base):
    """A post locked against (or reopened to) new comments."""

    __tablename__ = "mod_lock_post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    when_: Mapped[datetime] = _when()


class ModStickyPost(Base):
    """A post pinned to (or unpinned from) the top of its community."""

    __tablename__ = "mod_sticky_post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("post.id", ondelete="CASCADE"), nullable=False
    )
    stickied: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    when_: Mapped[datetime] = _when()


class ModRemoveComment(Base):
    """A comment removed or restored."""

    __tablename__ = "mod_remove_comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    comment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("comment.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    when_: Mapped[datetime] = _when()


class ModRemoveCommunity(Base):
    """A whole community removed by a site admin."""

    __tablename__ = "mod_remove_community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    when_: Mapped[datetime] = _when()


class ModBanFromCommunity(Base):
    """A user banned from (or unbanned in) one community."""

    __tablename__ = "mod_ban_from_community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    other_user_id: Mapped[int] = _user_fk()
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    when_: Mapped[datetime] = _when()


class ModBan(Base):
    """A site-wide ban."""

    __tablename__ = "mod_ban"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    other_user_id: Mapped[int] = _user_fk()
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    when_: Mapped[datetime] = _when()


class ModAddCommunity(Base):
    """A user added to (removed = true: dropped from) a community's moderators."""

    __tablename__ = "mod_add_community"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    other_user_id: Mapped[int] = _user_fk()
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("community.id", ondelete="CASCADE"), nullable=False
    )
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    when_: Mapped[datetime] = _when()


class ModAdd(Base):
    """A user added to (removed = true: dropped from) the site admins."""

    __tablename__ = "mod_add"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mod_user_id: Mapped[int] = _user_fk()
    other_user_id: Mapped[int] = _user_fk()
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    when_: Mapped[datetime] = _when()
