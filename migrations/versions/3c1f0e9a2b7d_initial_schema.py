"""initial schema

Revision ID: 3c1f0e9a2b7d
Revises:
Create Date: 2026-10-18 09:12:41.503218

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from forum_stage.db.functions import POSTGRES_HOT_RANK_DDL

# revision identifiers, used by Alembic.
revision: str = "3c1f0e9a2b7d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Integer(), autoincrement=True, nullable=False)


def _fk(name: str, target: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.Integer(),
        sa.ForeignKey(target, ondelete="CASCADE"),
        nullable=nullable,
    )


def _flag(name: str, default: bool = False) -> sa.Column:
    server_default = sa.true() if default else sa.false()
    return sa.Column(name, sa.Boolean(), nullable=False, server_default=server_default)


def _timestamps() -> tuple[sa.Column, sa.Column]:
    return (
        sa.Column("published", sa.DateTime(), nullable=False),
        sa.Column("updated", sa.DateTime(), nullable=True),
    )


def _when() -> sa.Column:
    return sa.Column("when_", sa.DateTime(), nullable=False)


def _reason() -> sa.Column:
    return sa.Column("reason", sa.Text(), nullable=True)


def _expires() -> sa.Column:
    return sa.Column("expires", sa.DateTime(), nullable=True)


def upgrade() -> None:
    """Create the content, site and moderation log tables."""
    op.create_table(
        "user_",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("preferred_username", sa.Text(), nullable=True),
        sa.Column("password_encrypted", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=True),
        _flag("admin"),
        _flag("banned"),
        _flag("show_nsfw"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "site",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _fk("creator_id", "user_.id"),
        _flag("enable_downvotes", True),
        _flag("open_registration", True),
        _flag("enable_nsfw"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("id = 1", name="site_singleton"),
    )
    op.create_table(
        "category",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "community",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("category.id"), nullable=False),
        _fk("creator_id", "user_.id"),
        _flag("removed"),
        _flag("deleted"),
        _flag("nsfw"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    for membership in ("community_moderator", "community_follower"):
        op.create_table(
            membership,
            _id(),
            _fk("community_id", "community.id"),
            _fk("user_id", "user_.id"),
            sa.Column("published", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("community_id", "user_id"),
        )
    op.create_table(
        "post",
        _id(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=True),
        sa.Column("body", sa.Text(), nullable=True),
        _fk("creator_id", "user_.id"),
        _fk("community_id", "community.id"),
        _flag("removed"),
        _flag("locked"),
        _flag("stickied"),
        _flag("nsfw"),
        _flag("deleted"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "post_like",
        _id(),
        _fk("post_id", "post.id"),
        _fk("user_id", "user_.id"),
        sa.Column("score", sa.SmallInteger(), nullable=False),
        sa.Column("published", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("post_id", "user_id"),
    )
    op.create_table(
        "comment",
        _id(),
        _fk("creator_id", "user_.id"),
        _fk("post_id", "post.id"),
        _fk("parent_id", "comment.id", nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        _flag("removed"),
        _flag("read"),
        _flag("deleted"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "comment_like",
        _id(),
        _fk("user_id", "user_.id"),
        _fk("comment_id", "comment.id"),
        _fk("post_id", "post.id"),
        sa.Column("score", sa.SmallInteger(), nullable=False),
        sa.Column("published", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id"),
    )

    for table, flag in (
        ("mod_remove_post", "removed"),
        ("mod_lock_post", "locked"),
        ("mod_sticky_post", "stickied"),
    ):
        extra = [_reason()] if table == "mod_remove_post" else []
        op.create_table(
            table,
            _id(),
            _fk("mod_user_id", "user_.id"),
            _fk("post_id", "post.id"),
            *extra,
            _flag(flag, True),
            _when(),
            sa.PrimaryKeyConstraint("id"),
        )
    op.create_table(
        "mod_remove_comment",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("comment_id", "comment.id"),
        _reason(),
        _flag("removed", True),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_remove_community",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("community_id", "community.id"),
        _reason(),
        _flag("removed", True),
        _expires(),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_ban_from_community",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("other_user_id", "user_.id"),
        _fk("community_id", "community.id"),
        _reason(),
        _flag("banned", True),
        _expires(),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_ban",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("other_user_id", "user_.id"),
        _reason(),
        _flag("banned", True),
        _expires(),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_add_community",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("other_user_id", "user_.id"),
        _fk("community_id", "community.id"),
        _flag("removed"),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "mod_add",
        _id(),
        _fk("mod_user_id", "user_.id"),
        _fk("other_user_id", "user_.id"),
        _flag("removed"),
        _when(),
        sa.PrimaryKeyConstraint("id"),
    )

    if op.get_bind().dialect.name == "postgresql":
        op.execute(POSTGRES_HOT_RANK_DDL)


def downgrade() -> None:
    """Drop everything created by this revision."""
    if op.get_bind().dialect.name == "postgresql":
        op.execute("DROP FUNCTION IF EXISTS hot_rank(numeric, timestamp without time zone)")
    for table in (
        "mod_add",
        "mod_add_community",
        "mod_ban",
        "mod_ban_from_community",
        "mod_remove_community",
        "mod_remove_comment",
        "mod_sticky_post",
        "mod_lock_post",
        "mod_remove_post",
        "comment_like",
        "comment",
        "post_like",
        "post",
        "community_follower",
        "community_moderator",
        "community",
        "category",
        "site",
        "user_",
    ):
        op.drop_table(table)
