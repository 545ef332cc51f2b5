"""Per-table moderation log listings.

Every listing is newest first, optionally narrowed to one moderator, and
paged with the same rules as entity listings. Community-scoped tables can be
narrowed to one community; site-wide tables cannot.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.orm import Session, aliased

from forum_stage.models import (
    Comment,
    Community,
    ModAdd,
    ModAddCommunity,
    ModBan,
    ModBanFromCommunity,
    ModLockPost,
    ModRemoveComment,
    ModRemoveCommunity,
    ModRemovePost,
    ModStickyPost,
    Post,
    User,
)
from forum_stage.schemas.modlog import (
    ModAddCommunityView,
    ModAddView,
    ModBanFromCommunityView,
    ModBanView,
    ModLockPostView,
    ModRemoveCommentView,
    ModRemoveCommunityView,
    ModRemovePostView,
    ModStickyPostView,
)

ViewT = TypeVar("ViewT", bound=BaseModel)


@dataclass(frozen=True)
class ModlogPage:
    """Filters applied to one moderation table."""

    limit: int
    offset: int
    mod_user_id: int | None = None
    community_id: int | None = None


@dataclass(frozen=True)
class ModlogQuery(Generic[ViewT]):
    """How to read one moderation table into its view."""

    view: type[ViewT]
    build: Callable[[], tuple[Select, ColumnElement, ColumnElement, ColumnElement | None]]

    def list(self, db: Session, page: ModlogPage) -> list[ViewT]:
        stmt, mod_user_id, when_, community_id = self.build()
        if page.mod_user_id is not None:
            stmt = stmt.where(mod_user_id == page.mod_user_id)
        if page.community_id is not None:
            if community_id is None:
                raise ValueError(f"{self.view.__name__} is not community scoped")
            stmt = stmt.where(community_id == page.community_id)
        stmt = stmt.order_by(when_.desc()).limit(page.limit).offset(page.offset)
        return [self.view(**row._mapping) for row in db.execute(stmt)]


def _post_action(
    model: type[ModRemovePost] | type[ModLockPost] | type[ModStickyPost],
    *extra: str,
):
    def build() -> tuple[Select, ColumnElement, ColumnElement, ColumnElement]:
        moderator = aliased(User)
        stmt = (
            select(
                model.id,
                model.mod_user_id,
                moderator.name.label("mod_user_name"),
                model.when_,
                model.post_id,
                Post.name.label("post_name"),
                *(getattr(model, column) for column in extra),
                Post.community_id.label("community_id"),
                Community.name.label("community_name"),
            )
            .select_from(model)
            .join(moderator, moderator.id == model.mod_user_id)
            .join(Post, Post.id == model.post_id)
            .join(Community, Community.id == Post.community_id)
        )
        return stmt, model.mod_user_id, model.when_, Post.community_id

    return build


def _remove_comment() -> tuple[Select, ColumnElement, ColumnElement, ColumnElement]:
    moderator = aliased(User)
    author = aliased(User)
    stmt = (
        select(
            ModRemoveComment.id,
            ModRemoveComment.mod_user_id,
            moderator.name.label("mod_user_name"),
            ModRemoveComment.when_,
            ModRemoveComment.comment_id,
            Comment.content.label("comment_content"),
            Comment.creator_id.label("comment_user_id"),
            author.name.label("comment_user_name"),
            Comment.post_id.label("post_id"),
            Post.name.label("post_name"),
            ModRemoveComment.reason,
            ModRemoveComment.removed,
            Post.community_id.label("community_id"),
            Community.name.label("community_name"),
        )
        .select_from(ModRemoveComment)
        .join(moderator, moderator.id == ModRemoveComment.mod_user_id)
        .join(Comment, Comment.id == ModRemoveComment.comment_id)
        .join(author, author.id == Comment.creator_id)
        .join(Post, Post.id == Comment.post_id)
        .join(Community, Community.id == Post.community_id)
    )
    return stmt, ModRemoveComment.mod_user_id, ModRemoveComment.when_, Post.community_id


def _remove_community() -> tuple[Select, ColumnElement, ColumnElement, None]:
    moderator = aliased(User)
    stmt = (
        select(
            ModRemoveCommunity.id,
            ModRemoveCommunity.mod_user_id,
            moderator.name.label("mod_user_name"),
            ModRemoveCommunity.when_,
            ModRemoveCommunity.community_id,
            Community.name.label("community_name"),
            ModRemoveCommunity.reason,
            ModRemoveCommunity.removed,
            ModRemoveCommunity.expires,
        )
        .select_from(ModRemoveCommunity)
        .join(moderator, moderator.id == ModRemoveCommunity.mod_user_id)
        .join(Community, Community.id == ModRemoveCommunity.community_id)
    )
    return stmt, ModRemoveCommunity.mod_user_id, ModRemoveCommunity.when_, None


def _user_action(
    model: type[ModBanFromCommunity] | type[ModBan] | type[ModAddCommunity] | type[ModAdd],
    *extra: str,
):
    scoped = hasattr(model, "community_id")

    def build() -> tuple[Select, ColumnElement, ColumnElement, ColumnElement | None]:
        moderator = aliased(User)
        other = aliased(User)
        columns: list[ColumnElement] = [
            model.id,
            model.mod_user_id,
            moderator.name.label("mod_user_name"),
            model.when_,
            model.other_user_id,
            other.name.label("other_user_name"),
            *(getattr(model, column) for column in extra),
        ]
        if scoped:
            columns += [model.community_id, Community.name.label("community_name")]
        stmt = (
            select(*columns)
            .select_from(model)
            .join(moderator, moderator.id == model.mod_user_id)
            .join(other, other.id == model.other_user_id)
        )
        if scoped:
            stmt = stmt.join(Community, Community.id == model.community_id)
            return stmt, model.mod_user_id, model.when_, model.community_id
        return stmt, model.mod_user_id, model.when_, None

    return build


REMOVED_POSTS = ModlogQuery(ModRemovePostView, _post_action(ModRemovePost, "reason", "removed"))
LOCKED_POSTS = ModlogQuery(ModLockPostView, _post_action(ModLockPost, "locked"))
STICKIED_POSTS = ModlogQuery(ModStickyPostView, _post_action(ModStickyPost, "stickied"))
REMOVED_COMMENTS = ModlogQuery(ModRemoveCommentView, _remove_comment)
BANNED_FROM_COMMUNITY = ModlogQuery(
    ModBanFromCommunityView,
    _user_action(ModBanFromCommunity, "reason", "banned", "expires"),
)
ADDED_TO_COMMUNITY = ModlogQuery(ModAddCommunityView, _user_action(ModAddCommunity, "removed"))

REMOVED_COMMUNITIES = ModlogQuery(ModRemoveCommunityView, _remove_community)
BANNED = ModlogQuery(ModBanView, _user_action(ModBan, "reason", "banned", "expires"))
ADDED = ModlogQuery(ModAddView, _user_action(ModAdd, "removed"))
