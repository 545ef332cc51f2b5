"""Comment listings."""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.orm import aliased

from forum_stage.models import Comment, CommentLike, Community, Post, User
from forum_stage.queries.base import QueryBuilder
from forum_stage.queries.options import SortType, fuzzy_search
from forum_stage.schemas.comment import CommentView

__all__ = ["CommentQueryBuilder"]


class CommentQueryBuilder(QueryBuilder[CommentView]):
    """Comments joined with author, post and community."""

    view = CommentView
    supported_options = frozenset(
        {"search_term", "for_creator_id", "for_community_id", "show_nsfw", "my_user_id"}
    )

    def statement(self) -> Select:
        options = self.options
        reply = aliased(Comment)

        score = (
            select(func.coalesce(func.sum(CommentLike.score), 0))
            .where(CommentLike.comment_id == Comment.id)
            .scalar_subquery()
        )
        upvotes = (
            select(func.count(CommentLike.id))
            .where(CommentLike.comment_id == Comment.id, CommentLike.score == 1)
            .scalar_subquery()
        )
        downvotes = (
            select(func.count(CommentLike.id))
            .where(CommentLike.comment_id == Comment.id, CommentLike.score == -1)
            .scalar_subquery()
        )
        replies = select(func.count(reply.id)).where(reply.parent_id == Comment.id).scalar_subquery()

        columns = [
            Comment.id,
            Comment.creator_id,
            Comment.post_id,
            Comment.parent_id,
            Comment.content,
            Comment.removed,
            Comment.read,
            Comment.deleted,
            Comment.published,
            Comment.updated,
            Post.community_id.label("community_id"),
            Community.name.label("community_name"),
            Post.name.label("post_name"),
            User.name.label("creator_name"),
            score.label("score"),
            upvotes.label("upvotes"),
            downvotes.label("downvotes"),
        ]
        if options.my_user_id is not None:
            columns += [
                self._actor_column(),
                select(CommentLike.score)
                .where(
                    CommentLike.comment_id == Comment.id,
                    CommentLike.user_id == options.my_user_id,
                )
                .scalar_subquery()
                .label("my_vote"),
            ]

        stmt = (
            select(*columns)
            .select_from(Comment)
            .join(User, User.id == Comment.creator_id)
            .join(Post, Post.id == Comment.post_id)
            .join(Community, Community.id == Post.community_id)
            .where(Comment.removed.is_(False), Comment.deleted.is_(False))
        )

        if not options.show_nsfw:
            stmt = stmt.where(Post.nsfw.is_(False), Community.nsfw.is_(False))
        if options.for_community_id is not None:
            stmt = stmt.where(Post.community_id == options.for_community_id)
        if options.for_creator_id is not None:
            stmt = stmt.where(Comment.creator_id == options.for_creator_id)
        if options.search_term is not None:
            stmt = stmt.where(
                Comment.content.ilike(fuzzy_search(options.search_term), escape="\\")
            )
        window = self._published_window(Comment.published)
        if window is not None:
            stmt = stmt.where(window)

        sort = options.sort
        if sort in (SortType.HOT, SortType.ACTIVE):
            stmt = stmt.order_by(func.hot_rank(score, Comment.published).desc())
        elif sort is SortType.MOST_COMMENTS:
            stmt = stmt.order_by(replies.desc())
        elif sort.is_top:
            stmt = stmt.order_by(score.desc())
        return stmt.order_by(Comment.published.desc(), Comment.id.desc())
