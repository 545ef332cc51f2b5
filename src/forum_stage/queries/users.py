"""User listings and the aggregate columns every user view carries."""

from __future__ import annotations

from sqlalchemy import ColumnElement, Select, func, select

from forum_stage.models import Comment, CommentLike, Post, PostLike, User
from forum_stage.queries.base import QueryBuilder
from forum_stage.queries.options import SortType, fuzzy_search
from forum_stage.schemas.user import UserView

__all__ = ["UserQueryBuilder", "user_view_statement"]


def _aggregates() -> dict[str, ColumnElement]:
    return {
        "number_of_posts": select(func.count(Post.id))
        .where(Post.creator_id == User.id)
        .scalar_subquery(),
        "post_score": select(func.coalesce(func.sum(PostLike.score), 0))
        .select_from(PostLike)
        .join(Post, Post.id == PostLike.post_id)
        .where(Post.creator_id == User.id)
        .scalar_subquery(),
        "number_of_comments": select(func.count(Comment.id))
        .where(Comment.creator_id == User.id)
        .scalar_subquery(),
        "comment_score": select(func.coalesce(func.sum(CommentLike.score), 0))
        .select_from(CommentLike)
        .join(Comment, Comment.id == CommentLike.comment_id)
        .where(Comment.creator_id == User.id)
        .scalar_subquery(),
    }


def user_view_statement(aggregates: dict[str, ColumnElement] | None = None) -> Select:
    """Select the columns of :class:`UserView` from the user table."""
    aggregates = aggregates or _aggregates()
    return select(
        User.id,
        User.name,
        User.preferred_username,
        User.admin,
        User.banned,
        User.published,
        *(column.label(name) for name, column in aggregates.items()),
    )


class UserQueryBuilder(QueryBuilder[UserView]):
    """Users ranked by the score of what they have written."""

    view = UserView
    supported_options = frozenset({"search_term"})

    def statement(self) -> Select:
        options = self.options
        aggregates = _aggregates()
        total_score = aggregates["post_score"] + aggregates["comment_score"]

        stmt = user_view_statement(aggregates)
        if options.search_term is not None:
            stmt = stmt.where(User.name.ilike(fuzzy_search(options.search_term), escape="\\"))
        window = self._published_window(User.published)
        if window is not None:
            stmt = stmt.where(window)

        sort = options.sort
        if sort in (SortType.HOT, SortType.ACTIVE):
            stmt = stmt.order_by(func.hot_rank(total_score, User.published).desc())
        elif sort is SortType.MOST_COMMENTS:
            stmt = stmt.order_by(aggregates["number_of_comments"].desc())
        elif sort.is_top:
            stmt = stmt.order_by(total_score.desc())
        return stmt.order_by(User.published.desc(), User.id.desc())
