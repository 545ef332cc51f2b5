"""Community listings."""

from __future__ import annotations

from sqlalchemy import Select, func, or_, select

from forum_stage.models import Category, Comment, Community, CommunityFollower, Post, User
from forum_stage.queries.base import QueryBuilder
from forum_stage.queries.options import SortType, fuzzy_search
from forum_stage.schemas.community import CommunityView

__all__ = ["CommunityQueryBuilder"]


class CommunityQueryBuilder(QueryBuilder[CommunityView]):
    """Live communities with subscriber, post and comment counts."""

    view = CommunityView
    supported_options = frozenset({"search_term", "for_creator_id", "show_nsfw", "my_user_id"})

    def statement(self) -> Select:
        options = self.options

        subscribers = (
            select(func.count(CommunityFollower.id))
            .where(CommunityFollower.community_id == Community.id)
            .scalar_subquery()
        )
        number_of_posts = (
            select(func.count(Post.id)).where(Post.community_id == Community.id).scalar_subquery()
        )
        number_of_comments = (
            select(func.count(Comment.id))
            .select_from(Comment)
            .join(Post, Post.id == Comment.post_id)
            .where(Post.community_id == Community.id)
            .scalar_subquery()
        )
        hot_rank = func.hot_rank(subscribers, Community.published)

        columns = [
            Community.id,
            Community.name,
            Community.title,
            Community.description,
            Community.category_id,
            Community.creator_id,
            Community.removed,
            Community.deleted,
            Community.nsfw,
            Community.published,
            Community.updated,
            User.name.label("creator_name"),
            Category.name.label("category_name"),
            subscribers.label("number_of_subscribers"),
            number_of_posts.label("number_of_posts"),
            number_of_comments.label("number_of_comments"),
            hot_rank.label("hot_rank"),
        ]
        if options.my_user_id is not None:
            columns += [
                self._actor_column(),
                select(CommunityFollower.id)
                .where(
                    CommunityFollower.community_id == Community.id,
                    CommunityFollower.user_id == options.my_user_id,
                )
                .exists()
                .label("subscribed"),
            ]

        stmt = (
            select(*columns)
            .select_from(Community)
            .join(User, User.id == Community.creator_id)
            .join(Category, Category.id == Community.category_id)
            .where(Community.removed.is_(False), Community.deleted.is_(False))
        )

        if not options.show_nsfw:
            stmt = stmt.where(Community.nsfw.is_(False))
        if options.for_creator_id is not None:
            stmt = stmt.where(Community.creator_id == options.for_creator_id)
        if options.search_term is not None:
            pattern = fuzzy_search(options.search_term)
            stmt = stmt.where(
                or_(
                    Community.name.ilike(pattern, escape="\\"),
                    Community.title.ilike(pattern, escape="\\"),
                )
            )
        window = self._published_window(Community.published)
        if window is not None:
            stmt = stmt.where(window)

        sort = options.sort
        if sort in (SortType.HOT, SortType.ACTIVE):
            stmt = stmt.order_by(hot_rank.desc())
        elif sort is SortType.MOST_COMMENTS:
            stmt = stmt.order_by(number_of_comments.desc())
        elif sort.is_top:
            stmt = stmt.order_by(subscribers.desc())
        return stmt.order_by(Community.published.desc(), Community.id.desc())
