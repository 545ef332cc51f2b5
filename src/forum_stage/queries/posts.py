"""Post listings."""

from __future__ import annotations

from sqlalchemy import Select, case, func, or_, select

from forum_stage.models import Comment, Community, CommunityFollower, Post, PostLike, User
from forum_stage.queries.base import QueryBuilder
from forum_stage.queries.options import SortType, fuzzy_search
from forum_stage.schemas.post import PostView

__all__ = ["PostQueryBuilder"]


class PostQueryBuilder(QueryBuilder[PostView]):
    """Posts joined with author and community, excluding removed or deleted ones."""

    view = PostView
    supported_options = frozenset(
        {
            "search_term",
            "url_search",
            "for_creator_id",
            "for_community_id",
            "show_nsfw",
            "my_user_id",
        }
    )

    def statement(self) -> Select:
        options = self.options

        score = (
            select(func.coalesce(func.sum(PostLike.score), 0))
            .where(PostLike.post_id == Post.id)
            .scalar_subquery()
        )
        upvotes = (
            select(func.count(PostLike.id))
            .where(PostLike.post_id == Post.id, PostLike.score == 1)
            .scalar_subquery()
        )
        downvotes = (
            select(func.count(PostLike.id))
            .where(PostLike.post_id == Post.id, PostLike.score == -1)
            .scalar_subquery()
        )
        number_of_comments = (
            select(func.count(Comment.id)).where(Comment.post_id == Post.id).scalar_subquery()
        )
        newest_comment = (
            select(func.max(Comment.published)).where(Comment.post_id == Post.id).scalar_subquery()
        )
        hot_rank = func.hot_rank(score, Post.published)

        columns = [
            Post.id,
            Post.name,
            Post.url,
            Post.body,
            Post.creator_id,
            Post.community_id,
            Post.removed,
            Post.locked,
            Post.stickied,
            Post.nsfw,
            Post.deleted,
            Post.published,
            Post.updated,
            User.name.label("creator_name"),
            Community.name.label("community_name"),
            Community.removed.label("community_removed"),
            Community.deleted.label("community_deleted"),
            Community.nsfw.label("community_nsfw"),
            number_of_comments.label("number_of_comments"),
            score.label("score"),
            upvotes.label("upvotes"),
            downvotes.label("downvotes"),
            hot_rank.label("hot_rank"),
        ]
        if options.my_user_id is not None:
            columns += [
                self._actor_column(),
                select(PostLike.score)
                .where(PostLike.post_id == Post.id, PostLike.user_id == options.my_user_id)
                .scalar_subquery()
                .label("my_vote"),
                select(CommunityFollower.id)
                .where(
                    CommunityFollower.community_id == Post.community_id,
                    CommunityFollower.user_id == options.my_user_id,
                )
                .exists()
                .label("subscribed"),
            ]

        stmt = (
            select(*columns)
            .select_from(Post)
            .join(User, User.id == Post.creator_id)
            .join(Community, Community.id == Post.community_id)
            .where(
                Post.removed.is_(False),
                Post.deleted.is_(False),
                Community.removed.is_(False),
                Community.deleted.is_(False),
            )
        )

        if not options.show_nsfw:
            stmt = stmt.where(Post.nsfw.is_(False), Community.nsfw.is_(False))
        if options.for_community_id is not None:
            stmt = stmt.where(Post.community_id == options.for_community_id)
        if options.for_creator_id is not None:
            stmt = stmt.where(Post.creator_id == options.for_creator_id)
        if options.search_term is not None:
            pattern = fuzzy_search(options.search_term)
            stmt = stmt.where(
                or_(Post.name.ilike(pattern, escape="\\"), Post.body.ilike(pattern, escape="\\"))
            )
        if options.url_search is not None:
            stmt = stmt.where(Post.url == options.url_search)
        window = self._published_window(Post.published)
        if window is not None:
            stmt = stmt.where(window)

        # Inside a single community, stickied posts lead every sort.
        if options.for_community_id is not None:
            stmt = stmt.order_by(Post.stickied.desc())

        sort = options.sort
        if sort is SortType.ACTIVE:
            last_activity = case(
                (newest_comment > Post.published, newest_comment),
                else_=Post.published,
            )
            stmt = stmt.order_by(func.hot_rank(score, last_activity).desc())
        elif sort is SortType.HOT:
            stmt = stmt.order_by(hot_rank.desc())
        elif sort is SortType.MOST_COMMENTS:
            stmt = stmt.order_by(number_of_comments.desc())
        elif sort.is_top:
            stmt = stmt.order_by(score.desc())
        return stmt.order_by(Post.published.desc(), Post.id.desc())
