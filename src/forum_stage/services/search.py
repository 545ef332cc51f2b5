"""Fan a free-text query out across the searchable entity kinds."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_stage.core.claims import Claims
from forum_stage.queries import (
    CommentQueryBuilder,
    CommunityQueryBuilder,
    ListingOptions,
    PostQueryBuilder,
    SearchType,
    SortType,
    UserQueryBuilder,
)
from forum_stage.schemas.search import SearchResponse

logger = logging.getLogger(__name__)

__all__ = ["SearchAggregator"]


class SearchAggregator:
    """Run one listing per selected entity kind and bundle the results.

    Lists for kinds that were not selected come back empty, so the response
    has the same shape whatever ``kind`` is.
    """

    def __init__(self, db: Session, *, default_limit: int = 10, max_limit: int = 50) -> None:
        self.db = db
        self.default_limit = default_limit
        self.max_limit = max_limit

    def _options(self, sort: SortType, page: int | None, limit: int | None, **extra) -> ListingOptions:
        return ListingOptions(
            sort=sort,
            page=page,
            limit=limit,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
            **extra,
        )

    def search(
        self,
        term: str,
        kind: SearchType,
        *,
        sort: SortType,
        community_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
        actor: Claims | None = None,
    ) -> SearchResponse:
        my_user_id = actor.id if actor else None
        response = SearchResponse(type_=kind.value)

        if kind in (SearchType.POSTS, SearchType.ALL):
            response.posts = PostQueryBuilder(
                self.db,
                self._options(
                    sort,
                    page,
                    limit,
                    search_term=term,
                    for_community_id=community_id,
                    show_nsfw=True,
                    my_user_id=my_user_id,
                ),
            ).list()
        if kind in (SearchType.COMMENTS, SearchType.ALL):
            response.comments = CommentQueryBuilder(
                self.db,
                self._options(
                    sort,
                    page,
                    limit,
                    search_term=term,
                    show_nsfw=True,
                    my_user_id=my_user_id,
                ),
            ).list()
        if kind in (SearchType.COMMUNITIES, SearchType.ALL):
            response.communities = CommunityQueryBuilder(
                self.db,
                self._options(
                    sort,
                    page,
                    limit,
                    search_term=term,
                    show_nsfw=bool(actor and actor.show_nsfw),
                    my_user_id=my_user_id,
                ),
            ).list()
        if kind in (SearchType.USERS, SearchType.ALL):
            response.users = UserQueryBuilder(
                self.db,
                self._options(sort, page, limit, search_term=term),
            ).list()
        if kind is SearchType.URL:
            response.posts = PostQueryBuilder(
                self.db,
                self._options(
                    sort,
                    page,
                    limit,
                    url_search=term,
                    for_community_id=community_id,
                    show_nsfw=True,
                    my_user_id=my_user_id,
                ),
            ).list()

        logger.debug(
            "search %s for %r: %d posts, %d comments, %d communities, %d users",
            kind.value,
            term,
            len(response.posts),
            len(response.comments),
            len(response.communities),
            len(response.users),
        )
        return response
