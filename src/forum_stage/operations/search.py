"""Search and moderation log handlers."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_stage.core.claims import Claims
from forum_stage.core.errors import AuthError
from forum_stage.queries import SearchType, SortType
from forum_stage.schemas.modlog import GetModlog, GetModlogResponse
from forum_stage.schemas.search import Search, SearchResponse
from forum_stage.services.modlog import ModlogAggregator
from forum_stage.services.search import SearchAggregator

from .base import Operation

logger = logging.getLogger(__name__)


class SearchOperation(Operation[Search, SearchResponse]):
    """Search posts, comments, communities and users.

    A missing or unusable token searches anonymously instead of failing.
    """

    request_model = Search
    response_model = SearchResponse

    def _actor(self) -> Claims | None:
        if not self.data.auth:
            return None
        try:
            return self.authenticate(self.data.auth)
        except AuthError:
            logger.debug("Ignoring invalid token on search")
            return None

    def perform(self, db: Session) -> SearchResponse:
        data = self.data
        actor = self._actor()
        sort = SortType.parse(data.sort)
        kind = SearchType.parse(data.type_)
        return SearchAggregator(db, **self.context.limits).search(
            data.q,
            kind,
            sort=sort,
            community_id=data.community_id,
            page=data.page,
            limit=data.limit,
            actor=actor,
        )


class GetModlogOperation(Operation[GetModlog, GetModlogResponse]):
    request_model = GetModlog
    response_model = GetModlogResponse

    def perform(self, db: Session) -> GetModlogResponse:
        data = self.data
        return ModlogAggregator(db, **self.context.limits).list(
            community_id=data.community_id,
            mod_user_id=data.mod_user_id,
            page=data.page,
            limit=data.limit,
        )
