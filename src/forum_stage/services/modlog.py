"""Bundle the moderation log tables into one paged response."""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum_stage.queries import limit_and_offset
from forum_stage.queries import modlog as tables
from forum_stage.queries.modlog import ModlogPage
from forum_stage.schemas.modlog import GetModlogResponse

__all__ = ["ModlogAggregator"]


class ModlogAggregator:
    """Read every moderation table with the same page and filters.

    The six community-scoped tables are always read. Community removals,
    site bans and admin additions only exist site-wide, so they are read only
    when no community was asked for and are left empty otherwise.
    """

    def __init__(self, db: Session, *, default_limit: int = 10, max_limit: int = 50) -> None:
        self.db = db
        self.default_limit = default_limit
        self.max_limit = max_limit

    def list(
        self,
        *,
        community_id: int | None = None,
        mod_user_id: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> GetModlogResponse:
        limit, offset = limit_and_offset(
            page,
            limit,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )
        scoped = ModlogPage(limit, offset, mod_user_id=mod_user_id, community_id=community_id)

        response = GetModlogResponse(
            removed_posts=tables.REMOVED_POSTS.list(self.db, scoped),
            locked_posts=tables.LOCKED_POSTS.list(self.db, scoped),
            stickied_posts=tables.STICKIED_POSTS.list(self.db, scoped),
            removed_comments=tables.REMOVED_COMMENTS.list(self.db, scoped),
            banned_from_community=tables.BANNED_FROM_COMMUNITY.list(self.db, scoped),
            added_to_community=tables.ADDED_TO_COMMUNITY.list(self.db, scoped),
        )

        if community_id is None:
            site_wide = ModlogPage(limit, offset, mod_user_id=mod_user_id)
            response.removed_communities = tables.REMOVED_COMMUNITIES.list(self.db, site_wide)
            response.banned = tables.BANNED.list(self.db, site_wide)
            response.added = tables.ADDED.list(self.db, site_wide)
        return response
