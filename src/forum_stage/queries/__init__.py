"""Filtered, sorted and paged listings over the searchable entities."""

from .comments import CommentQueryBuilder
from .communities import CommunityQueryBuilder
from .options import ListingOptions, SearchType, SortType, limit_and_offset
from .posts import PostQueryBuilder
from .users import UserQueryBuilder, user_view_statement

__all__ = [
    "CommentQueryBuilder",
    "CommunityQueryBuilder",
    "ListingOptions",
    "PostQueryBuilder",
    "SearchType",
    "SortType",
    "UserQueryBuilder",
    "limit_and_offset",
    "user_view_statement",
]
