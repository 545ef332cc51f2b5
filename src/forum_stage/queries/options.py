"""Listing configuration shared by every entity query builder."""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from forum_stage.core.errors import ValidationError

__all__ = [
    "ListingOptions",
    "SearchType",
    "SortType",
    "fuzzy_search",
    "limit_and_offset",
]


class SortType(StrEnum):
    ACTIVE = "Active"
    HOT = "Hot"
    NEW = "New"
    TOP_DAY = "TopDay"
    TOP_WEEK = "TopWeek"
    TOP_MONTH = "TopMonth"
    TOP_YEAR = "TopYear"
    TOP_ALL = "TopAll"
    MOST_COMMENTS = "MostComments"

    @classmethod
    def parse(cls, value: str) -> SortType:
        try:
            return cls(value)
        except ValueError as err:
            raise ValidationError("invalid_sort_type") from err

    @property
    def is_top(self) -> bool:
        return self.name.startswith("TOP_")

    @property
    def window(self) -> timedelta | None:
        """How far back a Top* sort looks; None for every other sort."""
        return _TOP_WINDOWS.get(self)


_TOP_WINDOWS = {
    SortType.TOP_DAY: timedelta(days=1),
    SortType.TOP_WEEK: timedelta(weeks=1),
    SortType.TOP_MONTH: timedelta(days=30),
    SortType.TOP_YEAR: timedelta(days=365),
}


class SearchType(StrEnum):
    ALL = "All"
    COMMENTS = "Comments"
    POSTS = "Posts"
    COMMUNITIES = "Communities"
    USERS = "Users"
    URL = "Url"

    @classmethod
    def parse(cls, value: str) -> SearchType:
        try:
            return cls(value)
        except ValueError as err:
            raise ValidationError("invalid_search_type") from err


def limit_and_offset(
    page: int | None,
    limit: int | None,
    *,
    default_limit: int = 10,
    max_limit: int = 50,
) -> tuple[int, int]:
    """Resolve 1-based paging input into ``(limit, offset)``.

    Limits above ``max_limit`` are clamped; a page or limit below 1 is an
    input error.
    """
    page = 1 if page is None else page
    if page < 1:
        raise ValidationError("invalid_page")
    limit = default_limit if limit is None else limit
    if limit < 1:
        raise ValidationError("invalid_limit")
    limit = min(limit, max_limit)
    return limit, (page - 1) * limit


def fuzzy_search(term: str) -> str:
    """Turn a search term into a LIKE pattern where spaces match anything."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return "%" + escaped.strip().replace(" ", "%") + "%"


class ListingOptions(BaseModel):
    """Every option a listing accepts, with its default.

    Attributes:
        sort: Ordering; Top* sorts also restrict to their time window.
        search_term: Case-insensitive fuzzy match on the entity's text fields.
        url_search: Exact URL match; posts only, exclusive with ``search_term``.
        for_creator_id: Only rows authored by this user.
        for_community_id: Only rows inside this community.
        show_nsfw: Include NSFW rows; excluded by default.
        my_user_id: Actor for personalized fields such as ``my_vote``.
        page: 1-based page number.
        limit: Page size; ``None`` means the configured default.
    """

    sort: SortType = SortType.HOT
    search_term: str | None = None
    url_search: str | None = None
    for_creator_id: int | None = None
    for_community_id: int | None = None
    show_nsfw: bool = False
    my_user_id: int | None = None
    page: int | None = None
    limit: int | None = None
    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=50, ge=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_search_modes(self) -> ListingOptions:
        if self.search_term is not None and self.url_search is not None:
            raise ValidationError("url_and_text_search_conflict")
        return self

    def limit_and_offset(self) -> tuple[int, int]:
        return limit_and_offset(
            self.page,
            self.limit,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )
