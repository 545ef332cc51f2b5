"""Common machinery for the per-entity listing builders."""

from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Integer, Select, literal
from sqlalchemy.orm import Session

from forum_stage.core.errors import ValidationError
from forum_stage.db.time import naive_now
from forum_stage.queries.options import ListingOptions

ViewT = TypeVar("ViewT", bound=BaseModel)

# Options whose non-default value changes which rows a listing returns.
_SCOPING_OPTIONS = (
    "search_term",
    "url_search",
    "for_creator_id",
    "for_community_id",
    "show_nsfw",
    "my_user_id",
)


class QueryBuilder(Generic[ViewT]):
    """Compose and run one filtered, sorted, paged listing.

    Subclasses declare the view they produce, the options they understand and
    build the unpaged statement; paging and row mapping happen here.
    """

    view: ClassVar[type[BaseModel]]
    supported_options: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: Session, options: ListingOptions | None = None) -> None:
        self.db = db
        self.options = options or ListingOptions()
        self._check_supported()

    def _check_supported(self) -> None:
        defaults = ListingOptions.model_fields
        for name in _SCOPING_OPTIONS:
            if name in self.supported_options:
                continue
            if getattr(self.options, name) != defaults[name].default:
                raise ValidationError(f"unsupported_option_{name}")

    def statement(self) -> Select:
        raise NotImplementedError

    def list(self) -> list[ViewT]:
        """Execute the listing and return one page of views."""
        limit, offset = self.options.limit_and_offset()
        stmt = self.statement().limit(limit).offset(offset)
        return [self.view(**row._mapping) for row in self.db.execute(stmt)]  # type: ignore[misc]

    def _published_window(self, published: ColumnElement) -> ColumnElement | None:
        window = self.options.sort.window
        if window is None:
            return None
        return published > naive_now() - window

    def _actor_column(self) -> ColumnElement:
        return literal(self.options.my_user_id, Integer).label("user_id")
