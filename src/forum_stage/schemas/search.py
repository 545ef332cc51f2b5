"""Search Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from .comment import CommentView
from .community import CommunityView
from .post import PostView
from .user import UserView


class Search(BaseModel):
    """Free-text search across one or all entity kinds.

    ``type`` and ``sort`` stay plain strings here; they are parsed by the
    handler so unknown values surface as ``ValidationError`` codes.
    """

    q: str
    type_: str = Field(..., alias="type")
    community_id: int | None = None
    sort: str
    page: int | None = None
    limit: int | None = None
    auth: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class SearchResponse(BaseModel):
    """Every list is present; kinds that were not searched are empty."""

    type_: str = Field(..., alias="type")
    comments: list[CommentView] = Field(default_factory=list)
    posts: list[PostView] = Field(default_factory=list)
    communities: list[CommunityView] = Field(default_factory=list)
    users: list[UserView] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
