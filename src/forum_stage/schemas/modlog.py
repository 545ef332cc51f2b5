"""Moderation log Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _ModActionView(BaseModel):
    id: int
    mod_user_id: int
    mod_user_name: str
    when_: datetime

    model_config = ConfigDict(from_attributes=True)


class ModRemovePostView(_ModActionView):
    post_id: int
    post_name: str
    reason: str | None = None
    removed: bool
    community_id: int
    community_name: str


class ModLockPostView(_ModActionView):
    post_id: int
    post_name: str
    locked: bool
    community_id: int
    community_name: str


class ModStickyPostView(_ModActionView):
    post_id: int
    post_name: str
    stickied: bool
    community_id: int
    community_name: str


class ModRemoveCommentView(_ModActionView):
    comment_id: int
    comment_content: str
    comment_user_id: int
    comment_user_name: str
    post_id: int
    post_name: str
    reason: str | None = None
    removed: bool
    community_id: int
    community_name: str


class ModRemoveCommunityView(_ModActionView):
    community_id: int
    community_name: str
    reason: str | None = None
    removed: bool
    expires: datetime | None = None


class ModBanFromCommunityView(_ModActionView):
    other_user_id: int
    other_user_name: str
    community_id: int
    community_name: str
    reason: str | None = None
    banned: bool
    expires: datetime | None = None


class ModBanView(_ModActionView):
    other_user_id: int
    other_user_name: str
    reason: str | None = None
    banned: bool
    expires: datetime | None = None


class ModAddCommunityView(_ModActionView):
    other_user_id: int
    other_user_name: str
    community_id: int
    community_name: str
    removed: bool


class ModAddView(_ModActionView):
    other_user_id: int
    other_user_name: str
    removed: bool


class GetModlog(BaseModel):
    """Command reading the moderation log, optionally for one community or moderator."""

    mod_user_id: int | None = None
    community_id: int | None = None
    page: int | None = None
    limit: int | None = None


class GetModlogResponse(BaseModel):
    """The nine action lists, newest first.

    ``removed_communities``, ``banned`` and ``added`` are site-wide and stay
    empty when the log was requested for a single community.
    """

    removed_posts: list[ModRemovePostView] = Field(default_factory=list)
    locked_posts: list[ModLockPostView] = Field(default_factory=list)
    stickied_posts: list[ModStickyPostView] = Field(default_factory=list)
    removed_comments: list[ModRemoveCommentView] = Field(default_factory=list)
    removed_communities: list[ModRemoveCommunityView] = Field(default_factory=list)
    banned_from_community: list[ModBanFromCommunityView] = Field(default_factory=list)
    banned: list[ModBanView] = Field(default_factory=list)
    added_to_community: list[ModAddCommunityView] = Field(default_factory=list)
    added: list[ModAddView] = Field(default_factory=list)
