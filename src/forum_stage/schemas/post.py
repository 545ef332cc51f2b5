"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class PostView(BaseModel):
    """Post joined with its author, community and vote aggregates.

    ``user_id``, ``my_vote`` and ``subscribed`` are only populated when the
    listing was built for a known actor.
    """

    id: int
    name: str
    url: str | None = None
    body: str | None = None
    creator_id: int
    community_id: int
    removed: bool
    locked: bool
    stickied: bool
    nsfw: bool
    deleted: bool
    published: datetime
    updated: datetime | None = None
    creator_name: str
    community_name: str
    community_removed: bool
    community_deleted: bool
    community_nsfw: bool
    number_of_comments: int
    score: int
    upvotes: int
    downvotes: int
    hot_rank: int
    user_id: int | None = None
    my_vote: int | None = None
    subscribed: bool | None = None

    model_config = ConfigDict(from_attributes=True)
