"""Comment-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommentView(BaseModel):
    """Comment joined with its author, post and community."""

    id: int
    creator_id: int
    post_id: int
    parent_id: int | None = None
    content: str
    removed: bool
    read: bool
    deleted: bool
    published: datetime
    updated: datetime | None = None
    community_id: int
    community_name: str
    post_name: str
    creator_name: str
    score: int
    upvotes: int
    downvotes: int
    user_id: int | None = None
    my_vote: int | None = None

    model_config = ConfigDict(from_attributes=True)
