"""Community-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CategoryView(BaseModel):
    """Community category."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CommunityView(BaseModel):
    """Community joined with its creator, category and activity counts."""

    id: int
    name: str
    title: str
    description: str | None = None
    category_id: int
    creator_id: int
    removed: bool
    deleted: bool
    nsfw: bool
    published: datetime
    updated: datetime | None = None
    creator_name: str
    category_name: str
    number_of_subscribers: int
    number_of_posts: int
    number_of_comments: int
    hot_rank: int
    user_id: int | None = None
    subscribed: bool | None = None

    model_config = ConfigDict(from_attributes=True)


class ListCategories(BaseModel):
    """Command listing every category."""


class ListCategoriesResponse(BaseModel):
    categories: list[CategoryView]
