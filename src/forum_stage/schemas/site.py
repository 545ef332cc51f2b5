"""Site configuration Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserView


class SiteView(BaseModel):
    """The site row joined with its creator and instance-wide counts."""

    id: int
    name: str
    description: str | None = None
    creator_id: int
    published: datetime
    updated: datetime | None = None
    enable_downvotes: bool
    open_registration: bool
    enable_nsfw: bool
    creator_name: str
    number_of_users: int
    number_of_posts: int
    number_of_comments: int
    number_of_communities: int

    model_config = ConfigDict(from_attributes=True)


class CreateSite(BaseModel):
    """Command creating the singleton site."""

    name: str = Field(..., min_length=1, max_length=20)
    description: str | None = None
    enable_downvotes: bool
    open_registration: bool
    enable_nsfw: bool
    auth: str


class EditSite(CreateSite):
    """Command replacing the site's settings; the creator is kept."""


class GetSite(BaseModel):
    """Command reading the site, bootstrapping it on first run."""


class TransferSite(BaseModel):
    """Command handing site ownership to another user."""

    user_id: int
    auth: str


class SiteResponse(BaseModel):
    site: SiteView


class GetSiteResponse(BaseModel):
    site: SiteView | None = None
    admins: list[UserView] = Field(default_factory=list)
    banned: list[UserView] = Field(default_factory=list)
    # Live presence is counted by the broadcast layer, never here.
    online: int = 0
