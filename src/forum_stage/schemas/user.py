"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserView(BaseModel):
    """Public view of an account with its activity aggregates."""

    id: int
    name: str
    preferred_username: str | None = None
    admin: bool
    banned: bool
    published: datetime
    number_of_posts: int = 0
    post_score: int = 0
    number_of_comments: int = 0
    comment_score: int = 0

    model_config = ConfigDict(from_attributes=True)


class Register(BaseModel):
    """Command creating a new account."""

    username: str = Field(..., min_length=1, max_length=20)
    email: str | None = None
    password: str = Field(..., min_length=1)
    password_verify: str
    admin: bool = False
    show_nsfw: bool = False


class LoginResponse(BaseModel):
    """Token issued after registration."""

    jwt: str
