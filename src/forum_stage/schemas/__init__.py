"""
Pydantic schemas for operation commands, responses and entity views.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import CommentView
from .community import CategoryView, CommunityView, ListCategories, ListCategoriesResponse
from .modlog import GetModlog, GetModlogResponse
from .post import PostView
from .search import Search, SearchResponse
from .site import (
    CreateSite,
    EditSite,
    GetSite,
    GetSiteResponse,
    SiteResponse,
    SiteView,
    TransferSite,
)
from .user import LoginResponse, Register, UserView

__all__ = [
    "CommentView",
    "CategoryView", "CommunityView", "ListCategories", "ListCategoriesResponse",
    "GetModlog", "GetModlogResponse",
    "PostView",
    "Search", "SearchResponse",
    "CreateSite", "EditSite", "GetSite", "GetSiteResponse", "SiteResponse", "SiteView",
    "TransferSite",
    "LoginResponse", "Register", "UserView",
]
