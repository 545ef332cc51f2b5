# src/forum_stage/models/__init__.py
"""SQLAlchemy models for the forum stage service."""

from .comment import Comment, CommentLike
from .community import Category, Community, CommunityFollower, CommunityModerator
from .moderation import (
    ModAdd,
    ModAddCommunity,
    ModBan,
    ModBanFromCommunity,
    ModLockPost,
    ModRemoveComment,
    ModRemoveCommunity,
    ModRemovePost,
    ModStickyPost,
)
from .post import Post, PostLike
from .site import SITE_ID, Site
from .user import User

__all__ = [
    "Category", "Community", "CommunityFollower", "CommunityModerator",
    "Comment", "CommentLike",
    "ModAdd", "ModAddCommunity", "ModBan", "ModBanFromCommunity", "ModLockPost",
    "ModRemoveComment", "ModRemoveCommunity", "ModRemovePost", "ModStickyPost",
    "Post", "PostLike",
    "SITE_ID", "Site",
    "User",
]
