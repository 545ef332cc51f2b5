"""Data access helpers for the singleton site row."""
from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_stage.core.errors import ConflictError, NotFoundError
from forum_stage.db.time import naive_now
from forum_stage.models import SITE_ID, Comment, Community, Post, Site, User
from forum_stage.schemas.site import SiteView

__all__ = ["SiteRepository"]


class SiteRepository:
    """Thin wrapper around database access for the site row."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get(self) -> Site | None:
        """Return the site row, or None before the instance is set up."""
        return self.session.get(Site, SITE_ID)

    def exists(self) -> bool:
        return self.get() is not None

    def read_view(self) -> SiteView | None:
        """Return the site joined with its creator and instance-wide counts."""
        stmt = (
            select(
                Site.id,
                Site.name,
                Site.description,
                Site.creator_id,
                Site.published,
                Site.updated,
                Site.enable_downvotes,
                Site.open_registration,
                Site.enable_nsfw,
                User.name.label("creator_name"),
                # Uncorrelated: count every user, not just the joined creator.
                select(func.count(User.id)).correlate(None).scalar_subquery().label("number_of_users"),
                select(func.count(Post.id)).scalar_subquery().label("number_of_posts"),
                select(func.count(Comment.id)).scalar_subquery().label("number_of_comments"),
                select(func.count(Community.id)).scalar_subquery().label("number_of_communities"),
            )
            .select_from(Site)
            .join(User, User.id == Site.creator_id)
            .where(Site.id == SITE_ID)
        )
        row = self.session.execute(stmt).first()
        return SiteView(**row._mapping) if row is not None else None

    def create(
        self,
        *,
        name: str,
        description: str | None,
        creator_id: int,
        enable_downvotes: bool,
        open_registration: bool,
        enable_nsfw: bool,
    ) -> Site:
        """Insert the site row.

        Raises:
            ConflictError: ``site_already_exists`` if the row is already there,
                including when a concurrent request inserted it first.
        """
        site = Site(
            id=SITE_ID,
            name=name,
            description=description,
            creator_id=creator_id,
            enable_downvotes=enable_downvotes,
            open_registration=open_registration,
            enable_nsfw=enable_nsfw,
        )
        try:
            with self.session.begin_nested():
                self.session.add(site)
        except IntegrityError as err:
            raise ConflictError("site_already_exists") from err
        return site

    def update(self, **fields: object) -> Site:
        """Overwrite the given columns and stamp ``updated``.

        Raises:
            NotFoundError: ``couldnt_update_site`` if there is no site yet.
        """
        site = self.get()
        if site is None:
            raise NotFoundError("couldnt_update_site")
        for key, value in fields.items():
            setattr(site, key, value)
        site.updated = naive_now()
        self.session.flush()
        return site
