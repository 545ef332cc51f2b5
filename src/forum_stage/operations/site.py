"""Site configuration and ownership handlers."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_stage.core.errors import AuthorizationError, ConflictError, NotFoundError
from forum_stage.models import Category, ModAdd
from forum_stage.repositories.site_repo import SiteRepository
from forum_stage.schemas.community import CategoryView, ListCategories, ListCategoriesResponse
from forum_stage.schemas.site import (
    CreateSite,
    EditSite,
    GetSite,
    GetSiteResponse,
    SiteResponse,
    SiteView,
    TransferSite,
)
from forum_stage.services import user_service

from .base import Operation

logger = logging.getLogger(__name__)


def _site_response(db: Session, site_view: SiteView) -> GetSiteResponse:
    admins = user_service.creator_first(user_service.admins(db), site_view.creator_id)
    return GetSiteResponse(
        site=site_view,
        admins=admins,
        banned=user_service.banned(db),
        online=0,
    )


class ListCategoriesOperation(Operation[ListCategories, ListCategoriesResponse]):
    request_model = ListCategories
    response_model = ListCategoriesResponse

    def perform(self, db: Session) -> ListCategoriesResponse:
        categories = db.execute(select(Category).order_by(Category.id)).scalars()
        return ListCategoriesResponse(
            categories=[CategoryView.model_validate(category) for category in categories]
        )


class CreateSiteOperation(Operation[CreateSite, SiteResponse]):
    """Create the singleton site; the acting admin becomes its creator."""

    request_model = CreateSite
    response_model = SiteResponse

    def perform(self, db: Session) -> SiteResponse:
        data = self.data
        claims = self.authenticate(data.auth)
        self.context.slurs.ensure_clean(data.name, data.description)
        self.require_admin(db, claims)

        repo = SiteRepository(db)
        if repo.exists():
            raise ConflictError("site_already_exists")
        repo.create(
            name=data.name,
            description=data.description,
            creator_id=claims.id,
            enable_downvotes=data.enable_downvotes,
            open_registration=data.open_registration,
            enable_nsfw=data.enable_nsfw,
        )
        db.commit()
        logger.info("Site %s created by user %d", data.name, claims.id)
        return SiteResponse(site=repo.read_view())


class EditSiteOperation(Operation[EditSite, SiteResponse]):
    """Replace the site's settings; the creator never changes here."""

    request_model = EditSite
    response_model = SiteResponse

    def perform(self, db: Session) -> SiteResponse:
        data = self.data
        claims = self.authenticate(data.auth)
        self.context.slurs.ensure_clean(data.name, data.description)
        self.require_admin(db, claims)

        repo = SiteRepository(db)
        repo.update(
            name=data.name,
            description=data.description,
            enable_downvotes=data.enable_downvotes,
            open_registration=data.open_registration,
            enable_nsfw=data.enable_nsfw,
        )
        db.commit()
        return SiteResponse(site=repo.read_view())


class TransferSiteOperation(Operation[TransferSite, GetSiteResponse]):
    """Hand the site to another user, recording an admin-add in the modlog."""

    request_model = TransferSite
    response_model = GetSiteResponse

    def perform(self, db: Session) -> GetSiteResponse:
        data = self.data
        claims = self.authenticate(data.auth)

        repo = SiteRepository(db)
        site = repo.get()
        if site is None:
            raise NotFoundError("couldnt_update_site")
        if site.creator_id != claims.id:
            raise AuthorizationError()
        if user_service.get_user(db, data.user_id) is None:
            raise NotFoundError("couldnt_update_site")

        repo.update(creator_id=data.user_id)
        db.add(ModAdd(mod_user_id=claims.id, other_user_id=data.user_id, removed=False))
        db.commit()
        logger.info("Site transferred from user %d to user %d", claims.id, data.user_id)
        return _site_response(db, repo.read_view())


class GetSiteOperation(Operation[GetSite, GetSiteResponse]):
    """Read the site, running the first-run bootstrap when it is configured."""

    request_model = GetSite
    response_model = GetSiteResponse

    def perform(self, db: Session) -> GetSiteResponse:
        from forum_stage.operations.bootstrap import BootstrapState, SiteBootstrap

        bootstrap = SiteBootstrap(self.context)
        if bootstrap.observe(db) is BootstrapState.NO_SITE and bootstrap.configured:
            bootstrap.run(db)

        site_view = SiteRepository(db).read_view()
        if site_view is None:
            return GetSiteResponse()
        return _site_response(db, site_view)
