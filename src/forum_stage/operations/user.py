"""Account registration."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from forum_stage.core.errors import ConflictError, ValidationError
from forum_stage.repositories.site_repo import SiteRepository
from forum_stage.schemas.user import LoginResponse, Register
from forum_stage.services import user_service

from .base import Operation

logger = logging.getLogger(__name__)


class RegisterOperation(Operation[Register, LoginResponse]):
    """Create an account and log it in.

    Admin registrations bypass closed registration but are only accepted
    while the instance has no admin at all.
    """

    request_model = Register
    response_model = LoginResponse

    def perform(self, db: Session) -> LoginResponse:
        data = self.data
        settings = self.context.settings

        if not data.admin:
            site = SiteRepository(db).get()
            if not settings.enable_registration or (site is not None and not site.open_registration):
                raise ValidationError("registration_closed")

        if data.password != data.password_verify:
            raise ValidationError("passwords_dont_match")

        self.context.slurs.ensure_clean(data.username)

        if data.admin and user_service.count_admins(db) > 0:
            raise ConflictError("admin_already_created")

        user = user_service.create_user(
            db,
            name=data.username,
            password=data.password,
            email=data.email,
            admin=data.admin,
            show_nsfw=data.show_nsfw,
        )
        db.commit()
        logger.info("Registered user %s (admin=%s)", user.name, user.admin)
        return LoginResponse(jwt=self.context.claims.encode(user))
