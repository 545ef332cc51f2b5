"""First-run bootstrap of the admin account and the site.

The bootstrap is a small state machine::

    no_site --(register admin)--> bootstrapping --(create site)--> site_exists

Each arrow is a method on :class:`SiteBootstrap` so the intermediate state
can be observed. Concurrent bootstraps are safe: the site's singleton key
makes the loser's create fail with ``site_already_exists``, which is absorbed
here, and an admin already registered under the configured name is reused.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from forum_stage.core.errors import ConflictError, ValidationError
from forum_stage.repositories.site_repo import SiteRepository
from forum_stage.schemas.site import CreateSite
from forum_stage.schemas.user import Register
from forum_stage.services import user_service

from .base import OperationContext
from .site import CreateSiteOperation
from .user import RegisterOperation

logger = logging.getLogger(__name__)


class BootstrapState(StrEnum):
    NO_SITE = "no_site"
    BOOTSTRAPPING = "bootstrapping"
    SITE_EXISTS = "site_exists"


class SiteBootstrap:
    """Drive one bootstrap attempt from the configured setup values."""

    def __init__(self, context: OperationContext) -> None:
        self.context = context
        self.state = BootstrapState.NO_SITE
        self.admin_token: str | None = None

    @property
    def configured(self) -> bool:
        return self.context.settings.setup is not None

    def observe(self, db: Session) -> BootstrapState:
        """Sync ``state`` with the store."""
        if SiteRepository(db).exists():
            self.state = BootstrapState.SITE_EXISTS
        return self.state

    def register_admin(self, db: Session) -> str:
        """``no_site -> bootstrapping``: register the admin and keep its token."""
        setup = self.context.settings.setup
        if setup is None:
            raise RuntimeError("first-run setup is not configured")
        if self.state is not BootstrapState.NO_SITE:
            raise RuntimeError(f"cannot register the admin from state {self.state}")

        try:
            token = RegisterOperation(self._register_command(), self.context).perform(db).jwt
            logger.info("Admin %s created", setup.admin_username)
        except ConflictError:
            existing = user_service.get_user_by_name(db, setup.admin_username)
            if existing is None or not existing.admin:
                raise
            logger.info("Admin %s already registered, reusing it", setup.admin_username)
            token = self.context.claims.encode(existing)

        self.admin_token = token
        self.state = BootstrapState.BOOTSTRAPPING
        return token

    def create_site(self, db: Session) -> None:
        """``bootstrapping -> site_exists``: create the site as the admin."""
        setup = self.context.settings.setup
        if setup is None or self.admin_token is None:
            raise RuntimeError("the admin must be registered before the site is created")

        try:
            CreateSiteOperation(self._site_command(self.admin_token), self.context).perform(db)
            logger.info("Site %s created", setup.site_name)
        except ConflictError as err:
            if err.code != "site_already_exists":
                raise
            logger.info("Site already created by a concurrent bootstrap")
        self.state = BootstrapState.SITE_EXISTS

    def _register_command(self) -> Register:
        setup = self.context.settings.setup
        try:
            return Register(
                username=setup.admin_username,
                email=setup.admin_email,
                password=setup.admin_password,
                password_verify=setup.admin_password,
                admin=True,
                show_nsfw=True,
            )
        except PydanticValidationError as err:
            raise ValidationError("invalid_setup") from err

    def _site_command(self, token: str) -> CreateSite:
        setup = self.context.settings.setup
        try:
            return CreateSite(
                name=setup.site_name,
                description=None,
                enable_downvotes=False,
                open_registration=False,
                enable_nsfw=False,
                auth=token,
            )
        except PydanticValidationError as err:
            raise ValidationError("invalid_setup") from err

    def run(self, db: Session) -> BootstrapState:
        """Advance through every remaining transition.

        Both commands are checked against the setup values before anything
        is written, so a bad configuration leaves the store untouched.

        Raises:
            ValidationError: ``invalid_setup`` if the setup values are rejected.
        """
        if self.state is BootstrapState.NO_SITE:
            self._register_command()
            self._site_command("")
            self.register_admin(db)
        if self.state is BootstrapState.BOOTSTRAPPING:
            self.create_site(db)
        return self.state
