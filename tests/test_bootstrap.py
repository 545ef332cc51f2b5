# tests/test_bootstrap.py
"""Tests for first-run bootstrap of the admin account and site."""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func, select

from forum_stage.core.errors import ConflictError, ValidationError
from forum_stage.core.settings import SetupSettings
from forum_stage.models import User
from forum_stage.operations import BootstrapState, OperationContext, SiteBootstrap, perform
from forum_stage.repositories.site_repo import SiteRepository
from forum_stage.schemas import GetSite

LONG_SITE_NAME = "A community forum for everyone"


def _user_count(db_session) -> int:
    return db_session.execute(select(func.count(User.id))).scalar_one()


def test_get_site_bootstraps_once(db_session, setup_context, caplog) -> None:
    caplog.set_level(logging.INFO, logger="forum_stage.operations.bootstrap")

    first = perform(GetSite(), db_session, setup_context)
    second = perform(GetSite(), db_session, setup_context)

    assert first.site.name == "Stage"
    assert first.site.creator_name == "root"
    assert first.site.open_registration is False
    assert first.site.enable_downvotes is False
    assert [user.name for user in first.admins] == ["root"]
    assert second.site == first.site
    assert _user_count(db_session) == 1
    assert "Admin root created" in caplog.text
    assert "Site Stage created" in caplog.text


def test_transitions_are_observable(db_session, setup_context) -> None:
    bootstrap = SiteBootstrap(setup_context)
    assert bootstrap.observe(db_session) is BootstrapState.NO_SITE

    token = bootstrap.register_admin(db_session)
    assert bootstrap.state is BootstrapState.BOOTSTRAPPING
    assert setup_context.claims.decode(token).username == "root"
    assert SiteRepository(db_session).get() is None

    bootstrap.create_site(db_session)
    assert bootstrap.state is BootstrapState.SITE_EXISTS
    assert SiteBootstrap(setup_context).observe(db_session) is BootstrapState.SITE_EXISTS


def test_site_created_concurrently_is_kept(db_session, setup_context, member) -> None:
    bootstrap = SiteBootstrap(setup_context)
    bootstrap.register_admin(db_session)
    SiteRepository(db_session).create(
        name="Winner",
        description=None,
        creator_id=member.id,
        enable_downvotes=True,
        open_registration=True,
        enable_nsfw=False,
    )
    db_session.commit()

    bootstrap.create_site(db_session)

    assert bootstrap.state is BootstrapState.SITE_EXISTS
    assert SiteRepository(db_session).get().name == "Winner"


def test_admin_registered_concurrently_is_reused(db_session, setup_context, make_user) -> None:
    root = make_user("root", admin=True)

    state = SiteBootstrap(setup_context).run(db_session)

    assert state is BootstrapState.SITE_EXISTS
    assert SiteRepository(db_session).get().creator_id == root.id
    assert _user_count(db_session) == 1


def test_foreign_admin_blocks_bootstrap(db_session, setup_context, admin) -> None:
    with pytest.raises(ConflictError) as excinfo:
        perform(GetSite(), db_session, setup_context)
    assert excinfo.value.code == "admin_already_created"
    assert SiteRepository(db_session).get() is None


def test_no_bootstrap_without_setup(db_session, context) -> None:
    bootstrap = SiteBootstrap(context)

    assert not bootstrap.configured
    with pytest.raises(RuntimeError):
        bootstrap.register_admin(db_session)
    assert perform(GetSite(), db_session, context).site is None


def test_setup_rejects_overlong_site_name() -> None:
    with pytest.raises(PydanticValidationError):
        SetupSettings(admin_username="root", admin_password="hunter22", site_name=LONG_SITE_NAME)


def test_invalid_setup_fails_before_writing(db_session, test_settings) -> None:
    setup = SetupSettings.model_construct(
        admin_username="root",
        admin_password="hunter22",
        admin_email=None,
        site_name=LONG_SITE_NAME,
    )
    context = OperationContext.from_settings(test_settings.model_copy(update={"setup": setup}))

    with pytest.raises(ValidationError) as excinfo:
        perform(GetSite(), db_session, context)

    assert excinfo.value.code == "invalid_setup"
    assert _user_count(db_session) == 0
    assert SiteRepository(db_session).get() is None
