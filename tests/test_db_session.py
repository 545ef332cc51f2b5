# tests/test_db_session.py
"""Committed rows must not survive into the next test."""

from sqlalchemy import func, select

from forum_stage.models import Site, User
from forum_stage.repositories.site_repo import SiteRepository


def _counts(db_session) -> tuple[int, int]:
    users = db_session.execute(select(func.count(User.id))).scalar_one()
    sites = db_session.execute(select(func.count(Site.id))).scalar_one()
    return users, sites


def test_commit_site_and_admin(db_session, admin) -> None:
    SiteRepository(db_session).create(
        name="Leftover",
        description=None,
        creator_id=admin.id,
        enable_downvotes=True,
        open_registration=True,
        enable_nsfw=False,
    )
    db_session.commit()

    assert _counts(db_session) == (1, 1)


def test_previous_commit_is_gone(db_session) -> None:
    assert _counts(db_session) == (0, 0)


def test_admin_fixture_can_be_recreated(db_session, admin) -> None:
    assert _counts(db_session) == (1, 0)
