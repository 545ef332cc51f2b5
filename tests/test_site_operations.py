# tests/test_site_operations.py
"""Tests for the site configuration and ownership handlers."""

from types import SimpleNamespace

import pytest
from sqlalchemy import insert, select

from forum_stage.core.errors import (
    AuthError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PolicyError,
)
from forum_stage.models import SITE_ID, Category, ModAdd, Site
from forum_stage.operations import perform
from forum_stage.repositories.site_repo import SiteRepository
from forum_stage.schemas import CreateSite, EditSite, GetSite, ListCategories, TransferSite


def _create(token: str, **overrides) -> CreateSite:
    fields = {
        "name": "Stage",
        "description": "A place to talk",
        "enable_downvotes": True,
        "open_registration": True,
        "enable_nsfw": False,
        "auth": token,
    }
    fields.update(overrides)
    return CreateSite(**fields)


def _edit(token: str, **overrides) -> EditSite:
    return EditSite(**_create(token, **overrides).model_dump())


@pytest.fixture()
def site(db_session, context, admin_token):
    return perform(_create(admin_token), db_session, context).site


class TestCreateSite:
    def test_admin_creates_site(self, db_session, context, admin_token, admin) -> None:
        response = perform(_create(admin_token), db_session, context)

        assert response.site.id == SITE_ID
        assert response.site.name == "Stage"
        assert response.site.creator_id == admin.id
        assert response.site.creator_name == "admin"
        assert response.site.number_of_users == 1
        assert response.site.updated is None

    def test_member_is_refused(self, db_session, context, member_token) -> None:
        with pytest.raises(AuthorizationError) as excinfo:
            perform(_create(member_token), db_session, context)
        assert excinfo.value.code == "not_an_admin"
        assert SiteRepository(db_session).get() is None

    def test_bad_token(self, db_session, context) -> None:
        with pytest.raises(AuthError):
            perform(_create("not-a-token"), db_session, context)

    def test_token_for_missing_user(self, db_session, context) -> None:
        ghost = SimpleNamespace(id=9999, name="ghost", show_nsfw=False)
        token = context.claims.encode(ghost)

        with pytest.raises(AuthError) as excinfo:
            perform(_create(token), db_session, context)
        assert excinfo.value.code == "not_logged_in"

    @pytest.mark.parametrize(
        ("overrides", "code"),
        [
            ({"name": "badword town"}, "No slurs - badword"),
            ({"description": "all NastyTerm, no badword"}, "No slurs - NastyTerm, badword"),
        ],
    )
    def test_slurs_are_refused(self, db_session, context, admin_token, overrides, code) -> None:
        with pytest.raises(PolicyError) as excinfo:
            perform(_create(admin_token, **overrides), db_session, context)
        assert excinfo.value.code == code
        assert SiteRepository(db_session).get() is None

    def test_second_site_conflicts(self, db_session, context, admin_token, site) -> None:
        with pytest.raises(ConflictError) as excinfo:
            perform(_create(admin_token, name="Other"), db_session, context)
        assert excinfo.value.code == "site_already_exists"
        assert SiteRepository(db_session).get().name == "Stage"

    def test_concurrent_insert_maps_to_conflict(self, db_session, admin) -> None:
        db_session.execute(
            insert(Site).values(id=SITE_ID, name="Winner", creator_id=admin.id)
        )

        with pytest.raises(ConflictError) as excinfo:
            SiteRepository(db_session).create(
                name="Loser",
                description=None,
                creator_id=admin.id,
                enable_downvotes=True,
                open_registration=True,
                enable_nsfw=False,
            )
        assert excinfo.value.code == "site_already_exists"
        assert db_session.execute(select(Site.name)).scalar_one() == "Winner"


class TestEditSite:
    def test_admin_edits_site(self, db_session, context, make_user, admin, site) -> None:
        other_admin = make_user("deputy", admin=True)
        token = context.claims.encode(other_admin)

        response = perform(
            _edit(token, name="Renamed", enable_nsfw=True, description=None), db_session, context
        )

        assert response.site.name == "Renamed"
        assert response.site.description is None
        assert response.site.enable_nsfw is True
        assert response.site.creator_id == admin.id
        assert response.site.updated is not None

    def test_member_is_refused(self, db_session, context, member_token, site) -> None:
        with pytest.raises(AuthorizationError):
            perform(_edit(member_token, name="Mine"), db_session, context)
        assert SiteRepository(db_session).get().name == "Stage"

    def test_missing_site(self, db_session, context, admin_token) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            perform(_edit(admin_token), db_session, context)
        assert excinfo.value.code == "couldnt_update_site"

    def test_slurs_are_refused(self, db_session, context, admin_token, site) -> None:
        with pytest.raises(PolicyError):
            perform(_edit(admin_token, name="badword"), db_session, context)
        assert SiteRepository(db_session).get().name == "Stage"


class TestTransferSite:
    def test_creator_transfers_to_admin(
        self, db_session, context, make_user, admin, admin_token, site
    ) -> None:
        successor = make_user("successor", admin=True)

        response = perform(
            TransferSite(user_id=successor.id, auth=admin_token), db_session, context
        )

        assert response.site.creator_id == successor.id
        assert response.site.creator_name == "successor"
        assert [user.name for user in response.admins] == ["successor", "admin"]
        audit = db_session.execute(select(ModAdd)).scalars().all()
        assert [(a.mod_user_id, a.other_user_id, a.removed) for a in audit] == [
            (admin.id, successor.id, False)
        ]

    def test_only_creator_may_transfer(self, db_session, context, make_user, site, member) -> None:
        deputy = make_user("deputy", admin=True)

        with pytest.raises(AuthorizationError):
            perform(
                TransferSite(user_id=member.id, auth=context.claims.encode(deputy)),
                db_session,
                context,
            )
        assert db_session.execute(select(ModAdd)).first() is None

    def test_unknown_target(self, db_session, context, admin_token, site) -> None:
        with pytest.raises(NotFoundError) as excinfo:
            perform(TransferSite(user_id=4242, auth=admin_token), db_session, context)
        assert excinfo.value.code == "couldnt_update_site"
        assert db_session.execute(select(ModAdd)).first() is None

    def test_missing_site(self, db_session, context, admin_token, member) -> None:
        with pytest.raises(NotFoundError):
            perform(TransferSite(user_id=member.id, auth=admin_token), db_session, context)


class TestGetSite:
    def test_without_site_or_setup(self, db_session, context, admin) -> None:
        response = perform(GetSite(), db_session, context)

        assert response.site is None
        assert response.admins == []
        assert response.banned == []
        assert response.online == 0

    def test_creator_leads_admins(
        self, db_session, context, make_user, admin, admin_token, site
    ) -> None:
        make_user("senior", admin=True)
        successor = make_user("successor", admin=True)
        perform(TransferSite(user_id=successor.id, auth=admin_token), db_session, context)
        make_user("troll", banned=True)

        response = perform(GetSite(), db_session, context)

        assert [user.name for user in response.admins] == ["successor", "admin", "senior"]
        assert [user.name for user in response.banned] == ["troll"]
        assert response.site.number_of_users == 4


def test_list_categories(db_session, context) -> None:
    db_session.add_all([Category(name="Zebra"), Category(name="Aardvark")])
    db_session.commit()

    response = perform(ListCategories(), db_session, context)

    assert [c.name for c in response.categories] == ["Zebra", "Aardvark"]
