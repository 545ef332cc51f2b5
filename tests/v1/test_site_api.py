# tests/v1/test_site_api.py
"""Tests for the site, search, modlog and category endpoints."""

import pytest
from fastapi import status

from forum_stage.core.errors import (
    ApiError,
    AuthError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PolicyError,
    StoreError,
    ValidationError,
)
from forum_stage.main import status_for
from forum_stage.models import Category


def _site_body(token: str, **overrides) -> dict:
    body = {
        "name": "Stage",
        "description": "A place to talk",
        "enable_downvotes": True,
        "open_registration": True,
        "enable_nsfw": False,
        "auth": token,
    }
    body.update(overrides)
    return body


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (AuthError(), status.HTTP_401_UNAUTHORIZED),
        (AuthorizationError(), status.HTTP_403_FORBIDDEN),
        (NotFoundError(), status.HTTP_404_NOT_FOUND),
        (ConflictError(), status.HTTP_409_CONFLICT),
        (StoreError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
        (ValidationError(), status.HTTP_400_BAD_REQUEST),
        (PolicyError(["x"]), status.HTTP_400_BAD_REQUEST),
        (ApiError(), status.HTTP_400_BAD_REQUEST),
    ],
)
def test_status_mapping(error, expected) -> None:
    assert status_for(error) == expected


def test_get_site_before_setup(client) -> None:
    response = client.get("/api/v1/site")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"site": None, "admins": [], "banned": [], "online": 0}


def test_create_then_read_site(client, admin_token) -> None:
    created = client.post("/api/v1/site", json=_site_body(admin_token))
    assert created.status_code == status.HTTP_200_OK
    assert created.json()["site"]["name"] == "Stage"

    fetched = client.get("/api/v1/site").json()
    assert fetched["site"]["creator_name"] == "admin"
    assert [admin["name"] for admin in fetched["admins"]] == ["admin"]


def test_create_site_twice(client, admin_token) -> None:
    client.post("/api/v1/site", json=_site_body(admin_token))

    response = client.post("/api/v1/site", json=_site_body(admin_token, name="Again"))

    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {"error": "site_already_exists"}


def test_create_site_as_member(client, member_token) -> None:
    response = client.post("/api/v1/site", json=_site_body(member_token))

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "not_an_admin"}


def test_create_site_with_bad_token(client) -> None:
    response = client.post("/api/v1/site", json=_site_body("forged"))

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "not_logged_in"}


def test_create_site_with_slur(client, admin_token) -> None:
    response = client.post("/api/v1/site", json=_site_body(admin_token, name="badword"))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "No slurs - badword"}


def test_edit_missing_site(client, admin_token) -> None:
    response = client.put("/api/v1/site", json=_site_body(admin_token))

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "couldnt_update_site"}


def test_edit_and_transfer(client, make_user, context, admin_token) -> None:
    client.post("/api/v1/site", json=_site_body(admin_token))
    successor = make_user("successor", admin=True)

    edited = client.put("/api/v1/site", json=_site_body(admin_token, name="Renamed"))
    assert edited.status_code == status.HTTP_200_OK
    assert edited.json()["site"]["name"] == "Renamed"

    moved = client.post(
        "/api/v1/site/transfer", json={"user_id": successor.id, "auth": admin_token}
    )
    assert moved.status_code == status.HTTP_200_OK
    body = moved.json()
    assert body["site"]["creator_id"] == successor.id
    assert body["admins"][0]["name"] == "successor"

    modlog = client.get("/api/v1/modlog").json()
    assert [entry["other_user_name"] for entry in modlog["added"]] == ["successor"]


def test_search(client, make_community, make_post, admin) -> None:
    community = make_community(admin, "rust")
    make_post(admin, community, "Rust news")

    response = client.get(
        "/api/v1/search", params={"q": "rust", "type": "All", "sort": "New", "auth": "stale"}
    )

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["type"] == "All"
    assert [post["name"] for post in body["posts"]] == ["Rust news"]
    assert [c["name"] for c in body["communities"]] == ["rust"]


def test_search_with_bad_sort(client) -> None:
    response = client.get("/api/v1/search", params={"q": "x", "type": "All", "sort": "Best"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "invalid_sort_type"}


def test_modlog_with_bad_page(client) -> None:
    response = client.get("/api/v1/modlog", params={"page": 0})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "invalid_page"}


def test_list_categories(client, db_session) -> None:
    db_session.add_all([Category(name="Discussion"), Category(name="Meta")])
    db_session.commit()

    response = client.get("/api/v1/categories")

    assert response.status_code == status.HTTP_200_OK
    assert [c["name"] for c in response.json()["categories"]] == ["Discussion", "Meta"]


def test_generic_operation_endpoint(client) -> None:
    response = client.post("/api/v1/op/GetSite", json={})

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["site"] is None


def test_generic_operation_errors(client) -> None:
    unknown = client.post("/api/v1/op/Nuke", json={})
    invalid = client.post("/api/v1/op/TransferSite", json={"user_id": "nobody"})

    assert unknown.status_code == status.HTTP_400_BAD_REQUEST
    assert unknown.json() == {"error": "unknown_operation"}
    assert invalid.json() == {"error": "invalid_request"}
