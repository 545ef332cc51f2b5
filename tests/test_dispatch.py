# tests/test_dispatch.py
"""Tests for routing commands to their handlers."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from forum_stage.core.errors import StoreError, ValidationError
from forum_stage.models import Category
from forum_stage.operations import OPERATIONS, UserOperation, dispatch, perform
from forum_stage.schemas import GetSiteResponse, Search, SearchResponse
from forum_stage.services.search import SearchAggregator


def test_every_operation_has_a_handler() -> None:
    assert set(OPERATIONS) == set(UserOperation)
    request_models = [handler.request_model for handler in OPERATIONS.values()]
    assert len(set(request_models)) == len(request_models)


def test_dispatch_by_name(db_session, context) -> None:
    response = dispatch("GetSite", {}, db_session, context)

    assert isinstance(response, GetSiteResponse)
    assert response.site is None


def test_dispatch_uses_wire_field_names(db_session, context) -> None:
    response = dispatch(
        "Search", {"q": "anything", "type": "Users", "sort": "New"}, db_session, context
    )

    assert isinstance(response, SearchResponse)
    assert response.model_dump(by_alias=True)["type"] == "Users"


def test_unknown_operation(db_session, context) -> None:
    with pytest.raises(ValidationError) as excinfo:
        dispatch("DeleteEverything", {}, db_session, context)
    assert excinfo.value.code == "unknown_operation"


def test_invalid_payload(db_session, context) -> None:
    with pytest.raises(ValidationError) as excinfo:
        dispatch("TransferSite", {"user_id": "nobody"}, db_session, context)
    assert excinfo.value.code == "invalid_request"


def test_unregistered_payload_type(db_session, context) -> None:
    with pytest.raises(ValidationError):
        perform(Category(name="x"), db_session, context)  # type: ignore[arg-type]


def test_store_failures_are_wrapped(db_session, context, monkeypatch) -> None:
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SearchAggregator, "search", broken)

    with pytest.raises(StoreError) as excinfo:
        perform(Search(q="x", type_="All", sort="New"), db_session, context)
    assert excinfo.value.code == "database_error"
    assert "disk I/O error" in excinfo.value.detail
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_failed_command_leaves_no_trace(db_session, context) -> None:
    db_session.add(Category(name="half-done"))
    db_session.flush()

    with pytest.raises(ValidationError):
        dispatch("Search", {"q": "x", "type": "Nope", "sort": "New"}, db_session, context)

    assert db_session.execute(select(Category).where(Category.name == "half-done")).first() is None
