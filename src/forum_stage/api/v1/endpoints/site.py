# src/forum_stage/api/v1/endpoints/site.py
"""Site, search, moderation log and category endpoints."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from forum_stage.operations import dispatch, perform
from forum_stage.schemas import (
    CreateSite,
    EditSite,
    GetModlog,
    GetModlogResponse,
    GetSite,
    GetSiteResponse,
    ListCategories,
    ListCategoriesResponse,
    Search,
    SearchResponse,
    SiteResponse,
    TransferSite,
)

from ..dependencies import ContextDep, SessionDep

router = APIRouter(tags=["site"])


@router.get("/site", response_model=GetSiteResponse)
async def get_site(db: SessionDep, context: ContextDep) -> Any:
    """Return the site, bootstrapping it on first run when configured."""
    return perform(GetSite(), db, context)


@router.post("/site", response_model=SiteResponse)
async def create_site(data: CreateSite, db: SessionDep, context: ContextDep) -> Any:
    return perform(data, db, context)


@router.put("/site", response_model=SiteResponse)
async def edit_site(data: EditSite, db: SessionDep, context: ContextDep) -> Any:
    return perform(data, db, context)


@router.post("/site/transfer", response_model=GetSiteResponse)
async def transfer_site(data: TransferSite, db: SessionDep, context: ContextDep) -> Any:
    """Hand site ownership to another user."""
    return perform(data, db, context)


@router.get("/modlog", response_model=GetModlogResponse)
async def get_modlog(
    db: SessionDep,
    context: ContextDep,
    mod_user_id: int | None = None,
    community_id: int | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> Any:
    data = GetModlog(
        mod_user_id=mod_user_id,
        community_id=community_id,
        page=page,
        limit=limit,
    )
    return perform(data, db, context)


@router.get("/search", response_model=SearchResponse)
async def search(
    db: SessionDep,
    context: ContextDep,
    q: str,
    sort: str,
    type_: Annotated[str, Query(alias="type")],
    community_id: int | None = None,
    page: int | None = None,
    limit: int | None = None,
    auth: str | None = None,
) -> Any:
    """Search posts, comments, communities and users."""
    data = Search(
        q=q,
        type_=type_,
        community_id=community_id,
        sort=sort,
        page=page,
        limit=limit,
        auth=auth,
    )
    return perform(data, db, context)


@router.get("/categories", response_model=ListCategoriesResponse)
async def list_categories(db: SessionDep, context: ContextDep) -> Any:
    return perform(ListCategories(), db, context)


@router.post("/op/{op}")
async def run_operation(
    op: str,
    db: SessionDep,
    context: ContextDep,
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> Any:
    """Dispatch a command by operation name, e.g. ``/op/GetSite``."""
    response = dispatch(op, payload or {}, db, context)
    return response.model_dump(mode="json", by_alias=True)
