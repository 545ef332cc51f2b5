# src/forum_stage/api/v1/endpoints/user.py
"""Account endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from forum_stage.operations import perform
from forum_stage.schemas import LoginResponse, Register

from ..dependencies import ContextDep, SessionDep

router = APIRouter(prefix="/user", tags=["users"])


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(data: Register, db: SessionDep, context: ContextDep) -> Any:
    """Create an account and return a login token."""
    return perform(data, db, context)
