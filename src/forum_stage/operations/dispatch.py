"""Route named commands to their handlers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_stage.core.errors import ApiError, StoreError, ValidationError

from .base import Operation, OperationContext
from .search import GetModlogOperation, SearchOperation
from .site import (
    CreateSiteOperation,
    EditSiteOperation,
    GetSiteOperation,
    ListCategoriesOperation,
    TransferSiteOperation,
)
from .user import RegisterOperation

logger = logging.getLogger(__name__)

__all__ = ["OPERATIONS", "UserOperation", "dispatch", "perform"]


class UserOperation(StrEnum):
    LIST_CATEGORIES = "ListCategories"
    SEARCH = "Search"
    GET_MODLOG = "GetModlog"
    CREATE_SITE = "CreateSite"
    EDIT_SITE = "EditSite"
    GET_SITE = "GetSite"
    TRANSFER_SITE = "TransferSite"
    REGISTER = "Register"


OPERATIONS: dict[UserOperation, type[Operation]] = {
    UserOperation.LIST_CATEGORIES: ListCategoriesOperation,
    UserOperation.SEARCH: SearchOperation,
    UserOperation.GET_MODLOG: GetModlogOperation,
    UserOperation.CREATE_SITE: CreateSiteOperation,
    UserOperation.EDIT_SITE: EditSiteOperation,
    UserOperation.GET_SITE: GetSiteOperation,
    UserOperation.TRANSFER_SITE: TransferSiteOperation,
    UserOperation.REGISTER: RegisterOperation,
}

_BY_REQUEST: dict[type[BaseModel], type[Operation]] = {
    handler.request_model: handler for handler in OPERATIONS.values()
}


def perform(data: BaseModel, db: Session, context: OperationContext) -> BaseModel:
    """Run the handler registered for ``type(data)``.

    Any failure rolls the session back so a command either completes or
    leaves no trace. Store failures surface as ``StoreError``.
    """
    handler = _BY_REQUEST.get(type(data))
    if handler is None:
        raise ValidationError("unknown_operation")

    try:
        return handler(data, context).perform(db)
    except ApiError:
        db.rollback()
        raise
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("%s failed in the store", handler.__name__)
        raise StoreError(str(err)) from err


def dispatch(
    op: str,
    payload: Mapping[str, Any],
    db: Session,
    context: OperationContext,
) -> BaseModel:
    """Validate ``payload`` against the named command and perform it."""
    try:
        operation = UserOperation(op)
    except ValueError as err:
        raise ValidationError("unknown_operation") from err

    handler = OPERATIONS[operation]
    try:
        data = handler.request_model.model_validate(payload)
    except PydanticValidationError as err:
        raise ValidationError("invalid_request") from err
    return perform(data, db, context)
