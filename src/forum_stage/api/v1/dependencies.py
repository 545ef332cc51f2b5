"""Shared API dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from forum_stage.core.settings import settings
from forum_stage.db.session import get_db
from forum_stage.operations import OperationContext

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


@lru_cache
def get_operation_context() -> OperationContext:
    """Build the handler context once from the process settings."""
    return OperationContext.from_settings(settings)


ContextDep = Annotated[OperationContext, Depends(get_operation_context)]
