"""The operation-handler contract.

An :class:`Operation` binds one command payload to the code that performs
it. Handlers receive everything they depend on explicitly: the command, an
:class:`OperationContext` holding settings and policy helpers, and a
database session. They keep no state between calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from forum_stage.core.claims import Claims, ClaimsVerifier
from forum_stage.core.errors import AuthError, AuthorizationError
from forum_stage.core.settings import Settings
from forum_stage.models import User
from forum_stage.services.moderation import SlurFilter

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


@dataclass(frozen=True)
class OperationContext:
    """Process-wide collaborators handed to every handler."""

    settings: Settings
    claims: ClaimsVerifier
    slurs: SlurFilter

    @classmethod
    def from_settings(cls, settings: Settings) -> OperationContext:
        return cls(
            settings=settings,
            claims=ClaimsVerifier.from_settings(settings),
            slurs=SlurFilter(settings.slur_filter),
        )

    @property
    def limits(self) -> dict[str, int]:
        return {
            "default_limit": self.settings.fetch_limit_default,
            "max_limit": self.settings.fetch_limit_max,
        }


class Operation(ABC, Generic[RequestT, ResponseT]):
    """Perform one command against the store."""

    request_model: ClassVar[type[BaseModel]]
    response_model: ClassVar[type[BaseModel]]

    def __init__(self, data: RequestT, context: OperationContext) -> None:
        self.data = data
        self.context = context

    @abstractmethod
    def perform(self, db: Session) -> ResponseT:
        """Run the command; raise an ``ApiError`` subclass on failure."""

    def authenticate(self, token: str | None) -> Claims:
        return self.context.claims.decode(token)

    def require_admin(self, db: Session, claims: Claims) -> User:
        """Return the acting user, failing unless they are an admin."""
        user = db.get(User, claims.id)
        if user is None:
            raise AuthError()
        if not user.admin:
            raise AuthorizationError()
        return user
