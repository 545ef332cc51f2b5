"""Signed identity tokens.

Tokens are HS256 JWTs (python-jose) whose payload is a :class:`Claims`
instance plus an ``exp`` timestamp. Decoding never touches the database.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from forum_stage.core.errors import AuthError
from forum_stage.core.settings import Settings

if TYPE_CHECKING:
    from forum_stage.models import User

__all__ = ["Claims", "ClaimsVerifier"]


class Claims(BaseModel):
    """Decoded payload of an identity token."""

    id: int
    username: str
    iss: str
    show_nsfw: bool = False


class ClaimsVerifier:
    """Issue and validate identity tokens for a single issuer."""

    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24 * 30,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire = timedelta(minutes=expire_minutes)
        self.issuer = issuer

    @classmethod
    def from_settings(cls, settings: Settings) -> ClaimsVerifier:
        return cls(
            settings.secret_key,
            issuer=settings.hostname,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def encode(self, user: User) -> str:
        """Create a token identifying ``user``."""
        claims = Claims(
            id=user.id,
            username=user.name,
            iss=self.issuer,
            show_nsfw=user.show_nsfw,
        )
        to_encode: dict[str, object] = claims.model_dump()
        to_encode["exp"] = datetime.now(UTC) + self._expire
        encoded_jwt: str = jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)
        return encoded_jwt

    def decode(self, token: str | None) -> Claims:
        """Validate ``token`` and return its claims.

        Raises:
            AuthError: If the token is missing, malformed, expired, signed with
                another key or algorithm, or issued by another host.
        """
        if not token:
            raise AuthError()
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                issuer=self.issuer,
            )
            return Claims.model_validate(payload)
        except (JWTError, PydanticValidationError) as err:
            raise AuthError() from err
