"""Error taxonomy shared by operation handlers and the transport adapter.

Every failure a handler reports upstream is an :class:`ApiError` carrying a
single string ``code``; the HTTP layer maps error classes to status codes.
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "AuthError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "PolicyError",
    "StoreError",
    "ValidationError",
]


class ApiError(Exception):
    """Base class for classified operation failures."""

    code: str = "unknown_error"

    def __init__(self, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        super().__init__(self.code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r})"


class AuthError(ApiError):
    """Identity token missing, malformed, expired or badly signed."""

    code = "not_logged_in"


class AuthorizationError(ApiError):
    """Authenticated actor lacks the privilege the command needs."""

    code = "not_an_admin"


class PolicyError(ApiError):
    """Free text matched one or more banned terms."""

    def __init__(self, matches: list[str]) -> None:
        self.matches = list(matches)
        super().__init__("No slurs - " + ", ".join(self.matches))


class ConflictError(ApiError):
    """A uniqueness rule was violated."""

    code = "conflict"


class NotFoundError(ApiError):
    """A referenced row is absent where the command requires it."""

    code = "not_found"


class ValidationError(ApiError):
    """Malformed enum value or out-of-range paging input."""

    code = "invalid_request"


class StoreError(ApiError):
    """Unclassified failure raised by the relational store.

    ``detail`` keeps the driver message as it was reported.
    """

    code = "database_error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__()
