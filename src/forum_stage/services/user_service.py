"""CRUD-style helpers for managing users."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_stage.core import security
from forum_stage.core.errors import ConflictError
from forum_stage.models.user import User
from forum_stage.queries.users import user_view_statement
from forum_stage.schemas.user import UserView

__all__ = [
    "admins",
    "banned",
    "count_admins",
    "create_user",
    "creator_first",
    "get_user",
    "get_user_by_name",
]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_name(db: Session, name: str) -> User | None:
    return db.execute(select(User).where(User.name == name)).scalars().first()


def count_admins(db: Session) -> int:
    return db.execute(select(func.count(User.id)).where(User.admin.is_(True))).scalar_one()


def create_user(
    db: Session,
    *,
    name: str,
    password: str,
    email: str | None = None,
    admin: bool = False,
    show_nsfw: bool = False,
) -> User:
    """Persist a new user with a hashed password.

    Raises:
        ConflictError: ``user_already_exists`` if the name or email is taken.
    """
    user = User(
        name=name,
        password_encrypted=security.hash_password(password),
        email=email,
        admin=admin,
        show_nsfw=show_nsfw,
    )
    try:
        with db.begin_nested():
            db.add(user)
    except IntegrityError as err:
        raise ConflictError("user_already_exists") from err
    return user


def admins(db: Session) -> list[UserView]:
    """Return every admin, oldest account first."""
    stmt = user_view_statement().where(User.admin.is_(True)).order_by(User.published, User.id)
    return [UserView(**row._mapping) for row in db.execute(stmt)]


def banned(db: Session) -> list[UserView]:
    """Return every site-banned user."""
    stmt = user_view_statement().where(User.banned.is_(True)).order_by(User.id)
    return [UserView(**row._mapping) for row in db.execute(stmt)]


def creator_first(users: Sequence[UserView], creator_id: int | None) -> list[UserView]:
    """Move the site creator to the front, keeping everyone else in order.

    The list is returned unchanged when the creator is absent from it.
    """
    ordered = list(users)
    for index, user in enumerate(ordered):
        if user.id == creator_id:
            ordered.insert(0, ordered.pop(index))
            break
    return ordered
