# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from forum_stage.api.v1.dependencies import get_operation_context
from forum_stage.core import security
from forum_stage.core.settings import Settings, SetupSettings
from forum_stage.db.session import Base
from forum_stage.db.session import get_db as app_get_session
from forum_stage.main import app as fastapi_app
from forum_stage.models import (
    Category,
    Comment,
    CommentLike,
    Community,
    CommunityFollower,
    Post,
    PostLike,
    User,
)
from forum_stage.operations import OperationContext

TEST_DB_URL = "sqlite://"
TEST_HOSTNAME = "forum.test"
SLUR_TERMS = ["badword", "nastyterm"]

_NAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own; take it over so SAVEPOINTs nest properly.
    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:  # type: ignore[no-untyped-def]
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits become savepoints inside one outer transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(
        secret_key="test-secret-key",
        hostname=TEST_HOSTNAME,
        slur_filter=SLUR_TERMS,
        fetch_limit_default=10,
        fetch_limit_max=50,
    )


@pytest.fixture()
def setup_settings(test_settings: Settings) -> Settings:
    """Settings with first-run bootstrap configured."""
    return test_settings.model_copy(
        update={
            "setup": SetupSettings(
                admin_username="root",
                admin_password="hunter22",
                site_name="Stage",
            )
        }
    )


@pytest.fixture()
def context(test_settings: Settings) -> OperationContext:
    return OperationContext.from_settings(test_settings)


@pytest.fixture()
def setup_context(setup_settings: Settings) -> OperationContext:
    return OperationContext.from_settings(setup_settings)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI, db_session: Session, context: OperationContext
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_operation_context] = lambda: context
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_operation_context, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(
        name: str | None = None,
        *,
        admin: bool = False,
        banned: bool = False,
        show_nsfw: bool = False,
        published: datetime | None = None,
    ) -> User:
        user = User(
            name=name or f"user{next(_NAME_COUNTER)}",
            password_encrypted=security.hash_password("password"),
            admin=admin,
            banned=banned,
            show_nsfw=show_nsfw,
        )
        if published is not None:
            user.published = published
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def category(db_session: Session) -> Category:
    category = Category(name="Discussion")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture()
def make_community(db_session: Session, category: Category) -> Callable[..., Community]:
    def _make_community(
        creator: User,
        name: str | None = None,
        *,
        title: str | None = None,
        nsfw: bool = False,
        removed: bool = False,
        deleted: bool = False,
    ) -> Community:
        name = name or f"community{next(_NAME_COUNTER)}"
        community = Community(
            name=name,
            title=title or name.title(),
            category_id=category.id,
            creator_id=creator.id,
            nsfw=nsfw,
            removed=removed,
            deleted=deleted,
        )
        db_session.add(community)
        db_session.commit()
        return community

    return _make_community


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    def _make_post(
        creator: User,
        community: Community,
        name: str = "A post",
        *,
        url: str | None = None,
        body: str | None = None,
        nsfw: bool = False,
        removed: bool = False,
        deleted: bool = False,
        stickied: bool = False,
        published: datetime | None = None,
    ) -> Post:
        post = Post(
            name=name,
            url=url,
            body=body,
            creator_id=creator.id,
            community_id=community.id,
            nsfw=nsfw,
            removed=removed,
            deleted=deleted,
            stickied=stickied,
        )
        if published is not None:
            post.published = published
        db_session.add(post)
        db_session.commit()
        return post

    return _make_post


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    def _make_comment(
        creator: User,
        post: Post,
        content: str = "A comment",
        *,
        parent: Comment | None = None,
        removed: bool = False,
        published: datetime | None = None,
    ) -> Comment:
        comment = Comment(
            creator_id=creator.id,
            post_id=post.id,
            parent_id=parent.id if parent else None,
            content=content,
            removed=removed,
        )
        if published is not None:
            comment.published = published
        db_session.add(comment)
        db_session.commit()
        return comment

    return _make_comment


@pytest.fixture()
def vote(db_session: Session) -> Callable[..., None]:
    """Record a vote on a post, or on a comment when one is given."""

    def _vote(user: User, post: Post, score: int, comment: Comment | None = None) -> None:
        if comment is None:
            db_session.add(PostLike(post_id=post.id, user_id=user.id, score=score))
        else:
            db_session.add(
                CommentLike(comment_id=comment.id, post_id=post.id, user_id=user.id, score=score)
            )
        db_session.commit()

    return _vote


@pytest.fixture()
def follow(db_session: Session) -> Callable[[User, Community], None]:
    def _follow(user: User, community: Community) -> None:
        db_session.add(CommunityFollower(community_id=community.id, user_id=user.id))
        db_session.commit()

    return _follow


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("admin", admin=True)


@pytest.fixture()
def member(make_user: Callable[..., User]) -> User:
    return make_user("member")


@pytest.fixture()
def admin_token(context: OperationContext, admin: User) -> str:
    return context.claims.encode(admin)


@pytest.fixture()
def member_token(context: OperationContext, member: User) -> str:
    return context.claims.encode(member)
