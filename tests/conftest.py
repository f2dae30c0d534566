# tests/conftest.py
from __future__ import annotations

import io
import os
from collections.abc import Callable, Generator, Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI, UploadFile
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session
from starlette.datastructures import Headers

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from mingle.core.security import create_access_token, hash_password
from mingle.core.settings import Settings
from mingle.db.session import get_db as app_get_session
from mingle.main import create_app
from mingle.models import Post, ProfileDetails, User

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

# Smallest valid PNG: enough for the type checks, which only look at the
# filename extension and the declared content type.
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture()
def test_settings(tmp_path: Path) -> Settings:
    """Settings backed by an in-memory database and temporary image folders."""
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        database_url=TEST_DB_URL,
        use_testing_database=False,
        post_image_dir=str(tmp_path / "post" / "Images"),
        profile_image_dir=str(tmp_path / "profile" / "Images"),
        profile_image_max_bytes=1024,
        explore_default_limit=20,
    )


@pytest.fixture()
def app(test_settings: Settings) -> Iterator[FastAPI]:
    application = create_app(test_settings)
    try:
        yield application
    finally:
        application.state.engine.dispose()


@pytest.fixture()
def db_session(app: FastAPI) -> Iterator[Session]:
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            # Mirror the per-request session: nothing uncommitted survives.
            db_session.rollback()

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory that stores a user with a profile carrying the same username."""

    def _make_user(
        username: str,
        *,
        email: str | None = None,
        full_name: str | None = None,
        password: str = TEST_PASSWORD,
    ) -> User:
        user = User(
            username=username,
            email=email or f"{username.lower()}@example.com",
            password_hash=hash_password(password),
        )
        user.profile = ProfileDetails(username=username, full_name=full_name)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user("alice", full_name="Alice Liddell")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob", full_name="Bob Builder")


@pytest.fixture()
def third_user(make_user: Callable[..., User]) -> User:
    return make_user("carol", full_name="Carol Danvers")


@pytest.fixture()
def auth_headers_for(test_settings: Settings) -> Callable[[User], dict[str, str]]:
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, test_settings)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def auth_headers(
    test_user: User, auth_headers_for: Callable[[User], dict[str, str]]
) -> dict[str, str]:
    return auth_headers_for(test_user)


@pytest.fixture()
def other_headers(
    other_user: User, auth_headers_for: Callable[[User], dict[str, str]]
) -> dict[str, str]:
    return auth_headers_for(other_user)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    def _make_post(author: User, description: str = "hello", **fields: object) -> Post:
        post = Post(user_id=author.id, description=description, **fields)
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(test_user: User, make_post: Callable[..., Post]) -> Post:
    return make_post(test_user, "First post", location="Wonderland")


@pytest.fixture()
def png_upload() -> Callable[[str], tuple[str, bytes, str]]:
    def _upload(name: str = "photo.png") -> tuple[str, bytes, str]:
        return (name, PNG_BYTES, "image/png")

    return _upload


@pytest.fixture()
def upload_file() -> Callable[[str], UploadFile]:
    """Build an in-memory PNG upload for calling services directly."""

    def _upload(name: str = "photo.png") -> UploadFile:
        return UploadFile(
            file=io.BytesIO(PNG_BYTES),
            filename=name,
            headers=Headers({"content-type": "image/png"}),
        )

    return _upload


@pytest.fixture()
def break_commits(db_session: Session, monkeypatch: pytest.MonkeyPatch) -> Callable[[], None]:
    """Return a switch that makes every later commit on the session fail."""

    def _fail() -> None:
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    def _switch() -> None:
        monkeypatch.setattr(db_session, "commit", _fail)

    return _switch
