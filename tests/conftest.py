import os
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import sys
sys.path.append(os.getcwd())

from app.core.config_env import Settings
from app.core.tokens import Subject
from app.db.session import init_db, make_engine, make_session_factory
from app.models.enums import PrincipalKind, UserRole
from server import create_app

TEST_JWT_SECRET = "TEST_JWT_SECRET_CHANGE_ME"


@pytest.fixture(scope="function")
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET=TEST_JWT_SECRET,
        BCRYPT_ROUNDS=4,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        SEED_DEFAULTS=False,
        STRICT_STATUS_TRANSITIONS=False,
        CORS_ORIGINS=["*"],
    )


@pytest.fixture(scope="function")
def app_instance(settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture(scope="function")
def client(app_instance) -> TestClient:
    with TestClient(app_instance) as c:
        yield c


@pytest.fixture(scope="function")
def db(settings) -> Session:
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)
    db = make_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


def _register(client: TestClient, path: str, username: str, password: str = "secret1", **extra) -> dict:
    resp = client.post(path, json={"username": username, "password": password, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture(scope="function")
def alice(client) -> dict:
    data = _register(client, "/api/register", "alice")
    return {"user": data["user"], "headers": {"Authorization": f"Bearer {data['token']}"}}


@pytest.fixture(scope="function")
def bob(client) -> dict:
    data = _register(client, "/api/register-authority", "bob")
    return {"user": data["user"], "headers": {"Authorization": f"Bearer {data['token']}"}}


@pytest.fixture
def citizen_subject() -> Subject:
    return Subject(id=1, username="alice", role=UserRole.user, kind=PrincipalKind.citizen)


@pytest.fixture
def authority_subject() -> Subject:
    return Subject(id=1, username="bob", role=UserRole.authority, kind=PrincipalKind.authority)
