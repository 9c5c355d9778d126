from __future__ import annotations

import pytest

from app import create_app
from config import TestConfig
from models.storage import get_storage
from models.user import ROLE_ADMIN, ROLE_SUPER_ADMIN


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app(tmp_path, clock):
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / "uploads")

    app = create_app(_Config)
    app.extensions["login_attempts"].clock = clock
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(username: str, password: str = "password123", role: str = ROLE_ADMIN):
        return get_storage().create_user(username, password, role=role)

    return _make


@pytest.fixture
def login(client):
    def _login(username: str, password: str = "password123", c=None):
        return (c or client).post("/api/login", json={"username": username, "password": password})

    return _login


@pytest.fixture
def admin_client(client, make_user, login):
    make_user("editor")
    resp = login("editor")
    assert resp.status_code == 200
    return client


@pytest.fixture
def owner_client(client, login):
    # seeded from TestConfig.SUPER_ADMIN_*
    resp = login("owner", "owner-password")
    assert resp.status_code == 200
    return client


@pytest.fixture
def other_super_client(app, make_user, login):
    make_user("deputy", role=ROLE_SUPER_ADMIN)
    c = app.test_client()
    resp = login("deputy", c=c)
    assert resp.status_code == 200
    return c
