# tests/conftest.py
import os
import sys
import pytest

# so that `import app` works when running from the repository root
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app
from config import Config
from create_user import create_user
from extensions import db


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    STRICT_REGION_SUBSCRIPTIONS = False


ADMIN_PASSWORD = "admin-pass"


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    # no app context stays pushed during requests: Flask-Login caches the user on `g`
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, username="anna", email="anna@example.com", password="secret-1"):
    return client.post(
        "/api/users/register",
        json={"username": username, "email": email, "password": password},
    )


def festival_payload(**overrides) -> dict:
    payload = {
        "name": "Oktoberfest",
        "description": "Das weltberühmte Bierfest",
        "location": "München, Bayern",
        "region": "bayern",
        "address": "Theresienwiese, 80336 München",
        "startDate": "2025-09-21",
        "endDate": "2025-10-06",
        "coordinates": {"latitude": 48.1351, "longitude": 11.5820},
        "entryFee": "free",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def user_token(client):
    resp = register(client)
    assert resp.status_code == 201
    return resp.get_json()["token"]


@pytest.fixture()
def admin_token(app, client):
    with app.app_context():
        create_user("admin", "admin@example.com", ADMIN_PASSWORD, "admin")
    resp = client.post("/api/users/login", json={"email": "admin@example.com", "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return resp.get_json()["token"]


@pytest.fixture()
def make_festival(client, admin_token):
    """Create a festival through the API and return its JSON."""

    def _make(**overrides) -> dict:
        resp = client.post("/api/festivals", json=festival_payload(**overrides), headers=auth_header(admin_token))
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["festival"]

    return _make
