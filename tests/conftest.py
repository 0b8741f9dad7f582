from __future__ import annotations

from typing import Iterator
from urllib.parse import urlsplit

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from sqlalchemy.pool import StaticPool

from shiftboard import create_app
from shiftboard.client.transport import ShiftApiTransport
from shiftboard.config import Config
from shiftboard.extensions import db
from shiftboard.store import ShiftStore


class TestConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    SHIFT_API_URL = "http://localhost/api/shifts"


class FlaskClientSession:
    """Stands in for ``requests.Session`` by routing calls into a Flask test client."""

    def __init__(self, flask_client) -> None:
        self.flask_client = flask_client
        self.calls: list[tuple[str, str]] = []

    def request(self, method: str, url: str, timeout=None, **kwargs) -> requests.Response:
        path = urlsplit(url).path
        self.calls.append((method, path))
        flask_response = self.flask_client.open(path, method=method, json=kwargs.get("json"))

        response = requests.Response()
        response.status_code = flask_response.status_code
        response.headers = CaseInsensitiveDict(flask_response.headers)
        response._content = flask_response.get_data()
        response.encoding = "utf-8"
        response.url = url
        return response


class UnreachableSession:
    def request(self, method: str, url: str, timeout=None, **kwargs) -> requests.Response:
        raise requests.ConnectionError(f"Connection refused: {url}")


@pytest.fixture()
def app() -> Iterator:
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store(app) -> ShiftStore:
    return ShiftStore()


@pytest.fixture()
def api_session(app) -> FlaskClientSession:
    return FlaskClientSession(app.test_client())


@pytest.fixture()
def api_transport(app, api_session) -> ShiftApiTransport:
    transport = ShiftApiTransport(app.config["SHIFT_API_URL"], session=api_session)
    app.extensions["shift_api_transport"] = transport
    return transport


@pytest.fixture()
def unreachable_transport(app) -> ShiftApiTransport:
    transport = ShiftApiTransport(app.config["SHIFT_API_URL"], session=UnreachableSession())
    app.extensions["shift_api_transport"] = transport
    return transport


@pytest.fixture()
def shift_payload() -> dict[str, str]:
    return {
        "employee_name": "John Doe",
        "position": "Developer",
        "start_time": "2025-11-08T09:00",
        "end_time": "2025-11-08T17:00",
        "status": "scheduled",
        "notes": "Morning shift",
    }
