import pytest
from fastapi.testclient import TestClient

from minilink_api.app.core.config import settings
from minilink_api.app.core.db import init_db
from minilink_api.app.main import create_app


@pytest.fixture()
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(settings, "secret_key", "test-secret")
    init_db()
    return path


@pytest.fixture()
def client(db_path):
    app = create_app()
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client):
    """Sign a user up and return ``(user, auth_headers)``.

    The cookie set by signup is dropped so each request authenticates
    only through the headers it is given.
    """
    def _register(name="Ann", email="a@x.com", password="secret1", bio=None):
        res = client.post(
            "/api/auth/signup",
            json={"name": name, "email": email, "password": password, "bio": bio},
        )
        assert res.status_code == 201, res.text
        client.cookies.clear()
        body = res.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register
