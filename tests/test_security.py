import base64

import pytest

import utils.security
from utils.security import authenticate, init_api_credentials


def _basic(username: str, password: str) -> dict:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def secured_app(app):
    app.config.update(API_AUTH_REQUIRED=True, API_USERNAME="editor", API_PASSWORD="s3cret")
    init_api_credentials(app)
    return app


def test_writes_are_open_when_auth_not_required(client) -> None:
    assert client.post("/api/decoupled-portfolio", json={"title": "A"}).status_code == 201


def test_writes_require_credentials(secured_app) -> None:
    client = secured_app.test_client()

    response = client.post("/api/decoupled-portfolio", json={"title": "A"})

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"].startswith("Basic")
    assert client.delete("/api/decoupled-portfolio/1").status_code == 401
    assert client.patch("/api/portfolio-menu-api/1", json={}).status_code == 401


def test_wrong_password_is_rejected(secured_app) -> None:
    client = secured_app.test_client()

    response = client.post(
        "/api/decoupled-portfolio", json={"title": "A"}, headers=_basic("editor", "nope"))

    assert response.status_code == 401


def test_valid_credentials_allow_writes(secured_app) -> None:
    client = secured_app.test_client()
    headers = _basic("editor", "s3cret")

    response = client.post("/api/decoupled-portfolio", json={"title": "A"}, headers=headers)
    assert response.status_code == 201

    response = client.delete("/api/decoupled-portfolio/1", headers=headers)
    assert response.status_code == 204


def test_reads_stay_public(secured_app) -> None:
    client = secured_app.test_client()

    assert client.get("/api/portfolio-menu-api/main").status_code == 200
    assert client.get("/api/decoupled-portfolio/home").status_code == 404


def test_authenticate_without_configured_account(app) -> None:
    with app.app_context():
        assert authenticate("editor", "s3cret") is None


def test_authenticate_returns_user(secured_app) -> None:
    with secured_app.app_context():
        user = authenticate("editor", "s3cret")
        assert user is not None
        assert user.get_id() == "editor"
        assert user.is_authenticated
        assert authenticate("someone", "s3cret") is None


def test_password_is_hashed_once_per_app(app, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    original = utils.security.generate_password_hash

    def counting_hash(password: str) -> str:
        calls.append(password)
        return original(password)

    monkeypatch.setattr(utils.security, "generate_password_hash", counting_hash)
    app.config.update(API_AUTH_REQUIRED=True, API_USERNAME="editor", API_PASSWORD="s3cret")
    init_api_credentials(app)
    client = app.test_client()
    headers = _basic("editor", "s3cret")

    for title in ("A", "B", "C"):
        assert client.post("/api/decoupled-portfolio", json={"title": title}, headers=headers).status_code == 201
    assert client.post("/api/decoupled-portfolio", json={}, headers=_basic("editor", "x")).status_code == 401

    assert calls == ["s3cret"]
