from fastapi.testclient import TestClient
import pytest

from app.main import create_app


@pytest.fixture
def app(make_settings, fake_sender):
    return create_app(make_settings(), sender=fake_sender)


@pytest.fixture
def client(app):
    return TestClient(app)


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"


def test_method_not_allowed(client):
    response = client.get("/api/request")
    assert response.status_code == 405
    assert response.json()["code"] == "HTTP_ERROR"


def test_validation_error_structure(client):
    response = client.post("/api/verify", json=["not", "an", "object"])
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0


def test_custom_exception(app, client):
    from app.core.exceptions import MessageDispatchError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise MessageDispatchError(message="Twilio API timeout")

    response = client.get("/test-custom-error")
    assert response.status_code == 502
    data = response.json()
    assert data["code"] == "EXTERNAL_SERVICE_ERROR"
    assert data["error"] == "Twilio API timeout"


def test_unhandled_exception_hidden_in_production(make_settings, fake_sender):
    app = create_app(make_settings(ENVIRONMENT="production"), sender=fake_sender)

    @app.get("/test-crash")
    def crash():
        raise RuntimeError("internal detail")

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/test-crash")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert "internal detail" not in data["error"]
