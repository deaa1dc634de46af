import pytest
from fastapi.testclient import TestClient
import os
import sys

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from app import app
from encoding import decode_id, encode_id, get_tokenizer
from limiter import limiter


def configure(monkeypatch, password="correct horse", salt="battery", **overrides):
    """Points the process-wide tokenizer at a test key."""
    monkeypatch.setattr(config.Config, "TOKEN_PASSWORD", password)
    monkeypatch.setattr(config.Config, "TOKEN_SALT", salt)
    for name, value in overrides.items():
        monkeypatch.setattr(config.Config, name, value)
    get_tokenizer.cache_clear()


@pytest.fixture(scope="function")
def client(monkeypatch):
    """
    Pytest fixture to provide a test client with a fresh tokenizer and
    empty rate-limit counters for every test.
    """
    configure(monkeypatch)
    limiter.reset()

    # The TestClient context manager runs the application's lifespan events.
    with TestClient(app) as test_client:
        yield test_client

    get_tokenizer.cache_clear()


# ===================================
# 1. Encoding helpers
# ===================================

def test_encoding_helpers_round_trip(monkeypatch):
    """Tests the module-level helpers built on the cached tokenizer."""
    configure(monkeypatch)
    token = encode_id(12345)
    assert decode_id(token) == 12345
    assert decode_id(token[:-1] + ("0" if token[-1] != "0" else "1")) is None
    assert get_tokenizer() is get_tokenizer()
    get_tokenizer.cache_clear()


def test_encoding_follows_configuration(monkeypatch):
    """Tests that a different salt in config yields tokens the old key rejects."""
    configure(monkeypatch)
    token = encode_id(7)
    configure(monkeypatch, salt="staple")
    assert decode_id(token) is None
    assert decode_id(encode_id(7)) == 7
    get_tokenizer.cache_clear()


def test_config_validation(monkeypatch):
    """Tests that startup validation refuses a missing key."""
    configure(monkeypatch, password=None)
    with pytest.raises(ValueError):
        config.config.validate()
    configure(monkeypatch, TOKEN_ALPHABET="base64")
    with pytest.raises(ValueError):
        config.config.validate()
    get_tokenizer.cache_clear()


# ===================================
# 2. API Endpoint Tests
# ===================================

def test_health_check(client: TestClient):
    """Tests the /health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_health_check_without_key(monkeypatch):
    """Tests that /health reports a tokenizer that cannot be built."""
    configure(monkeypatch, password=None)
    response = TestClient(app).get("/health")
    assert response.status_code == 503
    assert response.json() == {"status": "error"}
    get_tokenizer.cache_clear()


def test_issue_and_verify_token(client: TestClient):
    """Tests the full journey: issue a token, then resolve it back to the id."""
    response = client.post("/api/v1/tokens", json={"id": 42})
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == 42
    assert data["token"] == get_tokenizer().encode(42)

    response = client.get(f"/api/v1/tokens/{data['token']}")
    assert response.status_code == 200
    assert response.json() == {"id": 42}


def test_issue_token_for_large_id(client: TestClient):
    """Tests identifiers wider than 64 bits through the API."""
    big = 2**80 + 3
    token = client.post("/api/v1/tokens", json={"id": big}).json()["token"]
    assert client.get(f"/api/v1/tokens/{token}").json() == {"id": big}


def test_issue_token_rejects_negative_id(client: TestClient):
    """Tests that request validation refuses negative identifiers."""
    response = client.post("/api/v1/tokens", json={"id": -1})
    assert response.status_code == 422


def test_rejections_look_identical(client: TestClient):
    """Tests that malformed and tampered tokens produce the same 404 response."""
    token = client.post("/api/v1/tokens", json={"id": 99}).json()["token"]
    tampered = token[:-1] + ("0" if token[-1] != "0" else "1")

    responses = [
        client.get(f"/api/v1/tokens/{tampered}"),
        client.get("/api/v1/tokens/abc"),
        client.get("/api/v1/tokens/uuuuuuuuuuuuuuuu"),
    ]
    for response in responses:
        assert response.status_code == 404
        assert response.json() == {"error": "Resource not found"}


def test_token_from_other_key_is_not_found(client: TestClient):
    """Tests that tokens issued under another salt do not resolve."""
    from obfuscation import IdTokenizer
    foreign = IdTokenizer("correct horse", "staple").encode(42)
    response = client.get(f"/api/v1/tokens/{foreign}")
    assert response.status_code == 404
