"""Tests for app wiring: health, CORS, static site and OpenAPI schema."""

from fastapi.testclient import TestClient

from random_api import __version__
from random_api.core.app_factory import create_app
from random_api.services.dictionary_store import CATEGORIES


def test_health(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ok",
        "version": __version__,
        "dictionaries": len(CATEGORIES),
    }


def test_cors_allows_any_origin(client: TestClient):
    resp = client.get("/v1/int", headers={"Origin": "https://example.com"})

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(client: TestClient):
    resp = client.options(
        "/v1/uuid",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )

    assert resp.status_code == 200
    assert "GET" in resp.headers["access-control-allow-methods"]


def test_index_page(client: TestClient):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.headers["cache-control"] == "public, max-age=60"
    assert "Random Generation API" in resp.text


def test_unknown_static_path_is_404(client: TestClient):
    resp = client.get("/missing.js")

    assert resp.status_code == 404
    assert "cache-control" not in resp.headers


def test_static_site_can_be_disabled():
    client = TestClient(create_app(serve_static=False))

    assert client.get("/").status_code == 404
    assert client.get("/v1/ulid").status_code == 200


def test_openapi_documents_plain_text_errors(client: TestClient):
    schema = client.get("/openapi.json").json()

    tag_names = {tag["name"] for tag in schema["tags"]}
    assert {"Random", "Identifiers", "Health"} <= tag_names

    responses = schema["paths"]["/v1/int"]["get"]["responses"]
    assert "400" in responses
    assert "429" in responses
    assert "422" not in responses


def test_unexpected_error_keeps_middleware_headers():
    app = create_app(serve_static=False)

    @app.get("/v1/explode")
    async def explode():
        raise RuntimeError("database password is hunter2")

    client = TestClient(app, raise_server_exceptions=False)
    resp = client.get("/v1/explode", headers={"Origin": "https://example.com"})

    assert resp.status_code == 500
    assert resp.text == "Internal Server Error"
    assert "hunter2" not in resp.text
    assert resp.headers["x-request-id"]
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "x-ratelimit-limit" in resp.headers
