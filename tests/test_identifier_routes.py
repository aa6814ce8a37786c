import re

import pytest
from fastapi.testclient import TestClient

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def test_ulid(client: TestClient):
    resp = client.get("/v1/ulid")

    assert resp.status_code == 200
    assert re.match(r"^[0-9A-Z]{26}$", resp.text)


def test_default_nanoid(client: TestClient):
    resp = client.get("/v1/nanoid")

    assert resp.status_code == 200
    assert len(resp.text) == 21


def test_custom_size_nanoid(client: TestClient):
    assert len(client.get("/v1/nanoid", params={"size": 30}).text) == 30


@pytest.mark.parametrize("size", [0, 201])
def test_invalid_size_nanoid(client: TestClient, size: int):
    resp = client.get("/v1/nanoid", params={"size": size})

    assert resp.status_code == 400
    assert resp.text == "Invalid size, must be between 1 and 200"


@pytest.mark.parametrize("params", [{}, {"version": "4"}, {"version": "7"}])
def test_uuid(client: TestClient, params: dict):
    resp = client.get("/v1/uuid", params=params)

    assert resp.status_code == 200
    assert UUID_PATTERN.match(resp.text)
    assert resp.text[14] == params.get("version", "4")


def test_bad_uuid_version(client: TestClient):
    resp = client.get("/v1/uuid", params={"version": "9"})

    assert resp.status_code == 400
    assert "Invalid UUID version" in resp.text
