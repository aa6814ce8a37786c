"""Tests for the /v1 int, float, word and dice endpoints.

Responses are plain text: numbers are parsed straight from the body.
"""

import re

import pytest
from fastapi.testclient import TestClient

from random_api.core.config import settings
from random_api.services.dictionary_store import CATEGORIES, get_dictionary_store

DICE_FULL_PATTERN = re.compile(r"^-?\d+ \[[-\d ]*\]( \(\[[-\d ]*\]\))?$")


class TestIntEndpoint:
    def test_default_range(self, client: TestClient):
        resp = client.get("/v1/int")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert 0 <= int(resp.text) < 100

    @pytest.mark.parametrize(
        "params,low,high",
        [
            ({"min": 80}, 80, 100),
            ({"max": 300}, 0, 300),
            ({"min": 200, "max": 300}, 200, 300),
            ({"min": -500, "max": -100}, -500, -100),
        ],
    )
    def test_bounds(self, client: TestClient, params: dict, low: int, high: int):
        for _ in range(20):
            value = int(client.get("/v1/int", params=params).text)
            assert low <= value < high

    @pytest.mark.parametrize("low,high", [(20, 5), (-123, -345), (100, 100)])
    def test_unordered_bounds(self, client: TestClient, low: int, high: int):
        resp = client.get("/v1/int", params={"min": low, "max": high})

        assert resp.status_code == 400
        assert resp.text == f"min {low} should be less than max {high}"

    def test_non_integer_bound(self, client: TestClient):
        resp = client.get("/v1/int", params={"min": "abc"})

        assert resp.status_code == 400
        assert "min" in resp.text


class TestFloatEndpoint:
    def test_default_range(self, client: TestClient):
        resp = client.get("/v1/float")

        assert resp.status_code == 200
        assert 0.0 <= float(resp.text) < 1.0

    def test_negative_bounds(self, client: TestClient):
        for _ in range(20):
            value = float(client.get("/v1/float", params={"min": -1.5, "max": 2.5}).text)
            assert -1.5 <= value < 2.5

    def test_unordered_bounds(self, client: TestClient):
        resp = client.get("/v1/float", params={"min": 100.0, "max": -2.0})

        assert resp.status_code == 400
        assert "should be less than max" in resp.text


class TestWordEndpoint:
    def test_default_word(self, client: TestClient):
        resp = client.get("/v1/word")

        assert resp.status_code == 200
        assert resp.text in get_dictionary_store()["words"]

    @pytest.mark.parametrize("category", CATEGORIES)
    def test_every_category(self, client: TestClient, category: str):
        resp = client.get("/v1/word", params={"category": category})

        assert resp.status_code == 200
        assert resp.text in get_dictionary_store()[category]

    def test_count(self, client: TestClient):
        resp = client.get("/v1/word", params={"count": 5})

        words = resp.text.split(" ")
        assert len(words) == 5
        assert set(words) <= set(get_dictionary_store()["words"])

    def test_separator(self, client: TestClient):
        resp = client.get("/v1/word", params={"count": 5, "separator": ","})

        assert resp.text.count(",") == 4

    def test_unknown_category_lists_all(self, client: TestClient):
        resp = client.get("/v1/word", params={"category": "planets"})

        assert resp.status_code == 400
        assert resp.text.startswith("Invalid category, must be one of ")
        for category in CATEGORIES:
            assert category in resp.text

    def test_count_above_limit(self, client: TestClient, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(settings.app, "max_word_count", 3)

        resp = client.get("/v1/word", params={"count": 4})

        assert resp.status_code == 400
        assert resp.text == "Invalid count, must be between 1 and 3"


class TestDiceEndpoint:
    def test_default_dice(self, client: TestClient):
        resp = client.get("/v1/dice")

        assert resp.status_code == 200
        assert 1 <= int(resp.text) <= 6

    def test_2d20(self, client: TestClient):
        for _ in range(20):
            assert 2 <= int(client.get("/v1/dice", params={"input": "2d20"}).text) <= 40

    def test_fudge(self, client: TestClient):
        for _ in range(20):
            assert -4 <= int(client.get("/v1/dice", params={"input": "4df"}).text) <= 4

    def test_fudge_with_modifier(self, client: TestClient):
        resp = client.get("/v1/dice", params={"input": "4df+10"})

        assert 6 <= int(resp.text) <= 14

    def test_drop_lowest(self, client: TestClient):
        resp = client.get("/v1/dice", params={"input": "4d6dl1", "output": "full"})

        assert resp.status_code == 200
        assert DICE_FULL_PATTERN.match(resp.text), resp.text
        assert 3 <= int(resp.text.split(" ")[0]) <= 18

    @pytest.mark.parametrize("notation", ["3d6kh2", "4d10kl3", "4d6dl1", "38d12", "4df+2"])
    def test_full_output(self, client: TestClient, notation: str):
        resp = client.get("/v1/dice", params={"input": notation, "output": "full"})

        assert resp.status_code == 200
        assert DICE_FULL_PATTERN.match(resp.text), resp.text

    def test_invalid_output_is_client_error(self, client: TestClient):
        resp = client.get("/v1/dice", params={"input": "4df", "output": "invalid"})

        assert resp.status_code == 400
        assert resp.text == "invalid output, must be sum or full"

    @pytest.mark.parametrize(
        "notation,message",
        [
            ("banana", "Bad roll format"),
            ("0d6", "Count must be 1 or more"),
            ("2d6kh3", "Cannot keep more dice than rolled"),
            ("", "Invalid input"),
            ("1d6" + "+1" * 60, "Invalid input"),
        ],
    )
    def test_invalid_input(self, client: TestClient, notation: str, message: str):
        resp = client.get("/v1/dice", params={"input": notation})

        assert resp.status_code == 400
        assert resp.text == message
