"""Pytest configuration and fixtures shared across all test modules.

Environment variables are set before any import that builds the settings
object, so tests never pick up a developer's .env file.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient

from random_api.core.app_factory import create_app
from random_api.core.rate_limit import reset_rate_limiter


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Every test starts with an empty request budget for every client."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()


@pytest.fixture
def client() -> TestClient:
    """Test client for a fully wired app (middleware, routers, static site)."""
    return TestClient(create_app())
