"""Shared fixtures: a fresh store per test and an HTTP client bound to it."""

import pytest
from fastapi.testclient import TestClient

from string_analyzer.main import app
from string_analyzer.store import StringStore, get_store


@pytest.fixture
def store():
    return StringStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
