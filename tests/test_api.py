"""HTTP API tests - routes, payload decoding and error status mapping."""

from urllib.parse import quote

import pytest


def _create(client, value):
    return client.post("/strings", json={"value": value})


# --- Create --------------------------------------------------------------------

def test_create_string(client):
    response = _create(client, "Racecar")
    assert response.status_code == 201
    body = response.json()
    assert body["value"] == "Racecar"
    assert body["id"] == body["properties"]["sha256_hash"]
    assert body["properties"]["is_palindrome"] is True
    assert body["properties"]["length"] == 7
    assert body["properties"]["character_frequency_map"]["r"] == 1
    assert "created_at" in body


def test_create_duplicate_conflicts(client):
    assert _create(client, "twice").status_code == 201
    response = _create(client, "twice")
    assert response.status_code == 409
    assert response.json()["code"] == "ALREADY_EXISTS"


def test_create_missing_value(client):
    response = client.post("/strings", json={})
    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_VALUE"


def test_create_null_value(client):
    assert client.post("/strings", json={"value": None}).status_code == 400


@pytest.mark.parametrize("value", [123, True, ["a"], {"a": 1}])
def test_create_non_string_value(client, value, store):
    response = client.post("/strings", json={"value": value})
    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_VALUE_TYPE"
    assert len(store) == 0


def test_create_lone_surrogate_is_rejected(client, store):
    # Valid JSON escape, but not encodable as UTF-8
    body = '{"value": "\\ud800"}'
    headers = {"Content-Type": "application/json"}

    response = client.post("/strings", content=body, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_VALUE_ENCODING"
    assert len(store) == 0

    assert client.post("/strings", content=body, headers=headers).status_code == 400
    assert client.get("/strings").status_code == 200


def test_create_malformed_json(client):
    response = client.post(
        "/strings",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_create_empty_string_is_allowed(client):
    response = _create(client, "")
    assert response.status_code == 201
    assert response.json()["properties"]["word_count"] == 0


# --- Get / delete --------------------------------------------------------------

def test_get_string(client):
    _create(client, "hello world")
    response = client.get("/strings/" + quote("hello world"))
    assert response.status_code == 200
    assert response.json()["properties"]["word_count"] == 2


def test_get_string_with_slash(client):
    _create(client, "a/b")
    response = client.get("/strings/" + quote("a/b", safe=""))
    assert response.status_code == 200
    assert response.json()["value"] == "a/b"


def test_get_missing_string(client):
    response = client.get("/strings/nothing-here")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_delete_string(client):
    _create(client, "bye")
    response = client.delete("/strings/bye")
    assert response.status_code == 204
    assert client.get("/strings/bye").status_code == 404
    assert client.delete("/strings/bye").status_code == 404


# --- List with filters ---------------------------------------------------------

@pytest.fixture
def seeded(client):
    for value in ["level", "hello world", "banana", "noon", "a quick brown fox"]:
        assert _create(client, value).status_code == 201
    return client


def test_list_all(seeded):
    body = seeded.get("/strings").json()
    assert body["count"] == 5
    assert body["filters_applied"] == {}


def test_list_with_filters(seeded):
    response = seeded.get("/strings", params={
        "is_palindrome": "true",
        "min_length": "4",
        "max_length": "5",
        "word_count": "1",
    })
    assert response.status_code == 200
    body = response.json()
    assert sorted(item["value"] for item in body["data"]) == ["level", "noon"]
    assert body["filters_applied"] == {
        "is_palindrome": True,
        "min_length": 4,
        "max_length": 5,
        "word_count": 1,
    }


def test_list_contains_character_case_insensitive(seeded):
    body = seeded.get("/strings", params={"contains_character": "B"}).json()
    assert sorted(item["value"] for item in body["data"]) == ["a quick brown fox", "banana"]


@pytest.mark.parametrize("params", [
    {"is_palindrome": "maybe"},
    {"min_length": "-3"},
    {"max_length": "abc"},
    {"word_count": "1.0"},
    {"contains_character": "ab"},
])
def test_list_invalid_filters(seeded, params):
    response = seeded.get("/strings", params=params)
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_FILTER_PARAMETER"


# --- Natural language ----------------------------------------------------------

def test_natural_language_query(seeded):
    response = seeded.get(
        "/strings/filter-by-natural-language",
        params={"query": "all single word palindromic strings"},
    )
    assert response.status_code == 200
    body = response.json()
    assert sorted(item["value"] for item in body["data"]) == ["level", "noon"]
    assert body["interpreted_query"] == {
        "original": "all single word palindromic strings",
        "parsed_filters": {"word_count": 1, "is_palindrome": True},
    }


def test_natural_language_missing_query(seeded):
    response = seeded.get("/strings/filter-by-natural-language")
    assert response.status_code == 400
    assert response.json()["code"] == "EMPTY_QUERY"


def test_natural_language_unparseable(seeded):
    response = seeded.get("/strings/filter-by-natural-language", params={"query": "xyz123"})
    assert response.status_code == 400
    assert response.json()["code"] == "UNPARSEABLE_QUERY"


# --- Misc ----------------------------------------------------------------------

def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert "POST /strings" in body["endpoints"]
