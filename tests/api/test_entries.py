"""Entry endpoint tests (in-memory store; no DB)."""

import pytest
from httpx import AsyncClient

STORE = "/api/v1/entries/store"
GET = "/api/v1/entries/get"
GET_MANY = "/api/v1/entries/get-many"


async def _store(client: AsyncClient, headers: dict[str, str], path: str, key: str, value):
    response = await client.post(
        STORE, json={"path": path, "key": key, "value": value}, headers=headers
    )
    assert response.status_code == 204, response.text
    return response


async def test_store_then_get_returns_value(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Write (Grade9/Math, note) = 3+, then read it back."""
    await _store(client, auth_headers, "Grade9/Math", "note", "3+")
    response = await client.post(
        GET, json={"path": "Grade9/Math", "key": "note"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json() == {"value": "3+"}


async def test_store_persists_before_returning(
    client: AsyncClient, auth_headers: dict[str, str], entry_store, tag_service
) -> None:
    await _store(client, auth_headers, "Grade9/Math", "note", "3+")
    tag = tag_service.derive_tag("Grade9/Math", "note")
    assert entry_store.entries[tag][0] == "3+"
    assert len(entry_store.updates) == 1


async def test_empty_value_reads_as_null(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _store(client, auth_headers, "p", "note", "x")
    await _store(client, auth_headers, "p", "note", "")
    response = await client.post(GET, json={"path": "p", "key": "note"}, headers=auth_headers)
    assert response.json() == {"value": None}


async def test_null_value_clears(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    await _store(client, auth_headers, "p", "note", "x")
    await _store(client, auth_headers, "p", "note", None)
    response = await client.post(GET, json={"path": "p", "key": "note"}, headers=auth_headers)
    assert response.json() == {"value": None}


async def test_get_unknown_returns_null(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        GET, json={"path": "nowhere", "key": "note"}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json() == {"value": None}


async def test_get_many_one_list_dimension(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _store(client, auth_headers, "student:alice/subject:Math", "note", "A")
    await _store(client, auth_headers, "student:bob/subject:Math", "note", "B")
    response = await client.post(
        GET_MANY,
        json={
            "path_arrays": [[["student", ["alice", "bob"]], ["subject", "Math"]]],
            "key": "note",
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"results": [["A", "B"]]}


async def test_get_many_two_list_dimensions(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _store(client, auth_headers, "student:alice/subject:Bio", "note", "alice-bio")
    response = await client.post(
        GET_MANY,
        json={
            "path_arrays": [[["student", ["alice", "bob"]], ["subject", ["Math", "Bio"]]]],
            "key": "note",
        },
        headers=auth_headers,
    )
    results = response.json()["results"]
    assert results == [[[None, "alice-bio"], [None, None]]]
    assert results[0][0][1] == "alice-bio"


async def test_get_many_scalar_vs_singleton(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _store(client, auth_headers, "subject:Math", "note", "m")
    response = await client.post(
        GET_MANY,
        json={
            "path_arrays": [[["subject", "Math"]], [["subject", ["Math"]]]],
            "key": "note",
        },
        headers=auth_headers,
    )
    assert response.json() == {"results": ["m", ["m"]]}


async def test_get_many_never_written_is_null(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        GET_MANY,
        json={"path_arrays": [[["student", ["ghost"]]]], "key": "note"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"results": [[None]]}


async def test_get_many_numeric_values_match_text_paths(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _store(client, auth_headers, "year:2024", "note", "n")
    response = await client.post(
        GET_MANY,
        json={"path_arrays": [[["year", [2024, 2025]]]], "key": "note"},
        headers=auth_headers,
    )
    assert response.json() == {"results": [["n", None]]}


async def test_get_many_does_not_write(
    client: AsyncClient, auth_headers: dict[str, str], entry_store
) -> None:
    await client.post(
        GET_MANY,
        json={"path_arrays": [[["a", ["1", "2"]]]], "key": "k"},
        headers=auth_headers,
    )
    assert entry_store.entries == {}
    assert entry_store.updates == []


@pytest.mark.parametrize(
    ("url", "body"),
    [
        (STORE, {"path": "p", "key": "k", "value": "v"}),
        (GET, {"path": "p", "key": "k"}),
        (GET_MANY, {"path_arrays": [], "key": "k"}),
    ],
)
async def test_entries_require_auth(client: AsyncClient, url: str, body: dict) -> None:
    response = await client.post(url, json=body)
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_invalid_token_rejected(client: AsyncClient, entry_store) -> None:
    response = await client.post(
        STORE,
        json={"path": "p", "key": "k", "value": "v"},
        headers={"X-JWT": "not.a.token"},
    )
    assert response.status_code == 401
    assert entry_store.updates == []


async def test_bearer_token_accepted(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    (token,) = auth_headers.values()
    response = await client.post(
        GET, json={"path": "p", "key": "k"}, headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 200


async def test_missing_key_is_400(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post(STORE, json={"path": "p", "key": "k"}, headers=auth_headers)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert data["message"] == "missing_key"
    assert data["details"]["field"] == "value"


async def test_wrong_value_type_is_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        STORE, json={"path": "p", "key": "k", "value": 3}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "invalid_type"


async def test_invalid_json_is_400(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post(
        GET,
        content=b"{not json",
        headers={**auth_headers, "content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "invalid_json"


async def test_deeply_nested_json_is_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Nesting past the decoder's recursion limit is a client error, not a 500."""
    depth = 100_000
    body = b'{"key":"note","path_arrays":' + b"[" * depth + b"]" * depth + b"}"
    response = await client.post(
        GET_MANY,
        content=body,
        headers={**auth_headers, "content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "invalid_json"


async def test_single_op_body_limit(
    client: AsyncClient, auth_headers: dict[str, str], entry_store
) -> None:
    """Store bodies must stay below the small single-op limit."""
    response = await client.post(
        STORE, json={"path": "p", "key": "k", "value": "x" * 600}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "too_much_data"
    assert entry_store.updates == []


async def test_get_many_accepts_larger_bodies(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    students = [f"student-{i:04d}" for i in range(200)]
    response = await client.post(
        GET_MANY,
        json={"path_arrays": [[["student", students]]], "key": "note"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["results"] == [[None] * 200]


async def test_get_many_invalid_template_is_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        GET_MANY,
        json={"path_arrays": [[["student", [True]]]], "key": "note"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "invalid_template"
    assert data["details"]["field"] == "path_arrays[0][0][1][0]"


async def test_get_many_path_arrays_must_be_list(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        GET_MANY, json={"path_arrays": "student", "key": "note"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "invalid_type"


async def test_oversized_request_is_413(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Bodies over the global cap are rejected before reaching the route."""
    response = await client.post(
        GET_MANY,
        content=b"x" * (2 * 1024 * 1024),
        headers={**auth_headers, "content-type": "application/json"},
    )
    assert response.status_code == 413
    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert data["message"] == "too_much_data"


async def test_storage_down_on_write_is_503_and_cache_unchanged(
    client: AsyncClient, auth_headers: dict[str, str], entry_store
) -> None:
    await _store(client, auth_headers, "p", "k", "before")
    entry_store.unavailable = True
    response = await client.post(
        STORE, json={"path": "p", "key": "k", "value": "after"}, headers=auth_headers
    )
    assert response.status_code == 503
    assert response.json()["error"] == "STORAGE_UNAVAILABLE"
    response = await client.post(GET, json={"path": "p", "key": "k"}, headers=auth_headers)
    assert response.json() == {"value": "before"}


async def test_reads_before_warm_are_503(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    from tresor.infrastructure.cache import EntryCache
    from tresor.main import app

    app.state.entry_cache = EntryCache()
    response = await client.post(GET, json={"path": "p", "key": "k"}, headers=auth_headers)
    assert response.status_code == 503
    assert response.json()["error"] == "CACHE_NOT_READY"
