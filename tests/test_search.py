"""Tests for the search operations."""

import pytest

from harperdb_client import SearchCondition, SearchResult, SearchType

from .conftest import SCHEMA, TABLE

RECORDS = [{"id": 0}, {"id": 1}]


@pytest.mark.asyncio
async def test_search_by_hash_defaults_to_all_attributes(db, server):
    server.reply(200, json=RECORDS)

    result = await db.search_by_hash([0, 1], {"schema": SCHEMA, "table": TABLE})

    assert server.last_body == {
        "operation": "search_by_hash",
        "schema": SCHEMA,
        "table": TABLE,
        "get_attributes": ["*"],
        "hash_values": [0, 1],
    }
    assert result == SearchResult(status=200, records=RECORDS)


@pytest.mark.asyncio
async def test_search_by_hash_with_get_attributes(db, server):
    server.reply(200, json=[{"age": 3}])

    await db.search_by_hash([0], {"schema": SCHEMA, "table": TABLE, "getAttributes": ["age"]})

    assert server.last_body["get_attributes"] == ["age"]
    assert "getAttributes" not in server.last_body


@pytest.mark.asyncio
async def test_search_by_hash_none_get_attributes_uses_default(db, server):
    await db.search_by_hash([0], {"schema": SCHEMA, "table": TABLE, "get_attributes": None})

    assert server.last_body["get_attributes"] == ["*"]


@pytest.mark.asyncio
async def test_search_with_empty_body_returns_no_records(db, server):
    server.reply(200, content=b"")

    result = await db.search_by_hash([5], {"schema": SCHEMA, "table": TABLE})

    assert result.status == 200
    assert result.records == []


@pytest.mark.asyncio
async def test_search_error_object_is_not_records(db, server):
    server.reply(500, json={"error": "Table 'dev.test' does not exist"})

    result = await db.search_by_hash([5], {"schema": SCHEMA, "table": TABLE})

    assert result.status == 500
    assert result.records == []
    assert result.error == "Table 'dev.test' does not exist"


@pytest.mark.asyncio
async def test_search_by_value(db, server):
    server.reply(200, json=RECORDS)

    result = await db.search_by_value("name", "ja*", {"schema": SCHEMA, "table": TABLE})

    assert server.last_body == {
        "operation": "search_by_value",
        "schema": SCHEMA,
        "table": TABLE,
        "get_attributes": ["*"],
        "search_attribute": "name",
        "search_value": "ja*",
    }
    assert result.records == RECORDS


@pytest.mark.asyncio
async def test_search_by_conditions_converts_condition_keys(db, server):
    server.reply(200, json=RECORDS)
    conditions = [{"searchAttribute": "name", "searchType": "contains", "searchValue": "jane"}]
    params = {"schema": SCHEMA, "table": TABLE, "offset": 1, "limit": 10, "operator": "and"}

    result = await db.search_by_conditions(conditions, params)

    assert server.last_body == {
        "operation": "search_by_conditions",
        "schema": SCHEMA,
        "table": TABLE,
        "operator": "and",
        "offset": 1,
        "limit": 10,
        "get_attributes": ["*"],
        "conditions": [
            {"search_attribute": "name", "search_type": "contains", "search_value": "jane"}
        ],
    }
    assert result.status == 200
    assert result.records == RECORDS


@pytest.mark.asyncio
async def test_search_by_conditions_with_get_attributes(db, server):
    conditions = [{"searchAttribute": "name", "searchType": "contains", "searchValue": "jane"}]

    await db.search_by_conditions(
        conditions, {"schema": SCHEMA, "table": TABLE, "getAttributes": ["age"]}
    )

    assert server.last_body["get_attributes"] == ["age"]


@pytest.mark.asyncio
async def test_search_by_conditions_accepts_search_condition_objects(db, server):
    conditions = [
        SearchCondition("age", SearchType.BETWEEN, (5, 10)),
        SearchCondition("name", "starts_with", "ja"),
    ]

    await db.search_by_conditions(conditions, {"schema": SCHEMA, "table": TABLE, "operator": "or"})

    assert server.last_body["operator"] == "or"
    assert server.last_body["conditions"] == [
        {"search_attribute": "age", "search_type": "between", "search_value": [5, 10]},
        {"search_attribute": "name", "search_type": "starts_with", "search_value": "ja"},
    ]
    assert "offset" not in server.last_body
