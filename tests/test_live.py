"""Round trip against a running HarperDB instance.

Skipped unless HARPERDB_URL and credentials (HARPERDB_USERNAME and
HARPERDB_PASSWORD, or HARPERDB_TOKEN) are set.
"""

import os
import uuid

import pytest

from harperdb_client import AsyncHarperDBClient

pytestmark = pytest.mark.skipif(
    not os.environ.get("HARPERDB_URL"), reason="HARPERDB_URL is not set"
)


@pytest.mark.asyncio
async def test_schema_table_record_round_trip():
    db = AsyncHarperDBClient.from_env()
    schema = f"test_{uuid.uuid4().hex[:8]}"
    params = {"schema": schema, "table": "dog"}

    created = await db.create_schema(schema)
    assert created.status == 200, created.error
    try:
        table = await db.create_table({**params, "hashAttribute": "id"})
        assert table.status == 200, table.error

        inserted = await db.insert_many([{"id": 1, "name": "Penny"}, {"id": 2}], params)
        assert sorted(inserted.inserted_hashes) == [1, 2]

        found = await db.search_by_hash([1], params)
        assert found.records[0]["name"] == "Penny"

        deleted = await db.delete_one(2, params)
        assert deleted.deleted_hashes == [2]
    finally:
        await db.drop_schema(schema)
