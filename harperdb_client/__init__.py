"""HarperDB Python Client.

A Python client for the HarperDB operations API over HTTP/JSON.

Usage:
    from harperdb_client import AsyncHarperDBClient

    db = AsyncHarperDBClient("http://localhost:9925", "HDB_ADMIN", "password")

    # Create a schema and a table
    await db.create_schema("dev")
    await db.create_table({"schema": "dev", "table": "dog", "hash_attribute": "id"})

    # Insert a record
    result = await db.insert({"id": 1, "name": "Penny"}, {"schema": "dev", "table": "dog"})

    # Search it back
    found = await db.search_by_hash([1], {"schema": "dev", "table": "dog"})
"""

from .client import AsyncHarperDBClient, HarperDBClient
from .config import ClientConfig
from .exceptions import ConfigurationError, HarperDBError
from .operations import Operation, SearchType
from .types import (
    DeleteResult,
    InsertResult,
    OperationResult,
    SearchCondition,
    SearchResult,
    UpdateResult,
    UpsertResult,
)
from .utils import UNSET, strip_unset, to_snake_case_keys

__version__ = "0.1.0"
__all__ = [
    "AsyncHarperDBClient",
    "HarperDBClient",
    "ClientConfig",
    "HarperDBError",
    "ConfigurationError",
    "Operation",
    "SearchType",
    "OperationResult",
    "InsertResult",
    "UpdateResult",
    "UpsertResult",
    "DeleteResult",
    "SearchResult",
    "SearchCondition",
    "UNSET",
    "strip_unset",
    "to_snake_case_keys",
]
