"""HarperDB HTTP client."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from .config import ClientConfig
from .operations import Operation
from .types import (
    AttributeParams,
    CreateTableParams,
    DeleteResult,
    HashValue,
    InsertResult,
    OperationResult,
    SearchByConditionsParams,
    SearchCondition,
    SearchParams,
    SearchResult,
    TableParams,
    UpdateResult,
    UpsertResult,
)
from .utils import UNSET, strip_unset, to_snake_case_keys

logger = logging.getLogger(__name__)

_ALL_ATTRIBUTES = "*"


class _BaseClient:
    """Auth handling and request bodies shared by the sync and async clients."""

    def __init__(
        self,
        url: str,
        username: str = UNSET,
        password: str = UNSET,
        token: str = UNSET,
        *,
        transport: Any = None,
        timeout: Any = UNSET,
    ):
        self._config = ClientConfig(
            url=url, username=username, password=password, token=token
        )
        self._transport = transport
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any):
        """Create a client from an existing ``ClientConfig``."""
        return cls(config.url, config.username, config.password, config.token, **kwargs)

    @classmethod
    def from_env(cls, prefix: str = "HARPERDB_", **kwargs: Any):
        """Create a client from ``<prefix>URL``/``USERNAME``/``PASSWORD``/``TOKEN``."""
        return cls.from_config(ClientConfig.from_env(prefix), **kwargs)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def url(self) -> str:
        return self._config.url

    @property
    def generated_token(self) -> str:
        """The explicit token, or base64 of ``username:password``."""
        return self._config.basic_token

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Basic {self.generated_token}",
            "Content-Type": "application/json",
        }

    @property
    def auth(self) -> dict[str, str]:
        """The auth options in use: url plus either username/password or token."""
        config = self._config
        return strip_unset(
            {
                "url": config.url,
                "username": UNSET if config.uses_token else config.username,
                "password": UNSET if config.uses_token else config.password,
                "token": config.token,
            }
        )

    def _client_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"transport": self._transport}
        if self._timeout is not UNSET:
            kwargs["timeout"] = self._timeout
        return kwargs

    def _decode(self, response: httpx.Response, operation: str) -> Any:
        """Decode the response body; an empty or non-JSON body becomes ``None``."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(
                "Discarding non-JSON body of %s response (status %s)",
                operation,
                response.status_code,
            )
            return None

    @staticmethod
    def _schema_payload(operation: Operation, schema: str) -> dict[str, Any]:
        return {"operation": operation.value, "schema": schema}

    @staticmethod
    def _table_payload(operation: Operation, params: Mapping[str, Any]) -> dict[str, Any]:
        return {"operation": operation.value, **to_snake_case_keys(params)}

    @staticmethod
    def _attribute_payload(
        operation: Operation, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        return {"operation": operation.value, **params}

    @staticmethod
    def _records_payload(
        operation: Operation, records: Sequence[Any], params: Mapping[str, Any]
    ) -> dict[str, Any]:
        return {"operation": operation.value, **params, "records": records}

    @staticmethod
    def _delete_payload(
        hash_values: Sequence[HashValue], params: Mapping[str, Any]
    ) -> dict[str, Any]:
        return {"operation": Operation.DELETE.value, **params, "hash_values": hash_values}

    @staticmethod
    def _search_payload(
        operation: Operation, params: Mapping[str, Any], **fields: Any
    ) -> dict[str, Any]:
        payload = {"operation": operation.value, **to_snake_case_keys(params)}
        if payload.get("get_attributes") is None:
            payload["get_attributes"] = [_ALL_ATTRIBUTES]
        payload.update(fields)
        return payload

    @staticmethod
    def _condition_payload(condition: SearchCondition | Mapping[str, Any]) -> dict[str, Any]:
        if isinstance(condition, SearchCondition):
            return condition.to_dict()
        return to_snake_case_keys(condition)


class AsyncHarperDBClient(_BaseClient):
    """Async HTTP client for the HarperDB operations API.

    Every method sends exactly one POST to ``url`` and returns the status code
    and response fields as a result object. A non-2xx status is reported in
    the result, not raised. Transport failures propagate as the underlying
    ``httpx`` exception.

    Args:
        url: The HarperDB operations endpoint (e.g., "http://localhost:9925").
        username: HarperDB user name.
        password: Password of ``username``.
        token: Basic auth token to send instead of username/password.
        transport: Optional ``httpx.AsyncBaseTransport`` to send requests with.
        timeout: Optional httpx timeout; httpx's default applies when omitted.

    Raises:
        ConfigurationError: If neither a token nor username and password are
            given, or only one of username/password.

    Example:
        >>> db = AsyncHarperDBClient("http://localhost:9925", "HDB_ADMIN", "password")
        >>> await db.create_schema("dev")
        >>> await db.create_table({"schema": "dev", "table": "dog", "hash_attribute": "id"})
        >>> result = await db.search_by_hash([1], {"schema": "dev", "table": "dog"})
        >>> print(result.records)
    """

    async def _post(self, payload: dict[str, Any]) -> tuple[int, Any]:
        """Send one operation and return its status code and decoded body."""
        operation = payload["operation"]
        logger.debug("Sending %s request to %s", operation, self.url)
        async with httpx.AsyncClient(**self._client_kwargs()) as client:
            response = await client.post(self.url, json=payload, headers=self.headers)
        logger.debug("%s responded with status %s", operation, response.status_code)
        return response.status_code, self._decode(response, operation)

    async def create_schema(self, schema: str) -> OperationResult:
        """Create a new schema.

        Args:
            schema: Name of the schema to create.

        Returns:
            OperationResult with the server's status, message and error.
        """
        payload = self._schema_payload(Operation.CREATE_SCHEMA, schema)
        return OperationResult.from_response(*await self._post(payload))

    async def drop_schema(self, schema: str) -> OperationResult:
        """Drop a schema and every table in it.

        Args:
            schema: Name of the schema to drop.

        Returns:
            OperationResult with the server's status, message and error.
        """
        payload = self._schema_payload(Operation.DROP_SCHEMA, schema)
        return OperationResult.from_response(*await self._post(payload))

    async def create_table(self, params: CreateTableParams) -> OperationResult:
        """Create a new table.

        Args:
            params: ``schema``, ``table`` and ``hash_attribute`` (or
                ``hashAttribute``) of the new table.

        Returns:
            OperationResult with the server's status, message and error.
        """
        payload = self._table_payload(Operation.CREATE_TABLE, params)
        return OperationResult.from_response(*await self._post(payload))

    async def drop_table(self, params: TableParams) -> OperationResult:
        """Drop a table.

        Args:
            params: ``schema`` and ``table`` to drop.
        """
        payload = self._table_payload(Operation.DROP_TABLE, params)
        return OperationResult.from_response(*await self._post(payload))

    async def create_attribute(self, params: AttributeParams) -> OperationResult:
        """Create a new attribute.

        HarperDB also creates attributes on insert and update when they do
        not exist yet. ``params`` are sent without key conversion.

        Args:
            params: ``schema``, ``table`` and ``attribute``.
        """
        payload = self._attribute_payload(Operation.CREATE_ATTRIBUTE, params)
        return OperationResult.from_response(*await self._post(payload))

    async def drop_attribute(self, params: AttributeParams) -> OperationResult:
        """Drop an attribute along with all of its values in the table.

        Args:
            params: ``schema``, ``table`` and ``attribute``.
        """
        payload = self._attribute_payload(Operation.DROP_ATTRIBUTE, params)
        return OperationResult.from_response(*await self._post(payload))

    async def insert(self, record: Mapping[str, Any], params: TableParams) -> InsertResult:
        """Insert one record.

        The record must carry the table's hash attribute.

        Args:
            record: The record to insert.
            params: ``schema`` and ``table`` to insert into.

        Returns:
            InsertResult with ``inserted_hashes`` and ``skipped_hashes``.
        """
        return await self.insert_many([record], params)

    async def insert_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> InsertResult:
        """Insert one or more records.

        Args:
            records: The records to insert.
            params: ``schema`` and ``table`` to insert into.

        Returns:
            InsertResult with ``inserted_hashes`` and ``skipped_hashes``.
        """
        payload = self._records_payload(Operation.INSERT, records, params)
        return InsertResult.from_response(*await self._post(payload))

    async def update_one(self, record: Mapping[str, Any], params: TableParams) -> UpdateResult:
        """Update one record identified by its hash attribute."""
        return await self.update_many([record], params)

    async def update_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> UpdateResult:
        """Update records identified by their hash attribute.

        Returns:
            UpdateResult with ``update_hashes`` and ``skipped_hashes``.
        """
        payload = self._records_payload(Operation.UPDATE, records, params)
        return UpdateResult.from_response(*await self._post(payload))

    async def upsert_one(self, record: Mapping[str, Any], params: TableParams) -> UpsertResult:
        """Insert or update one record by its hash attribute."""
        return await self.upsert_many([record], params)

    async def upsert_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> UpsertResult:
        """Insert or update records by their hash attribute.

        Returns:
            UpsertResult with ``upserted_hashes`` and ``skipped_hashes``.
        """
        payload = self._records_payload(Operation.UPSERT, records, params)
        return UpsertResult.from_response(*await self._post(payload))

    async def delete_one(self, hash_value: HashValue, params: TableParams) -> DeleteResult:
        """Delete the record with the given hash value."""
        return await self.delete_many([hash_value], params)

    async def delete_many(
        self, hash_values: Sequence[HashValue], params: TableParams
    ) -> DeleteResult:
        """Delete the records with the given hash values.

        Returns:
            DeleteResult with ``deleted_hashes`` and ``skipped_hashes``.
        """
        payload = self._delete_payload(hash_values, params)
        return DeleteResult.from_response(*await self._post(payload))

    async def search_by_hash(
        self, hash_values: Sequence[HashValue], params: SearchParams
    ) -> SearchResult:
        """Fetch records by hash value.

        Args:
            hash_values: Hash values of the records to fetch.
            params: ``schema``, ``table`` and optionally ``get_attributes``.

        Returns:
            SearchResult with the found records.
        """
        payload = self._search_payload(
            Operation.SEARCH_BY_HASH, params, hash_values=hash_values
        )
        return SearchResult.from_response(*await self._post(payload))

    async def search_by_value(
        self, search_attribute: str, search_value: Any, params: SearchParams
    ) -> SearchResult:
        """Fetch records whose ``search_attribute`` matches ``search_value``.

        Args:
            search_attribute: Attribute to match on.
            search_value: Value to match; wildcards are allowed.
            params: ``schema``, ``table`` and optionally ``get_attributes``.

        Returns:
            SearchResult with the found records.
        """
        payload = self._search_payload(
            Operation.SEARCH_BY_VALUE,
            params,
            search_attribute=search_attribute,
            search_value=search_value,
        )
        return SearchResult.from_response(*await self._post(payload))

    async def search_by_conditions(
        self,
        conditions: Sequence[SearchCondition | Mapping[str, Any]],
        params: SearchByConditionsParams,
    ) -> SearchResult:
        """Fetch records matching a list of conditions.

        Args:
            conditions: One or more ``SearchCondition`` objects or mappings
                with ``search_attribute``, ``search_type`` and ``search_value``
                (camelCase keys are converted).
            params: ``schema``, ``table`` and optionally ``get_attributes``,
                ``operator`` ("and"/"or"), ``offset`` and ``limit``.

        Returns:
            SearchResult with the found records.

        Example:
            >>> await db.search_by_conditions(
            ...     [SearchCondition("age", SearchType.BETWEEN, (5, 10))],
            ...     {"schema": "dev", "table": "dog", "operator": "and"},
            ... )
        """
        payload = self._search_payload(
            Operation.SEARCH_BY_CONDITIONS,
            params,
            conditions=[self._condition_payload(c) for c in conditions],
        )
        return SearchResult.from_response(*await self._post(payload))


class HarperDBClient(_BaseClient):
    """Blocking HTTP client for the HarperDB operations API.

    Same interface as AsyncHarperDBClient without async/await.
    ``transport`` takes an ``httpx.BaseTransport``.
    """

    def _post(self, payload: dict[str, Any]) -> tuple[int, Any]:
        operation = payload["operation"]
        logger.debug("Sending %s request to %s", operation, self.url)
        with httpx.Client(**self._client_kwargs()) as client:
            response = client.post(self.url, json=payload, headers=self.headers)
        logger.debug("%s responded with status %s", operation, response.status_code)
        return response.status_code, self._decode(response, operation)

    def create_schema(self, schema: str) -> OperationResult:
        payload = self._schema_payload(Operation.CREATE_SCHEMA, schema)
        return OperationResult.from_response(*self._post(payload))

    def drop_schema(self, schema: str) -> OperationResult:
        payload = self._schema_payload(Operation.DROP_SCHEMA, schema)
        return OperationResult.from_response(*self._post(payload))

    def create_table(self, params: CreateTableParams) -> OperationResult:
        payload = self._table_payload(Operation.CREATE_TABLE, params)
        return OperationResult.from_response(*self._post(payload))

    def drop_table(self, params: TableParams) -> OperationResult:
        payload = self._table_payload(Operation.DROP_TABLE, params)
        return OperationResult.from_response(*self._post(payload))

    def create_attribute(self, params: AttributeParams) -> OperationResult:
        payload = self._attribute_payload(Operation.CREATE_ATTRIBUTE, params)
        return OperationResult.from_response(*self._post(payload))

    def drop_attribute(self, params: AttributeParams) -> OperationResult:
        payload = self._attribute_payload(Operation.DROP_ATTRIBUTE, params)
        return OperationResult.from_response(*self._post(payload))

    def insert(self, record: Mapping[str, Any], params: TableParams) -> InsertResult:
        return self.insert_many([record], params)

    def insert_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> InsertResult:
        payload = self._records_payload(Operation.INSERT, records, params)
        return InsertResult.from_response(*self._post(payload))

    def update_one(self, record: Mapping[str, Any], params: TableParams) -> UpdateResult:
        return self.update_many([record], params)

    def update_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> UpdateResult:
        payload = self._records_payload(Operation.UPDATE, records, params)
        return UpdateResult.from_response(*self._post(payload))

    def upsert_one(self, record: Mapping[str, Any], params: TableParams) -> UpsertResult:
        return self.upsert_many([record], params)

    def upsert_many(
        self, records: Sequence[Mapping[str, Any]], params: TableParams
    ) -> UpsertResult:
        payload = self._records_payload(Operation.UPSERT, records, params)
        return UpsertResult.from_response(*self._post(payload))

    def delete_one(self, hash_value: HashValue, params: TableParams) -> DeleteResult:
        return self.delete_many([hash_value], params)

    def delete_many(
        self, hash_values: Sequence[HashValue], params: TableParams
    ) -> DeleteResult:
        payload = self._delete_payload(hash_values, params)
        return DeleteResult.from_response(*self._post(payload))

    def search_by_hash(
        self, hash_values: Sequence[HashValue], params: SearchParams
    ) -> SearchResult:
        payload = self._search_payload(
            Operation.SEARCH_BY_HASH, params, hash_values=hash_values
        )
        return SearchResult.from_response(*self._post(payload))

    def search_by_value(
        self, search_attribute: str, search_value: Any, params: SearchParams
    ) -> SearchResult:
        payload = self._search_payload(
            Operation.SEARCH_BY_VALUE,
            params,
            search_attribute=search_attribute,
            search_value=search_value,
        )
        return SearchResult.from_response(*self._post(payload))

    def search_by_conditions(
        self,
        conditions: Sequence[SearchCondition | Mapping[str, Any]],
        params: SearchByConditionsParams,
    ) -> SearchResult:
        payload = self._search_payload(
            Operation.SEARCH_BY_CONDITIONS,
            params,
            conditions=[self._condition_payload(c) for c in conditions],
        )
        return SearchResult.from_response(*self._post(payload))
