"""Type definitions for HarperDB client."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Literal, TypedDict, TypeVar

from .operations import SearchType

HashValue = str | int | float
Record = dict[str, Any]


class TableParams(TypedDict):
    """Target table of a record operation or of ``drop_table``."""

    schema: str
    table: str


class CreateTableParams(TableParams):
    """Parameters of ``create_table``.

    camelCase keys (``hashAttribute``) are accepted as well and converted
    before sending.
    """

    hash_attribute: str


class AttributeParams(TableParams):
    """Parameters of ``create_attribute``/``drop_attribute``, sent as given."""

    attribute: str


class _OptionalSearchParams(TypedDict, total=False):
    get_attributes: list[str]


class SearchParams(TableParams, _OptionalSearchParams):
    """Parameters shared by the search operations.

    ``get_attributes`` defaults to ``["*"]`` (every attribute).
    """


class _OptionalConditionParams(TypedDict, total=False):
    operator: Literal["and", "or"]
    offset: int
    limit: int


class SearchByConditionsParams(SearchParams, _OptionalConditionParams):
    """Parameters of ``search_by_conditions``."""


@dataclass
class SearchCondition:
    """A single filter of ``search_by_conditions``.

    For ``SearchType.BETWEEN`` the search value is a ``(min, max)`` pair.
    """

    search_attribute: str
    search_type: SearchType | str
    search_value: Any

    def to_dict(self) -> dict[str, Any]:
        search_type = self.search_type
        if isinstance(search_type, SearchType):
            search_type = search_type.value
        return {
            "search_attribute": self.search_attribute,
            "search_type": search_type,
            "search_value": self.search_value,
        }


_R = TypeVar("_R", bound="OperationResult")


@dataclass
class OperationResult:
    """Result of a schema, table or attribute operation.

    ``status`` is the HTTP status code. ``message`` and ``error`` are passed
    through from the response body and are ``None`` when absent.
    """

    status: int
    message: str | None = None
    error: str | None = None

    @classmethod
    def from_response(cls: type[_R], status: int, body: Any) -> _R:
        """Create a result from the status code and decoded response body."""
        data = body if isinstance(body, dict) else {}
        values = {f.name: data.get(f.name) for f in fields(cls) if f.name != "status"}
        return cls(status=status, **values)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class InsertResult(OperationResult):
    """Result of ``insert``/``insert_many``."""

    inserted_hashes: list[HashValue] | None = None
    skipped_hashes: list[HashValue] | None = None


@dataclass
class UpdateResult(OperationResult):
    """Result of ``update_one``/``update_many``."""

    update_hashes: list[HashValue] | None = None
    skipped_hashes: list[HashValue] | None = None


@dataclass
class UpsertResult(OperationResult):
    """Result of ``upsert_one``/``upsert_many``."""

    upserted_hashes: list[HashValue] | None = None
    skipped_hashes: list[HashValue] | None = None


@dataclass
class DeleteResult(OperationResult):
    """Result of ``delete_one``/``delete_many``."""

    deleted_hashes: list[HashValue] | None = None
    skipped_hashes: list[HashValue] | None = None


@dataclass
class SearchResult(OperationResult):
    """Result of the search operations.

    ``records`` holds the response body when it is a JSON array and is empty
    otherwise; an error object from the server lands in ``error``/``message``.
    """

    records: list[Record] = field(default_factory=list)

    @classmethod
    def from_response(cls, status: int, body: Any) -> "SearchResult":
        data = body if isinstance(body, dict) else {}
        return cls(
            status=status,
            message=data.get("message"),
            error=data.get("error"),
            records=body if isinstance(body, list) else [],
        )
