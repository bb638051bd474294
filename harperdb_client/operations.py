"""Operation names understood by the HarperDB operations endpoint."""

from enum import Enum


class Operation(str, Enum):
    """Value of the ``operation`` field of every request body."""

    CREATE_SCHEMA = "create_schema"
    DROP_SCHEMA = "drop_schema"
    CREATE_TABLE = "create_table"
    DROP_TABLE = "drop_table"
    CREATE_ATTRIBUTE = "create_attribute"
    DROP_ATTRIBUTE = "drop_attribute"
    INSERT = "insert"
    UPDATE = "update"
    UPSERT = "upsert"
    DELETE = "delete"
    SEARCH_BY_HASH = "search_by_hash"
    SEARCH_BY_VALUE = "search_by_value"
    SEARCH_BY_CONDITIONS = "search_by_conditions"


class SearchType(str, Enum):
    """Comparison used by a single ``search_by_conditions`` condition.

    ``BETWEEN`` expects a two-element ``(min, max)`` search value.
    """

    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    GREATER_THAN = "greater_than"
    GREATER_THAN_EQUAL = "greater_than_equal"
    LESS_THAN = "less_than"
    LESS_THAN_EQUAL = "less_than_equal"
    BETWEEN = "between"
