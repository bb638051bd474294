"""Key normalization and unset-value helpers."""

import re
from collections.abc import Mapping
from typing import Any


class _Unset:
    """Marker for an argument the caller did not supply.

    Distinct from ``None``, which is a real (JSON ``null``) value.
    """

    _instance: "_Unset | None" = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def to_snake_case(key: str) -> str:
    """Convert a single key to snake_case.

    ``hashAttribute`` -> ``hash_attribute``, ``HTTPServer`` -> ``http_server``.
    Keys that are already snake_case come back unchanged.
    """
    key = _LOWER_UPPER.sub(r"\1_\2", key)
    key = _ACRONYM_WORD.sub(r"\1_\2", key)
    return "_".join(part for part in _SEPARATORS.split(key) if part).lower()


def to_snake_case_keys(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """Return a copy of ``mapping`` with snake_case keys.

    Only the top-level keys are converted; values (nested mappings included)
    are carried over as-is.
    """
    return {
        to_snake_case(key) if isinstance(key, str) else key: value
        for key, value in mapping.items()
    }


def strip_unset(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """Return a copy of ``mapping`` without the entries whose value is ``UNSET``.

    Falsy values such as ``None``, ``0``, ``""`` and ``[]`` are kept.
    """
    return {key: value for key, value in mapping.items() if value is not UNSET}
