"""Helpers for reading and writing external (camelCase) payloads."""

import re
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def camel_to_snake(name: str) -> str:
    """Convert ``customerName`` to ``customer_name``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    """Convert ``customer_name`` to ``customerName``."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def pick(payload: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    """Return the first present, non-None value among ``names``.

    Each name is tried as given and in its snake_case and camelCase forms,
    so callers may list either convention.
    """
    for name in names:
        for key in (name, camel_to_snake(name), snake_to_camel(name)):
            value = payload.get(key)
            if value is not None:
                return value
    return default


def camelize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with snake_case keys renamed to camelCase."""
    return {snake_to_camel(key): value for key, value in data.items()}
