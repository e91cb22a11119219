"""Rendering helpers: camelCase JSON for machines, aligned text for people."""

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import click

from shopledger.utils.payload import camelize_keys


def _json_safe(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in camelize_keys(value).items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def to_payload(entity: Any) -> Any:
    """Convert an entity (or list of entities) to a camelCase JSON-ready structure."""
    if isinstance(entity, (list, tuple)):
        return [to_payload(item) for item in entity]
    if is_dataclass(entity):
        return _json_safe(asdict(entity))
    return _json_safe(entity)


def echo_json(entity: Any) -> None:
    """Print an entity (or list of entities) as camelCase JSON."""
    click.echo(json.dumps(to_payload(entity), indent=2))


def money(amount: Decimal) -> str:
    """Format a money amount for display."""
    return f"{amount:,.2f}"
