"""CLI helpers for resolving customer, supplier and product references."""

from __future__ import annotations

from typing import Iterable

import click

from shopledger.utils.resolver import resolve_reference


def resolve_or_exit(ctx: click.Context, candidates: Iterable, reference: str, kind: str) -> str:
    """Resolve an ID or name to an ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_reference(candidates, reference, kind)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
