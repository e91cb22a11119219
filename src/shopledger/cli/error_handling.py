"""CLI error handling helpers."""

import json

import click

from shopledger.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def load_items_or_exit(ctx: click.Context, raw: str) -> list:
    """Parse a JSON array of line items, or exit with a CLI error."""
    try:
        items = json.loads(raw)
    except json.JSONDecodeError as e:
        click.echo(f"Error: --items is not valid JSON: {e}", err=True)
        ctx.exit(1)
    if not isinstance(items, list):
        click.echo("Error: --items must be a JSON array", err=True)
        ctx.exit(1)
    return items
