"""Main CLI entry point."""

import logging

import click
from shopledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from shopledger.cli.commands import (
    product,
    customer,
    sale,
    payment,
    supplier,
    purchase,
    expense,
    reset,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Send shopledger logs to stderr at the given level."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("shopledger").setLevel(level.upper())


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SHOPLEDGER_DB_PATH environment variable)",
    envvar="SHOPLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="SHOPLEDGER_LOG_LEVEL",
    help="Logging level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Shopledger - inventory and accounts for a two-shop business.

    Track products in both shops, sales and returns, customer balances,
    supplier purchases and payments, and expenses.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
product.register_commands(cli)
customer.register_commands(cli)
sale.register_commands(cli)
payment.register_commands(cli)
supplier.register_commands(cli)
purchase.register_commands(cli)
expense.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
