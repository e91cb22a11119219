"""Reset command."""

import click
from shopledger.domain.maintenance import MaintenanceService


@click.command("reset")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def reset(ctx, yes: bool):
    """Delete every product, sale, payment, purchase, customer, supplier and expense.

    This cannot be undone.
    """
    if not yes and not click.confirm("This deletes ALL data. Continue?"):
        click.echo("Reset cancelled.")
        return

    counts = MaintenanceService(ctx.obj["db"]).reset_all()
    click.echo(f"Reset complete: removed {sum(counts.values())} row(s)")
    for table, count in counts.items():
        if count:
            click.echo(f"  {table}: {count}")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
