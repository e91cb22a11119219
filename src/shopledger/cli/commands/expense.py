"""Expense commands."""

import click
from shopledger.domain.expense import ExpenseService
from shopledger.domain.errors import DomainError
from shopledger.domain.entities import SHOP_ONE, SHOP_TWO
from shopledger.cli.error_handling import handle_domain_error
from shopledger.cli.output import echo_json, money


@click.group()
def expense_group():
    """Record and view shop expenses."""
    pass


@expense_group.command("add")
@click.argument("description", metavar="DESCRIPTION")
@click.argument("amount", metavar="AMOUNT")
@click.option("--category", help="Expense category (e.g. Rent, Transport)")
@click.option("--shop", type=click.Choice([SHOP_ONE, SHOP_TWO]), help="Shop the expense belongs to")
@click.pass_context
def add_expense(ctx, description: str, amount: str, category: str | None, shop: str | None):
    """Record an expense.

    Examples:
        shopledger expense add "Electricity" 1200 --category Utilities --shop shop-2
    """
    service = ExpenseService(ctx.obj["db"])
    try:
        expense_id = service.create_expense(
            description=description, amount=amount, category=category, shop_id=shop
        )
        click.echo(f"Recorded expense {expense_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@expense_group.command("list")
@click.option("--shop", type=click.Choice([SHOP_ONE, SHOP_TWO]), help="Only expenses for this shop")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_expenses(ctx, shop: str | None, as_json: bool):
    """List expenses, newest first."""
    expenses = ExpenseService(ctx.obj["db"]).list_expenses(shop_id=shop)

    if as_json:
        echo_json(expenses)
        return
    if not expenses:
        click.echo("No expenses found.")
        return

    for e in expenses:
        click.echo(
            f"{e.created_at:%Y-%m-%d}  {e.description[:30]:<30} {(e.category or '')[:14]:<14} "
            f"{e.shop_id or '':<7} {money(e.amount):>11}"
        )
    click.echo(f"\nTotal: {money(sum(e.amount for e in expenses))}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
