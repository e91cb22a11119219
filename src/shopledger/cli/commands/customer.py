"""Customer management commands."""

import click
from shopledger.domain.customer import CustomerService
from shopledger.domain.errors import DomainError
from shopledger.cli.error_handling import handle_domain_error
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit


@click.group()
def customer_group():
    """Manage customers."""
    pass


@customer_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", help="Phone number")
@click.option("--address", help="Address")
@click.pass_context
def add_customer(ctx, name: str, phone: str | None, address: str | None):
    """Add a customer. Balances start at zero.

    Examples:
        shopledger customer add "Amina Yusuf" --phone 0712345678
    """
    service = CustomerService(ctx.obj["db"])
    try:
        customer_id = service.create_customer(name=name, phone=phone, address=address)
        click.echo(f"Created customer '{name}' (ID: {customer_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@customer_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_customers(ctx, as_json: bool):
    """List customers with their balances."""
    service = CustomerService(ctx.obj["db"])
    customers = service.list_customers()

    if as_json:
        echo_json(customers)
        return
    if not customers:
        click.echo("No customers found.")
        return

    click.echo("\nCustomers:")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<36}  {'Name':<24} {'Phone':<14} {'Balance':>11} {'Purchased':>11} {'Paid':>11}"
    )
    click.echo("-" * 110)
    for c in customers:
        click.echo(
            f"{c.id:<36}  {c.name[:24]:<24} {(c.phone or '')[:14]:<14} {money(c.balance):>11} "
            f"{money(c.total_purchased):>11} {money(c.total_paid):>11}"
        )


@customer_group.command("update")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--name", help="New name")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New address")
@click.pass_context
def update_customer(ctx, customer: str, name: str | None, phone: str | None, address: str | None):
    """Update a customer's contact details.

    CUSTOMER can be a customer name or ID.
    """
    service = CustomerService(ctx.obj["db"])
    customer_id = resolve_or_exit(ctx, service.list_customers(), customer, "Customer")
    try:
        service.update_customer(customer_id, name=name, phone=phone, address=address)
        click.echo(f"Updated customer {customer_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@customer_group.command("delete")
@click.argument("customer", metavar="CUSTOMER")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_customer(ctx, customer: str, yes: bool):
    """Delete a customer.

    CUSTOMER can be a customer name or ID. Sales keep their customer snapshot.
    """
    service = CustomerService(ctx.obj["db"])
    customer_id = resolve_or_exit(ctx, service.list_customers(), customer, "Customer")
    customer_obj = service.require_customer(customer_id)

    if customer_obj.balance != 0:
        click.echo(f"Warning: customer '{customer_obj.name}' has an outstanding balance of {money(customer_obj.balance)}")
    if not yes and not click.confirm(f"Are you sure you want to delete customer '{customer_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_customer(customer_id)
        click.echo(f"Deleted customer '{customer_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register customer commands with main CLI."""
    cli.add_command(customer_group, name="customer")
