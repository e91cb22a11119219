"""Supplier management and supplier payment commands."""

import click
from shopledger.domain.supplier import SupplierService
from shopledger.domain.errors import DomainError
from shopledger.cli.error_handling import handle_domain_error
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit


@click.group()
def supplier_group():
    """Manage suppliers and payments made to them."""
    pass


@supplier_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--contact", help="Primary phone number")
@click.option("--alternate-phone", help="Alternate phone number")
@click.option("--shop-name", help="Supplier's trading name")
@click.option("--address", help="Address")
@click.option("--notes", help="Free-form notes")
@click.pass_context
def add_supplier(ctx, name: str, **details):
    """Add a supplier. Balances start at zero.

    Examples:
        shopledger supplier add "Mombasa Wholesalers" --contact 0722000000
    """
    service = SupplierService(ctx.obj["db"])
    try:
        supplier_id = service.create_supplier(name=name, **details)
        click.echo(f"Created supplier '{name}' (ID: {supplier_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_suppliers(ctx, as_json: bool):
    """List suppliers with what is owed to them."""
    service = SupplierService(ctx.obj["db"])
    suppliers = service.list_suppliers()

    if as_json:
        echo_json(suppliers)
        return
    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo("\nSuppliers:")
    click.echo("-" * 112)
    click.echo(
        f"{'ID':<36}  {'Name':<24} {'Balance':>11} {'Purchased':>11} {'Paid':>11}  {'Next payment':<12}"
    )
    click.echo("-" * 112)
    for s in suppliers:
        next_payment = s.next_payment_date.isoformat() if s.next_payment_date else ""
        click.echo(
            f"{s.id:<36}  {s.name[:24]:<24} {money(s.balance):>11} {money(s.total_purchased):>11} "
            f"{money(s.total_paid):>11}  {next_payment:<12}"
        )


@supplier_group.command("update")
@click.argument("supplier", metavar="SUPPLIER")
@click.option("--name", help="New name")
@click.option("--contact", help="New phone number")
@click.option("--alternate-phone", help="New alternate phone number")
@click.option("--shop-name", help="New trading name")
@click.option("--address", help="New address")
@click.option("--notes", help="New notes")
@click.pass_context
def update_supplier(ctx, supplier: str, **fields):
    """Update a supplier's details.

    SUPPLIER can be a supplier name or ID.
    """
    service = SupplierService(ctx.obj["db"])
    supplier_id = resolve_or_exit(ctx, service.list_suppliers(), supplier, "Supplier")
    try:
        service.update_supplier(supplier_id, **fields)
        click.echo(f"Updated supplier {supplier_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("delete")
@click.argument("supplier", metavar="SUPPLIER")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_supplier(ctx, supplier: str, yes: bool):
    """Delete a supplier.

    SUPPLIER can be a supplier name or ID.
    """
    service = SupplierService(ctx.obj["db"])
    supplier_id = resolve_or_exit(ctx, service.list_suppliers(), supplier, "Supplier")
    supplier_obj = service.require_supplier(supplier_id)

    if not yes and not click.confirm(f"Are you sure you want to delete supplier '{supplier_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_supplier(supplier_id)
        click.echo(f"Deleted supplier '{supplier_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@supplier_group.command("pay")
@click.argument("supplier", metavar="SUPPLIER")
@click.argument("amount", metavar="AMOUNT")
@click.option("--method", default="Cash", show_default=True, help="Payment method")
@click.option("--note", help="Note")
@click.pass_context
def pay_supplier(ctx, supplier: str, amount: str, method: str, note: str | None):
    """Record a payment of AMOUNT to a supplier.

    Examples:
        shopledger supplier pay "Mombasa Wholesalers" 2500
    """
    service = SupplierService(ctx.obj["db"])
    supplier_id = resolve_or_exit(ctx, service.list_suppliers(), supplier, "Supplier")
    try:
        payment_id = service.record_payment(
            {"supplierId": supplier_id, "amount": amount, "method": method, "note": note}
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    updated = service.require_supplier(supplier_id)
    click.echo(f"Recorded supplier payment {payment_id}")
    click.echo(f"  Supplier: {updated.name}  Still owed: {money(updated.balance)}")


@supplier_group.command("payments")
@click.option("--supplier", help="Only payments to this supplier (name or ID)")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_supplier_payments(ctx, supplier: str | None, as_json: bool):
    """List payments made to suppliers, newest first."""
    service = SupplierService(ctx.obj["db"])
    supplier_id = None
    if supplier:
        supplier_id = resolve_or_exit(ctx, service.list_suppliers(), supplier, "Supplier")
    payments = service.list_payments(supplier_id=supplier_id)

    if as_json:
        echo_json(payments)
        return
    if not payments:
        click.echo("No supplier payments found.")
        return

    click.echo(f"\nFound {len(payments)} supplier payment(s):")
    click.echo("-" * 90)
    for p in payments:
        click.echo(
            f"{p.created_at:%Y-%m-%d %H:%M}  {money(p.amount):>11}  {p.method or '':<8} "
            f"{p.supplier_id:<36}  {p.note or ''}"
        )


def register_commands(cli):
    """Register supplier commands with main CLI."""
    cli.add_command(supplier_group, name="supplier")
