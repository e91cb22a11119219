"""Supplier purchase commands."""

import click
from shopledger.domain.purchase import PurchaseService
from shopledger.domain.supplier import SupplierService
from shopledger.domain.errors import DomainError
from shopledger.domain.entities import SHOP_ONE, SHOP_TWO, Purchase
from shopledger.cli.error_handling import handle_domain_error, load_items_or_exit
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit


@click.group()
def purchase_group():
    """Record and view stock purchases."""
    pass


@purchase_group.command("record")
@click.option("--supplier", required=True, help="Supplier name or ID")
@click.option(
    "--items",
    required=True,
    help='JSON array of lines, e.g. \'[{"productId": "...", "quantity": 10, "costPrice": 9.5}]\'',
)
@click.option("--paid", default="0", show_default=True, help="Amount paid now")
@click.option("--shop", type=click.Choice([SHOP_ONE, SHOP_TWO]), help="Shop receiving the stock")
@click.option("--due-date", help="When the supplier expects the remainder (e.g. 2024-03-01, 'in 2 weeks')")
@click.pass_context
def record_purchase(
    ctx, supplier: str, items: str, paid: str, shop: str | None, due_date: str | None
):
    """Record a purchase from a supplier.

    Every product on the purchase is restocked and takes this purchase's cost
    price. If any line fails, nothing is recorded.

    Examples:
        shopledger purchase record --supplier "Mombasa Wholesalers" \\
            --items '[{"productId": "p1", "quantity": 10, "costPrice": 9.5}]' --paid 50
    """
    db = ctx.obj["db"]
    supplier_id = resolve_or_exit(ctx, SupplierService(db).list_suppliers(), supplier, "Supplier")

    try:
        receipt = PurchaseService(db).record_purchase(
            {
                "supplierId": supplier_id,
                "items": load_items_or_exit(ctx, items),
                "paidAmount": paid,
                "shopId": shop,
                "dueDate": due_date,
            }
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Recorded purchase {receipt.id}")
    click.echo(f"  Total: {money(receipt.total_amount)}  Remaining: {money(receipt.remaining_amount)}")
    for warning in receipt.warnings:
        click.echo(f"  Warning: {warning}")


def _echo_purchase_detail(purchase: Purchase) -> None:
    click.echo(f"\nPurchase {purchase.id}  ({purchase.created_at:%Y-%m-%d %H:%M}, {purchase.shop_id or '-'})")
    click.echo(f"  Supplier: {purchase.supplier_name or purchase.supplier_id}")
    for item in purchase.items:
        click.echo(
            f"  {item.quantity:>4} x {item.name[:30]:<30} @ {money(item.cost_price):>10} = {money(item.total):>10}"
        )
    click.echo(
        f"  Total: {money(purchase.total_amount)}  Paid: {money(purchase.paid_amount)}  "
        f"Remaining: {money(purchase.remaining_amount)}"
    )


@purchase_group.command("list")
@click.option("--supplier", help="Only purchases from this supplier (name or ID)")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_purchases(ctx, supplier: str | None, as_json: bool):
    """List purchases, newest first."""
    db = ctx.obj["db"]
    supplier_id = None
    if supplier:
        supplier_id = resolve_or_exit(ctx, SupplierService(db).list_suppliers(), supplier, "Supplier")
    purchases = PurchaseService(db).list_purchases(supplier_id=supplier_id)

    if as_json:
        echo_json(purchases)
        return
    if not purchases:
        click.echo("No purchases found.")
        return

    click.echo(f"\nFound {len(purchases)} purchase(s):")
    click.echo("-" * 100)
    for p in purchases:
        click.echo(
            f"{p.id:<36}  {p.created_at:%Y-%m-%d} {(p.supplier_name or '')[:20]:<20} "
            f"{len(p.items):>3} item(s) {money(p.total_amount):>11} {money(p.remaining_amount):>11}"
        )


@purchase_group.command("show")
@click.argument("purchase_id", metavar="PURCHASE_ID")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def show_purchase(ctx, purchase_id: str, as_json: bool):
    """Show one purchase with its line items."""
    try:
        purchase = PurchaseService(ctx.obj["db"]).require_purchase(purchase_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(purchase)
    else:
        _echo_purchase_detail(purchase)


def register_commands(cli):
    """Register purchase commands with main CLI."""
    cli.add_command(purchase_group, name="purchase")
