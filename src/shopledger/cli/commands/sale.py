"""Sale and return commands."""

import click
from shopledger.domain.sale import SaleService
from shopledger.domain.customer import CustomerService
from shopledger.domain.errors import DomainError
from shopledger.domain.entities import SHOP_ONE, SHOP_TWO, SALE_TYPES, Sale
from shopledger.cli.error_handling import handle_domain_error, load_items_or_exit
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit


@click.group()
def sale_group():
    """Record and view sales and returns."""
    pass


@sale_group.command("record")
@click.option(
    "--items",
    required=True,
    help='JSON array of lines, e.g. \'[{"productId": "...", "quantity": 2, "salePrice": 12}]\'',
)
@click.option("--shop", type=click.Choice([SHOP_ONE, SHOP_TWO]), default=SHOP_ONE, show_default=True)
@click.option("--type", "sale_type", type=click.Choice(SALE_TYPES), default="Sale", show_default=True)
@click.option("--total", help="Declared total (defaults to the sum of the lines)")
@click.option("--customer", help="Customer name or ID")
@click.option("--paid", help="Amount paid now (defaults to the total)")
@click.option("--remaining", help="Amount left on the customer's account")
@click.option("--payment-type", help="Payment type label (defaults to Full or Partial)")
@click.option("--due-date", help="When the remaining balance is due (e.g. 2024-03-01, 'next month')")
@click.pass_context
def record_sale(
    ctx,
    items: str,
    shop: str,
    sale_type: str,
    total: str | None,
    customer: str | None,
    paid: str | None,
    remaining: str | None,
    payment_type: str | None,
    due_date: str | None,
):
    """Record a sale or a return.

    Examples:
        shopledger sale record --items '[{"productId": "p1", "quantity": 2, "salePrice": 50}]'
        shopledger sale record --items '[...]' --customer "Amina Yusuf" --paid 40
        shopledger sale record --items '[...]' --type Return --customer "Amina Yusuf" --remaining 20
    """
    db = ctx.obj["db"]
    service = SaleService(db)

    payload = {
        "items": load_items_or_exit(ctx, items),
        "shopId": shop,
        "type": sale_type,
        "total": total,
        "customerDetails": {
            "amountPaid": paid,
            "remainingBalance": remaining,
            "paymentType": payment_type,
            "dueDate": due_date,
        },
    }
    if customer:
        customer_service = CustomerService(db)
        payload["customerDetails"]["customerId"] = resolve_or_exit(
            ctx, customer_service.list_customers(), customer, "Customer"
        )

    try:
        sale_id = service.record_sale(payload)
    except DomainError as e:
        handle_domain_error(ctx, e)

    sale = service.require_sale(sale_id)
    click.echo(f"Recorded {sale.type.lower()} #{sale.id}")
    click.echo(f"  Total: {money(sale.total)}")
    click.echo(f"  Paid: {money(sale.amount_paid)}  Remaining: {money(sale.remaining_balance)}")
    if sale.customer_name:
        click.echo(f"  Customer: {sale.customer_name}")


def _echo_sale_detail(sale: Sale) -> None:
    click.echo(f"\n{sale.type} #{sale.id}  ({sale.created_at:%Y-%m-%d %H:%M}, {sale.shop_id or '-'})")
    if sale.customer_name:
        click.echo(f"  Customer: {sale.customer_name} {sale.customer_phone or ''}".rstrip())
    for item in sale.items:
        click.echo(
            f"  {item.quantity:>4} x {item.name[:30]:<30} @ {money(item.sale_price):>10} = {money(item.total):>10}"
        )
    click.echo(f"  Total: {money(sale.total)}  Paid: {money(sale.amount_paid)}  "
               f"Remaining: {money(sale.remaining_balance)}  ({sale.payment_type or '-'})")
    if sale.due_date:
        click.echo(f"  Due: {sale.due_date}")


@sale_group.command("list")
@click.option("--customer", help="Only sales for this customer (name or ID)")
@click.option("--shop", type=click.Choice([SHOP_ONE, SHOP_TWO]), help="Only sales from this shop")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_sales(ctx, customer: str | None, shop: str | None, as_json: bool):
    """List sales and returns, newest first."""
    db = ctx.obj["db"]
    service = SaleService(db)

    customer_id = None
    if customer:
        customer_id = resolve_or_exit(ctx, CustomerService(db).list_customers(), customer, "Customer")
    sales = service.list_sales(customer_id=customer_id, shop_id=shop)

    if as_json:
        echo_json(sales)
        return
    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"\nFound {len(sales)} sale(s):")
    click.echo("-" * 96)
    click.echo(f"{'#':<6} {'Date':<17} {'Type':<7} {'Customer':<24} {'Items':>5} {'Total':>11} {'Remaining':>11}")
    click.echo("-" * 96)
    for s in sales:
        click.echo(
            f"{s.id:<6} {s.created_at:%Y-%m-%d %H:%M} {s.type:<7} {(s.customer_name or '')[:24]:<24} "
            f"{len(s.items):>5} {money(s.total):>11} {money(s.remaining_balance):>11}"
        )


@sale_group.command("show")
@click.argument("sale_id", metavar="SALE_ID")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def show_sale(ctx, sale_id: str, as_json: bool):
    """Show one sale with its line items."""
    service = SaleService(ctx.obj["db"])
    try:
        sale = service.require_sale(sale_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        echo_json(sale)
    else:
        _echo_sale_detail(sale)


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
