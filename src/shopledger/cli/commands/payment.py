"""Customer payment commands."""

import click
from shopledger.domain.payment import PaymentService
from shopledger.domain.customer import CustomerService
from shopledger.domain.errors import DomainError
from shopledger.cli.error_handling import handle_domain_error
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit


@click.group()
def payment_group():
    """Record and view customer payments."""
    pass


@payment_group.command("record")
@click.option("--customer", required=True, help="Customer name or ID")
@click.option("--amount", required=True, help="Amount received")
@click.option("--sale", "sale_id", help="Sale number to allocate the payment to")
@click.option("--method", default="Cash", show_default=True, help="Payment method")
@click.option("--note", help="Note")
@click.pass_context
def record_payment(
    ctx, customer: str, amount: str, sale_id: str | None, method: str, note: str | None
):
    """Record a payment received from a customer.

    Examples:
        shopledger payment record --customer "Amina Yusuf" --amount 60 --sale 12
    """
    db = ctx.obj["db"]
    customer_service = CustomerService(db)
    customer_id = resolve_or_exit(ctx, customer_service.list_customers(), customer, "Customer")

    try:
        payment_id = PaymentService(db).record_payment(
            {
                "customerId": customer_id,
                "amount": amount,
                "saleId": sale_id,
                "method": method,
                "note": note,
            }
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    updated = customer_service.require_customer(customer_id)
    click.echo(f"Recorded payment {payment_id}")
    click.echo(f"  Customer: {updated.name}  New balance: {money(updated.balance)}")


@payment_group.command("list")
@click.option("--customer", help="Only payments from this customer (name or ID)")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_payments(ctx, customer: str | None, as_json: bool):
    """List customer payments, newest first."""
    db = ctx.obj["db"]
    customer_id = None
    if customer:
        customer_id = resolve_or_exit(ctx, CustomerService(db).list_customers(), customer, "Customer")
    payments = PaymentService(db).list_payments(customer_id=customer_id)

    if as_json:
        echo_json(payments)
        return
    if not payments:
        click.echo("No payments found.")
        return

    click.echo(f"\nFound {len(payments)} payment(s):")
    click.echo("-" * 90)
    for p in payments:
        sale = f"sale #{p.sale_id}" if p.sale_id else ""
        click.echo(
            f"{p.created_at:%Y-%m-%d %H:%M}  {money(p.amount):>11}  {p.method or '':<8} "
            f"{p.customer_id:<36}  {sale}"
        )


def register_commands(cli):
    """Register payment commands with main CLI."""
    cli.add_command(payment_group, name="payment")
