"""Product management and stock transfer commands."""

import click
from shopledger.domain.product import ProductService
from shopledger.domain.supplier import SupplierService
from shopledger.domain.errors import DomainError
from shopledger.domain.entities import SHOP_ONE, SHOP_TWO
from shopledger.cli.error_handling import handle_domain_error
from shopledger.cli.output import echo_json, money
from shopledger.cli.resolution import resolve_or_exit

SHOP_CHOICE = click.Choice([SHOP_ONE, SHOP_TWO])


@click.group()
def product_group():
    """Manage products in both shops."""
    pass


@product_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--purchase-price", required=True, help="Cost price per unit")
@click.option("--sale-price", required=True, help="Selling price per unit")
@click.option("--stock", default="0", show_default=True, help="Opening stock")
@click.option("--shop", type=SHOP_CHOICE, default=SHOP_ONE, show_default=True, help="Shop holding the product")
@click.option("--sku", help="Stock-keeping unit (used to match the product across shops)")
@click.option("--category", help="Product category")
@click.option("--supplier", help="Supplier name or ID")
@click.option("--size", help="Size")
@click.option("--unit", help="Unit (e.g. pcs, kg)")
@click.pass_context
def add_product(
    ctx,
    name: str,
    purchase_price: str,
    sale_price: str,
    stock: str,
    shop: str,
    sku: str | None,
    category: str | None,
    supplier: str | None,
    size: str | None,
    unit: str | None,
):
    """Add a product.

    Examples:
        shopledger product add "Rice 5kg" --purchase-price 9.50 --sale-price 12 --stock 40
        shopledger product add "Soap" --purchase-price 1 --sale-price 1.5 --shop shop-2 --sku SOAP-01
    """
    db = ctx.obj["db"]
    service = ProductService(db)

    supplier_id = supplier_name = None
    if supplier:
        supplier_service = SupplierService(db)
        supplier_id = resolve_or_exit(ctx, supplier_service.list_suppliers(), supplier, "Supplier")
        supplier_name = supplier_service.require_supplier(supplier_id).name

    try:
        product_id = service.create_product(
            name=name,
            purchase_price=purchase_price,
            sale_price=sale_price,
            stock=stock,
            shop_id=shop,
            sku=sku,
            category=category,
            supplier_id=supplier_id,
            supplier_name=supplier_name,
            size=size,
            unit=unit,
        )
        click.echo(f"Created product '{name}' in {shop} (ID: {product_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@product_group.command("list")
@click.option("--shop", type=SHOP_CHOICE, help="Only list products in this shop")
@click.option("--json", "as_json", is_flag=True, help="Print camelCase JSON")
@click.pass_context
def list_products(ctx, shop: str | None, as_json: bool):
    """List products, newest first."""
    service = ProductService(ctx.obj["db"])
    products = service.list_products(shop_id=shop)

    if as_json:
        echo_json(products)
        return
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 100)
    click.echo(f"{'ID':<36}  {'Name':<24} {'SKU':<10} {'Shop':<7} {'Stock':>6} {'Price':>10}")
    click.echo("-" * 100)
    for p in products:
        click.echo(
            f"{p.id:<36}  {p.name[:24]:<24} {(p.sku or '')[:10]:<10} {p.shop_id or '':<7} "
            f"{p.stock:>6} {money(p.sale_price):>10}"
        )


@product_group.command("update")
@click.argument("product_id", metavar="PRODUCT_ID")
@click.option("--name", help="New name")
@click.option("--purchase-price", help="New cost price")
@click.option("--sale-price", help="New selling price")
@click.option("--stock", help="Set stock to this count")
@click.option("--sku", help="New SKU")
@click.option("--category", help="New category")
@click.option("--size", help="New size")
@click.option("--unit", help="New unit")
@click.pass_context
def update_product(ctx, product_id: str, **options):
    """Update a product. Only the options given are changed."""
    service = ProductService(ctx.obj["db"])
    fields = {key: value for key, value in options.items() if value is not None}
    if not fields:
        click.echo("Nothing to update.")
        return

    try:
        service.update_product(product_id, **fields)
        click.echo(f"Updated product {product_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@product_group.command("delete")
@click.argument("product_id", metavar="PRODUCT_ID")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_product(ctx, product_id: str, yes: bool):
    """Delete a product. Past sales and purchases keep their line snapshots."""
    service = ProductService(ctx.obj["db"])
    try:
        product = service.require_product(product_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete product '{product.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_product(product_id)
        click.echo(f"Deleted product '{product.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@product_group.command("transfer")
@click.argument("product_id", metavar="PRODUCT_ID")
@click.argument("quantity", metavar="QUANTITY")
@click.pass_context
def transfer_stock(ctx, product_id: str, quantity: str):
    """Move QUANTITY units of a product to the other shop.

    The product is matched in the other shop by SKU, then by name; if there is
    no match a copy of the product is created there.

    Examples:
        shopledger product transfer 3f2a... 5
    """
    service = ProductService(ctx.obj["db"])
    try:
        result = service.transfer_stock({"sourceProductId": product_id, "quantity": quantity})
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transferred {result.quantity} unit(s) to {result.destination_shop_id}")
    if result.created_destination:
        click.echo(f"  Created product {result.destination_product_id} in {result.destination_shop_id}")
    else:
        click.echo(f"  Added to product {result.destination_product_id}")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
