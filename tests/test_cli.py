"""Tests for the shopledger command line."""

import json

from shopledger.cli.main import cli


def _run(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def _created_id(output: str) -> str:
    # "Created product 'X' in shop-1 (ID: abc)"
    return output.split("ID:")[1].strip().rstrip(")")


def test_product_add_and_list(cli_runner, temp_db):
    """Products added from the CLI show up in the listing."""
    result = _run(
        cli_runner, temp_db,
        "product", "add", "Rice 5kg", "--purchase-price", "9.50", "--sale-price", "12",
        "--stock", "40", "--sku", "RICE-5",
    )
    assert result.exit_code == 0
    assert "Created product 'Rice 5kg' in shop-1" in result.output

    result = _run(cli_runner, temp_db, "product", "list")
    assert result.exit_code == 0
    assert "Rice 5kg" in result.output
    assert "RICE-5" in result.output


def test_product_list_empty(cli_runner, temp_db):
    """An empty catalogue says so."""
    result = _run(cli_runner, temp_db, "product", "list")
    assert result.exit_code == 0
    assert "No products found." in result.output


def test_product_list_json_is_camel_case(cli_runner, temp_db, sample_products):
    """JSON output uses camelCase keys and plain numbers."""
    result = _run(cli_runner, temp_db, "product", "list", "--shop", "shop-2", "--json")
    assert result.exit_code == 0

    products = json.loads(result.output)
    assert len(products) == 1
    assert products[0]["shopId"] == "shop-2"
    assert products[0]["salePrice"] == 20.0
    assert products[0]["stock"] == 3


def test_product_transfer(cli_runner, temp_db, sample_products, product_service):
    """Transfers move stock to the matching product in the other shop."""
    result = _run(cli_runner, temp_db, "product", "transfer", sample_products["rice_shop1"], "5")
    assert result.exit_code == 0
    assert "Transferred 5 unit(s) to shop-2" in result.output
    assert product_service.get_product(sample_products["rice_shop2"]).stock == 8


def test_product_transfer_insufficient_stock(cli_runner, temp_db, sample_products):
    """Domain errors are reported on exit code 1."""
    result = _run(cli_runner, temp_db, "product", "transfer", sample_products["rice_shop2"], "10")
    assert result.exit_code == 1
    assert "Insufficient stock" in result.output


def test_product_delete_requires_confirmation(cli_runner, temp_db, sample_products, product_service):
    """Answering no keeps the product."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "product", "delete", sample_products["soap"]],
        input="n\n",
    )
    assert result.exit_code == 0
    assert "Deletion cancelled." in result.output
    assert product_service.get_product(sample_products["soap"]) is not None


def test_sale_with_customer_name_and_payment(
    cli_runner, temp_db, sample_products, sample_customer, customer_service
):
    """A credit sale by customer name, then a payment that settles it."""
    items = json.dumps([{"productId": sample_products["rice_shop1"], "quantity": 5, "salePrice": 20}])
    result = _run(
        cli_runner, temp_db,
        "sale", "record", "--items", items, "--customer", "amina yusuf", "--paid", "40",
    )
    assert result.exit_code == 0
    assert "Recorded sale #1" in result.output
    assert "Remaining: 60.00" in result.output
    assert customer_service.get_customer(sample_customer.id).balance == 60

    result = _run(
        cli_runner, temp_db,
        "payment", "record", "--customer", "Amina Yusuf", "--amount", "60", "--sale", "1",
    )
    assert result.exit_code == 0
    assert "New balance: 0.00" in result.output

    result = _run(cli_runner, temp_db, "sale", "show", "1", "--json")
    assert result.exit_code == 0
    sale = json.loads(result.output)
    assert sale["paymentType"] == "Full"
    assert sale["remainingBalance"] == 0.0
    assert sale["customerName"] == "Amina Yusuf"
    assert sale["items"][0]["salePrice"] == 20.0


def test_sale_record_invalid_items_json(cli_runner, temp_db):
    """Malformed --items is rejected before touching the ledger."""
    result = _run(cli_runner, temp_db, "sale", "record", "--items", "[not json")
    assert result.exit_code == 1
    assert "not valid JSON" in result.output

    result = _run(cli_runner, temp_db, "sale", "record", "--items", '{"productId": "x"}')
    assert result.exit_code == 1
    assert "must be a JSON array" in result.output


def test_sale_record_unknown_customer(cli_runner, temp_db, sample_products):
    """Unknown customer names are reported."""
    items = json.dumps([{"productId": sample_products["soap"], "quantity": 1, "salePrice": 1}])
    result = _run(cli_runner, temp_db, "sale", "record", "--items", items, "--customer", "Nobody")
    assert result.exit_code == 1
    assert "Customer 'Nobody' not found" in result.output


def test_sale_show_missing(cli_runner, temp_db):
    """Showing an unknown sale fails."""
    result = _run(cli_runner, temp_db, "sale", "show", "7")
    assert result.exit_code == 1
    assert "Sale 7 not found" in result.output


def test_customer_add_and_list(cli_runner, temp_db):
    """Customers added from the CLI are listed."""
    result = _run(cli_runner, temp_db, "customer", "add", "Juma Ali", "--phone", "0733000000")
    assert result.exit_code == 0
    assert "Created customer 'Juma Ali'" in result.output

    result = _run(cli_runner, temp_db, "customer", "list")
    assert "Juma Ali" in result.output
    assert "0733000000" in result.output


def test_supplier_purchase_and_pay(
    cli_runner, temp_db, sample_products, sample_supplier, supplier_service, product_service
):
    """Record a purchase by supplier name, then pay part of it."""
    items = json.dumps(
        [{"productId": sample_products["soap"], "name": "Bar Soap", "quantity": 100, "costPrice": 1}]
    )
    result = _run(
        cli_runner, temp_db,
        "purchase", "record", "--supplier", "Mombasa Wholesalers", "--items", items, "--paid", "40",
    )
    assert result.exit_code == 0
    assert "Total: 100.00  Remaining: 60.00" in result.output
    assert product_service.get_product(sample_products["soap"]).stock == 150

    result = _run(cli_runner, temp_db, "supplier", "pay", "Mombasa Wholesalers", "60")
    assert result.exit_code == 0
    assert "Still owed: 0.00" in result.output
    assert len(supplier_service.list_payments()) == 2

    result = _run(cli_runner, temp_db, "purchase", "list")
    assert result.exit_code == 0
    assert "Found 1 purchase(s)" in result.output


def test_purchase_unknown_product(cli_runner, temp_db, sample_supplier):
    """A failing purchase line is reported with its index."""
    items = json.dumps([{"productId": "ghost", "quantity": 1, "costPrice": 1}])
    result = _run(
        cli_runner, temp_db, "purchase", "record", "--supplier", sample_supplier.id, "--items", items
    )
    assert result.exit_code == 1
    assert "index 0" in result.output


def test_expense_add_and_list(cli_runner, temp_db):
    """Expenses are recorded and totalled."""
    assert _run(cli_runner, temp_db, "expense", "add", "Rent", "1200", "--shop", "shop-1").exit_code == 0
    assert _run(cli_runner, temp_db, "expense", "add", "Fuel", "300").exit_code == 0

    result = _run(cli_runner, temp_db, "expense", "list")
    assert result.exit_code == 0
    assert "Total: 1,500.00" in result.output


def test_reset(cli_runner, temp_db, sample_products, product_service):
    """Reset with --yes wipes everything."""
    result = _run(cli_runner, temp_db, "reset", "--yes")
    assert result.exit_code == 0
    assert "Reset complete: removed 3 row(s)" in result.output
    assert product_service.list_products() == []


def test_reset_cancelled(cli_runner, temp_db, sample_products, product_service):
    """Declining the prompt keeps the data."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "reset"], input="n\n")
    assert result.exit_code == 0
    assert "Reset cancelled." in result.output
    assert len(product_service.list_products()) == 3


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch):
    """SHOPLEDGER_DB_PATH selects the database when --db-path is absent."""
    monkeypatch.setenv("SHOPLEDGER_DB_PATH", temp_db.database_path)
    result = cli_runner.invoke(cli, ["customer", "add", "Env Customer"])
    assert result.exit_code == 0

    assert [c.name for c in temp_db.list_customers()] == ["Env Customer"]


def test_created_id_is_usable(cli_runner, temp_db):
    """The printed ID can be fed back into other commands."""
    result = _run(
        cli_runner, temp_db, "product", "add", "Sugar", "--purchase-price", "1", "--sale-price", "2",
    )
    product_id = _created_id(result.output)

    result = _run(cli_runner, temp_db, "product", "update", product_id, "--stock", "9")
    assert result.exit_code == 0
    assert temp_db.get_product(product_id).stock == 9
