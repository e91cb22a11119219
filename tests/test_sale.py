"""Tests for recording sales and returns."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from shopledger.database.models import Sale
from shopledger.domain.errors import (
    DomainError,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from shopledger.utils.amount_parser import MAX_QUANTITY
from shopledger.domain.requests import SaleRequest


def _line(product_id, quantity, price):
    return {"productId": product_id, "quantity": quantity, "salePrice": price}


def test_partial_sale_updates_stock_and_customer(
    sale_service, product_service, customer_service, sample_products, sample_customer
):
    """A sale of 100 with 40 paid leaves the customer owing 60."""
    sale_id = sale_service.record_sale(
        {
            "items": [_line(sample_products["rice_shop1"], 5, 20)],
            "total": 100,
            "shopId": "shop-1",
            "customerDetails": {
                "customerId": sample_customer.id,
                "amountPaid": 40,
                "remainingBalance": 60,
                "paymentType": "Partial",
            },
        }
    )

    assert sale_id == "1"
    assert product_service.get_product(sample_products["rice_shop1"]).stock == 15

    customer = customer_service.get_customer(sample_customer.id)
    assert customer.balance == Decimal("60")
    assert customer.total_purchased == Decimal("100")
    assert customer.total_paid == Decimal("40")

    sale = sale_service.get_sale(sale_id)
    assert sale.type == "Sale"
    assert sale.payment_type == "Partial"
    assert sale.amount_paid == Decimal("40")
    assert sale.remaining_balance == Decimal("60")
    assert sale.shop_id == "shop-1"
    assert len(sale.items) == 1
    assert sale.items[0].quantity == 5
    assert sale.items[0].total == Decimal("100")


def test_sale_ids_are_sequential(sale_service, sample_products):
    """Each sale gets the next decimal number."""
    ids = [
        sale_service.record_sale({"items": [_line(sample_products["soap"], 1, "1.50")]})
        for _ in range(3)
    ]
    assert ids == ["1", "2", "3"]


def test_walk_in_sale_defaults_to_fully_paid(sale_service, sample_products):
    """Without customer details the sale is paid in full."""
    sale_id = sale_service.record_sale({"items": [_line(sample_products["soap"], 4, "1.50")]})
    sale = sale_service.require_sale(sale_id)

    assert sale.total == Decimal("6")
    assert sale.amount_paid == Decimal("6")
    assert sale.remaining_balance == Decimal("0")
    assert sale.payment_type == "Full"
    assert sale.customer_id is None


def test_sale_snapshots_customer_and_product(sale_service, sample_products, sample_customer):
    """Missing snapshot fields are copied from the customer and product rows."""
    sale_id = sale_service.record_sale(
        {
            "items": [_line(sample_products["rice_shop1"], 1, 20)],
            "customerId": sample_customer.id,
        }
    )
    sale = sale_service.require_sale(sale_id)

    assert sale.customer_name == "Amina Yusuf"
    assert sale.customer_phone == "0712345678"
    assert sale.items[0].name == "Rice 5kg"
    assert sale.items[0].sku == "RICE-5"
    assert sale.items[0].unit == "bag"


def test_sale_keeps_due_date(sale_service, sample_products, sample_customer):
    """The due date is parsed and stored on the sale."""
    sale_id = sale_service.record_sale(
        {
            "items": [_line(sample_products["soap"], 2, 5)],
            "customerDetails": {
                "customerId": sample_customer.id,
                "amountPaid": 0,
                "dueDate": "2024-03-01",
            },
        }
    )
    sale = sale_service.require_sale(sale_id)
    assert sale.due_date == date(2024, 3, 1)
    assert sale.remaining_balance == Decimal("10")
    assert sale.payment_type == "Partial"


def test_return_restocks_and_lowers_balance(
    sale_service, product_service, customer_service, sample_products, sample_customer
):
    """A return puts stock back and reduces the customer's balance."""
    sale_service.record_sale(
        {
            "items": [_line(sample_products["rice_shop1"], 5, 20)],
            "customerDetails": {"customerId": sample_customer.id, "amountPaid": 0},
        }
    )
    assert customer_service.get_customer(sample_customer.id).balance == Decimal("100")

    return_id = sale_service.record_sale(
        {
            "type": "Return",
            "items": [_line(sample_products["rice_shop1"], 2, 20)],
            "customerDetails": {"customerId": sample_customer.id, "remainingBalance": 40},
        }
    )

    assert return_id == "2"
    assert product_service.get_product(sample_products["rice_shop1"]).stock == 17
    customer = customer_service.get_customer(sample_customer.id)
    assert customer.balance == Decimal("60")
    # Returns do not touch the running totals
    assert customer.total_purchased == Decimal("100")
    assert customer.total_paid == Decimal("0")


def test_oversell_is_rejected_and_rolled_back(
    sale_service, product_service, sample_products, sample_customer, customer_service
):
    """Selling more than is in stock changes nothing."""
    with pytest.raises(InsufficientStockError, match="Insufficient stock for 'Rice 5kg'"):
        sale_service.record_sale(
            {
                "items": [
                    _line(sample_products["soap"], 10, "1.50"),
                    _line(sample_products["rice_shop1"], 25, 20),
                ],
                "customerId": sample_customer.id,
            }
        )

    assert product_service.get_product(sample_products["soap"]).stock == 50
    assert product_service.get_product(sample_products["rice_shop1"]).stock == 20
    assert sale_service.list_sales() == []
    assert customer_service.get_customer(sample_customer.id).total_purchased == Decimal("0")


def test_unknown_product_aborts_whole_sale(sale_service, product_service, sample_products):
    """A missing product on a later line undoes the earlier lines."""
    with pytest.raises(NotFoundError, match="Product missing-product not found"):
        sale_service.record_sale(
            {
                "items": [
                    _line(sample_products["soap"], 2, "1.50"),
                    _line("missing-product", 1, 5),
                ]
            }
        )

    assert product_service.get_product(sample_products["soap"]).stock == 50
    assert sale_service.list_sales() == []
    # The failed attempt does not consume a number
    assert sale_service.record_sale({"items": [_line(sample_products["soap"], 1, 1)]}) == "1"


def test_unknown_customer_is_rejected(sale_service, sample_products):
    """A sale naming a customer that doesn't exist fails."""
    with pytest.raises(NotFoundError, match="Customer nobody not found"):
        sale_service.record_sale(
            {"items": [_line(sample_products["soap"], 1, 1)], "customerId": "nobody"}
        )
    assert sale_service.list_sales() == []


def test_malformed_sale_requests(sale_service, sample_products):
    """Shape problems are rejected before anything is written."""
    with pytest.raises(ValidationError, match="items array is required"):
        sale_service.record_sale({"items": []})
    with pytest.raises(ValidationError, match="quantity must be greater than zero"):
        sale_service.record_sale({"items": [_line(sample_products["soap"], 0, 1)]})
    with pytest.raises(ValidationError, match="Invalid sale type"):
        sale_service.record_sale({"items": [_line(sample_products["soap"], 1, 1)], "type": "Refund"})
    assert sale_service.list_sales() == []


def test_record_sale_accepts_request_object(sale_service, sample_products):
    """Typed requests bypass payload normalization."""
    request = SaleRequest.from_payload({"items": [_line(sample_products["soap"], 3, 2)]})
    sale_id = sale_service.record_sale(request)
    assert sale_service.require_sale(sale_id).total == Decimal("6")


def test_list_sales_filters(sale_service, sample_products, sample_customer):
    """Sales can be listed by customer and by shop, newest first."""
    sale_service.record_sale({"items": [_line(sample_products["soap"], 1, 1)], "shopId": "shop-1"})
    sale_service.record_sale(
        {
            "items": [_line(sample_products["rice_shop2"], 1, 20)],
            "shopId": "shop-2",
            "customerId": sample_customer.id,
        }
    )

    assert [s.id for s in sale_service.list_sales()] == ["2", "1"]
    assert [s.id for s in sale_service.list_sales(customer_id=sample_customer.id)] == ["2"]
    assert [s.id for s in sale_service.list_sales(shop_id="shop-1")] == ["1"]


def test_require_sale_not_found(sale_service):
    """Requiring an unknown sale raises NotFoundError."""
    assert sale_service.get_sale("99") is None
    with pytest.raises(NotFoundError, match="Sale 99 not found"):
        sale_service.require_sale("99")


def test_huge_return_quantity_is_rejected(sale_service, product_service, sample_products):
    """Quantities too large to store fail as domain errors and change nothing."""
    with pytest.raises(DomainError):
        sale_service.record_sale(
            {
                "type": "Return",
                "items": [_line(sample_products["soap"], "1e30", 1)],
            }
        )

    assert product_service.get_product(sample_products["soap"]).stock == 50
    assert sale_service.list_sales() == []


def test_stock_overflow_is_rolled_back(sale_service, product_service):
    """A return that would push stock past the column limit fails cleanly."""
    product_id = product_service.create_product(
        name="Bulk Nails", purchase_price=0, sale_price=0, stock=MAX_QUANTITY
    )

    with pytest.raises(DomainError):
        sale_service.record_sale({"type": "Return", "items": [_line(product_id, 1, 1)]})

    assert product_service.get_product(product_id).stock == MAX_QUANTITY
    assert sale_service.list_sales() == []


def test_list_sales_orders_same_time_sales_by_number(temp_db, sale_service):
    """Sales stamped with the same time list the highest number first."""
    created_at = datetime(2024, 5, 1, 9, 30)
    with temp_db.session_factory() as session:
        for number in range(1, 12):
            session.add(Sale(id=str(number), type="Sale", total=Decimal("1"), created_at=created_at))
        session.commit()

    assert [s.id for s in sale_service.list_sales()] == [str(n) for n in range(11, 0, -1)]
