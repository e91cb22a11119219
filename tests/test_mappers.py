"""Tests for database mappers."""

from datetime import datetime, date, UTC
from decimal import Decimal

from shopledger.database.models import (
    Product as ORMProduct,
    Sale as ORMSale,
    SaleItem as ORMSaleItem,
    Purchase as ORMPurchase,
    PurchaseItem as ORMPurchaseItem,
)
from shopledger.database.mappers import (
    to_decimal,
    to_int,
    product_to_domain,
    sale_to_domain,
    purchase_to_domain,
)
from shopledger.domain.entities import Product, Sale, Purchase


class TestNormalizers:
    """Tests for numeric normalization."""

    def test_to_decimal(self):
        assert to_decimal(None) == Decimal("0")
        assert to_decimal(Decimal("1.50")) == Decimal("1.50")
        assert to_decimal(2.5) == Decimal("2.5")
        assert to_decimal("7") == Decimal("7")

    def test_to_int(self):
        assert to_int(None) == 0
        assert to_int("12") == 12
        assert to_int(Decimal("3")) == 3


class TestProductMapper:
    """Tests for Product mapper."""

    def test_product_to_domain(self):
        """Test converting ORM Product to domain Product."""
        orm_product = ORMProduct(
            id="p1",
            name="Rice",
            sku="RICE",
            purchase_price=9.5,
            sale_price=Decimal("12"),
            stock="4",
            shop_id="shop-1",
            created_at=datetime.now(UTC),
        )

        product = product_to_domain(orm_product)

        assert isinstance(product, Product)
        assert product.purchase_price == Decimal("9.5")
        assert product.sale_price == Decimal("12")
        assert product.stock == 4
        assert product.category is None


class TestSaleMapper:
    """Tests for Sale mapper."""

    def test_sale_to_domain_with_items(self):
        """Line items are attached in the order given."""
        orm_sale = ORMSale(
            id="3",
            type="Sale",
            total=Decimal("30"),
            created_at=datetime.now(UTC),
            customer_name="Amina",
            amount_paid=Decimal("10"),
            remaining_balance=Decimal("20"),
            due_date=date(2024, 1, 31),
        )
        items = [
            ORMSaleItem(sale_id="3", product_id="a", name="A", quantity=1, sale_price=10, total=10),
            ORMSaleItem(sale_id="3", product_id="b", name="B", quantity=2, sale_price=10, total=20),
        ]

        sale = sale_to_domain(orm_sale, items)

        assert isinstance(sale, Sale)
        assert sale.id == "3"
        assert sale.remaining_balance == Decimal("20")
        assert sale.due_date == date(2024, 1, 31)
        assert [item.product_id for item in sale.items] == ["a", "b"]
        assert sale.items[1].total == Decimal("20")

    def test_sale_without_items(self):
        orm_sale = ORMSale(id="1", type="Return", total=5, created_at=datetime.now(UTC))
        sale = sale_to_domain(orm_sale, ())
        assert sale.items == ()
        assert sale.amount_paid == Decimal("0")


class TestPurchaseMapper:
    """Tests for Purchase mapper."""

    def test_purchase_to_domain(self):
        orm_purchase = ORMPurchase(
            id="u1",
            supplier_id="s1",
            supplier_name="Supplier",
            total_amount=Decimal("15"),
            paid_amount=Decimal("5"),
            remaining_amount=Decimal("10"),
            created_at=datetime.now(UTC),
        )
        items = [
            ORMPurchaseItem(purchase_id="u1", product_id="a", name="A", quantity=3, cost_price=5, total=15)
        ]

        purchase = purchase_to_domain(orm_purchase, items)

        assert isinstance(purchase, Purchase)
        assert purchase.remaining_amount == Decimal("10")
        assert purchase.items[0].cost_price == Decimal("5")
