"""Tests for the SQLAlchemy database transaction boundary."""

from decimal import Decimal

import pytest

from shopledger.database.models import Product, SaleItem
from shopledger.domain.errors import ConstraintError, NotFoundError


def test_storage_failure_becomes_constraint_error(temp_db):
    """Storage errors roll back and surface without schema details."""
    with pytest.raises(ConstraintError) as excinfo:
        with temp_db._transaction("record sale") as session:
            session.add(
                SaleItem(
                    sale_id="no-such-sale",
                    product_id="p",
                    name="Orphan",
                    quantity=1,
                    sale_price=Decimal("1"),
                    total=Decimal("1"),
                )
            )
            session.flush()

    message = str(excinfo.value)
    assert message == "Could not record sale: storage constraint violated"
    assert "FOREIGN KEY" not in message
    assert "sale_items" not in message


def test_domain_errors_pass_through_and_roll_back(temp_db, product_service, sample_products):
    """Domain errors raised mid-transaction undo earlier writes and keep their type."""
    with pytest.raises(NotFoundError):
        with temp_db._transaction("update stock") as session:
            session.get(Product, sample_products["soap"]).stock = 0
            raise NotFoundError("Product other not found")

    assert product_service.get_product(sample_products["soap"]).stock == 50


def test_unexpected_errors_become_constraint_error(temp_db, product_service, sample_products):
    """Non-domain failures roll back and surface as a ConstraintError."""
    with pytest.raises(ConstraintError) as excinfo:
        with temp_db._transaction("update stock") as session:
            session.get(Product, sample_products["soap"]).stock = 0
            raise OverflowError("Python int too large to convert to SQLite INTEGER")

    assert str(excinfo.value) == "Could not update stock: storage operation failed"
    assert isinstance(excinfo.value.__cause__, OverflowError)
    assert product_service.get_product(sample_products["soap"]).stock == 50


def test_sale_id_collision_is_reported(
    monkeypatch, sale_service, product_service, sample_products
):
    """If another writer took the number first, the sale fails cleanly."""
    line = {"productId": sample_products["soap"], "quantity": 1, "salePrice": 1}
    assert sale_service.record_sale({"items": [line]}) == "1"

    monkeypatch.setattr("shopledger.database.ledger.next_sale_id", lambda session: "1")
    with pytest.raises(ConstraintError):
        sale_service.record_sale({"items": [line]})

    assert len(sale_service.list_sales()) == 1
    assert product_service.get_product(sample_products["soap"]).stock == 49


def test_database_path_is_recorded(temp_db):
    """The factory remembers where the SQLite file lives."""
    assert temp_db.database_path.endswith(".db")
    assert temp_db.database_url == f"sqlite:///{temp_db.database_path}"
