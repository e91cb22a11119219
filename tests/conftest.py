"""Shared pytest fixtures for shopledger tests."""

import tempfile
import os
import pytest

from shopledger.database.factories import create_sqlite_database
from shopledger.domain.product import ProductService
from shopledger.domain.customer import CustomerService
from shopledger.domain.sale import SaleService
from shopledger.domain.payment import PaymentService
from shopledger.domain.supplier import SupplierService
from shopledger.domain.purchase import PurchaseService
from shopledger.domain.expense import ExpenseService
from shopledger.domain.maintenance import MaintenanceService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def customer_service(temp_db):
    """Create a CustomerService with a temporary database."""
    return CustomerService(temp_db)


@pytest.fixture
def sale_service(temp_db):
    """Create a SaleService with a temporary database."""
    return SaleService(temp_db)


@pytest.fixture
def payment_service(temp_db):
    """Create a PaymentService with a temporary database."""
    return PaymentService(temp_db)


@pytest.fixture
def supplier_service(temp_db):
    """Create a SupplierService with a temporary database."""
    return SupplierService(temp_db)


@pytest.fixture
def purchase_service(temp_db):
    """Create a PurchaseService with a temporary database."""
    return PurchaseService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def maintenance_service(temp_db):
    """Create a MaintenanceService with a temporary database."""
    return MaintenanceService(temp_db)


@pytest.fixture
def sample_products(product_service):
    """Create the same SKU in both shops plus one shop-1-only product.

    Returns a dict of product IDs keyed by a short label.
    """
    return {
        "rice_shop1": product_service.create_product(
            name="Rice 5kg",
            sku="RICE-5",
            purchase_price="9.50",
            sale_price="20",
            stock=20,
            shop_id="shop-1",
            unit="bag",
        ),
        "rice_shop2": product_service.create_product(
            name="Rice 5kg",
            sku="RICE-5",
            purchase_price="9.50",
            sale_price="20",
            stock=3,
            shop_id="shop-2",
            unit="bag",
        ),
        "soap": product_service.create_product(
            name="Bar Soap",
            purchase_price="1.00",
            sale_price="1.50",
            stock=50,
            shop_id="shop-1",
        ),
    }


@pytest.fixture
def sample_customer(customer_service):
    """Create a sample customer for testing."""
    customer_id = customer_service.create_customer(
        name="Amina Yusuf", phone="0712345678", address="Market Street 4"
    )
    return customer_service.get_customer(customer_id)


@pytest.fixture
def sample_supplier(supplier_service):
    """Create a sample supplier for testing."""
    supplier_id = supplier_service.create_supplier(
        name="Mombasa Wholesalers", contact="0722000000"
    )
    return supplier_service.get_supplier(supplier_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
