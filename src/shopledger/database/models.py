"""SQLAlchemy models for shopledger database."""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

Money = Numeric(12, 2)


def generate_id() -> str:
    """Return a new opaque entity ID."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class Product(Base):
    """Product stocked in one shop."""

    __tablename__ = "products"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    sku = Column(String, nullable=True)
    purchase_price = Column(Money, nullable=False, default=0)
    sale_price = Column(Money, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)
    category = Column(String, nullable=True)
    shop_id = Column(String, nullable=True)
    supplier_id = Column(String, nullable=True)
    supplier_name = Column(String, nullable=True)
    size = Column(String, nullable=True)
    unit = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    __table_args__ = (Index("idx_products_shop_id", "shop_id"),)


class Customer(Base):
    """Customer model with running balance."""

    __tablename__ = "customers"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    balance = Column(Money, nullable=False, default=0)
    total_purchased = Column(Money, nullable=False, default=0)
    total_paid = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class Sale(Base):
    """Sale or return. The ID is a sequential decimal string."""

    __tablename__ = "sales"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False, default="Sale")
    total = Column(Money, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    customer_id = Column(String, nullable=True)
    customer_name = Column(String, nullable=True)
    customer_phone = Column(String, nullable=True)
    customer_address = Column(String, nullable=True)
    payment_type = Column(String, nullable=True)
    amount_paid = Column(Money, nullable=False, default=0)
    remaining_balance = Column(Money, nullable=False, default=0)
    due_date = Column(Date, nullable=True)
    shop_id = Column(String, nullable=True)

    __table_args__ = (Index("idx_sales_customer_id", "customer_id"),)

    # Relationships
    items = relationship(
        "SaleItem", back_populates="sale", cascade="all, delete-orphan", passive_deletes=True
    )


class SaleItem(Base):
    """Sale line item."""

    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_id = Column(String, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    sku = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)
    sale_price = Column(Money, nullable=False)
    total = Column(Money, nullable=False)
    unit = Column(String, nullable=True)
    size = Column(String, nullable=True)

    # Relationships
    sale = relationship("Sale", back_populates="items")


class Payment(Base):
    """Customer payment model."""

    __tablename__ = "payments"

    id = Column(String, primary_key=True, default=generate_id)
    customer_id = Column(String, nullable=True)
    sale_id = Column(String, nullable=True)
    amount = Column(Money, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    method = Column(String, nullable=True)
    note = Column(String, nullable=True)

    __table_args__ = (Index("idx_payments_customer_id", "customer_id"),)


class Expense(Base):
    """Shop expense model."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=generate_id)
    description = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    category = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    shop_id = Column(String, nullable=True)


class Supplier(Base):
    """Supplier model with running balance."""

    __tablename__ = "suppliers"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    contact = Column(String, nullable=True)
    alternate_phone = Column(String, nullable=True)
    shop_name = Column(String, nullable=True)
    address = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    balance = Column(Money, nullable=False, default=0)
    total_purchased = Column(Money, nullable=False, default=0)
    total_paid = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    next_payment_date = Column(Date, nullable=True)


class Purchase(Base):
    """Stock purchase from a supplier."""

    __tablename__ = "purchases"

    id = Column(String, primary_key=True, default=generate_id)
    supplier_id = Column(String, nullable=False)
    supplier_name = Column(String, nullable=True)
    total_amount = Column(Money, nullable=False)
    paid_amount = Column(Money, nullable=False, default=0)
    remaining_amount = Column(Money, nullable=False, default=0)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    shop_id = Column(String, nullable=True)

    __table_args__ = (Index("idx_purchases_supplier_id", "supplier_id"),)

    # Relationships
    items = relationship(
        "PurchaseItem", back_populates="purchase", cascade="all, delete-orphan", passive_deletes=True
    )


class PurchaseItem(Base):
    """Purchase line item."""

    __tablename__ = "purchase_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    purchase_id = Column(String, ForeignKey("purchases.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    cost_price = Column(Money, nullable=False)
    total = Column(Money, nullable=False)
    unit = Column(String, nullable=True)
    size = Column(String, nullable=True)

    # Relationships
    purchase = relationship("Purchase", back_populates="items")


class SupplierPayment(Base):
    """Payment made to a supplier."""

    __tablename__ = "supplier_payments"

    id = Column(String, primary_key=True, default=generate_id)
    supplier_id = Column(String, nullable=False)
    amount = Column(Money, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)
    method = Column(String, nullable=True)
    note = Column(String, nullable=True)

    __table_args__ = (Index("idx_supplier_payments_supplier_id", "supplier_id"),)


# Child tables first so deleting in this order never trips a foreign key
RESET_ORDER = (
    SaleItem,
    Sale,
    Payment,
    Expense,
    SupplierPayment,
    PurchaseItem,
    Purchase,
    Customer,
    Supplier,
    Product,
)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and make sure the schema exists."""
    engine: Engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
