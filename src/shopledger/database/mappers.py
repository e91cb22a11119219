"""Mapper functions to convert SQLAlchemy models into domain entities.

Numeric columns are normalized here: money always comes back as Decimal and
stock/quantities as int, whatever type the storage engine returned.
"""

from decimal import Decimal
from typing import Any, Iterable

from shopledger.domain import entities as domain
from shopledger.database.models import (
    Product as ORMProduct,
    Customer as ORMCustomer,
    Sale as ORMSale,
    SaleItem as ORMSaleItem,
    Payment as ORMPayment,
    Supplier as ORMSupplier,
    Purchase as ORMPurchase,
    PurchaseItem as ORMPurchaseItem,
    SupplierPayment as ORMSupplierPayment,
    Expense as ORMExpense,
)


def to_decimal(value: Any) -> Decimal:
    """Normalize a stored money value to Decimal (None becomes 0)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_int(value: Any) -> int:
    """Normalize a stored count to int (None becomes 0)."""
    if value is None:
        return 0
    return int(Decimal(str(value)))


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        name=orm_product.name,
        sku=orm_product.sku,
        purchase_price=to_decimal(orm_product.purchase_price),
        sale_price=to_decimal(orm_product.sale_price),
        stock=to_int(orm_product.stock),
        category=orm_product.category,
        shop_id=orm_product.shop_id,
        supplier_id=orm_product.supplier_id,
        supplier_name=orm_product.supplier_name,
        size=orm_product.size,
        unit=orm_product.unit,
        created_at=orm_product.created_at,
    )


def customer_to_domain(orm_customer: ORMCustomer) -> domain.Customer:
    """Convert SQLAlchemy Customer model to domain Customer entity."""
    return domain.Customer(
        id=orm_customer.id,
        name=orm_customer.name,
        phone=orm_customer.phone,
        address=orm_customer.address,
        balance=to_decimal(orm_customer.balance),
        total_purchased=to_decimal(orm_customer.total_purchased),
        total_paid=to_decimal(orm_customer.total_paid),
        created_at=orm_customer.created_at,
    )


def sale_item_to_domain(orm_item: ORMSaleItem) -> domain.SaleItem:
    """Convert SQLAlchemy SaleItem model to domain SaleItem entity."""
    return domain.SaleItem(
        product_id=orm_item.product_id,
        name=orm_item.name,
        sku=orm_item.sku,
        quantity=to_int(orm_item.quantity),
        sale_price=to_decimal(orm_item.sale_price),
        total=to_decimal(orm_item.total),
        unit=orm_item.unit,
        size=orm_item.size,
    )


def sale_to_domain(orm_sale: ORMSale, items: Iterable[ORMSaleItem] = ()) -> domain.Sale:
    """Convert SQLAlchemy Sale model plus its item rows to a domain Sale."""
    return domain.Sale(
        id=orm_sale.id,
        type=orm_sale.type,
        total=to_decimal(orm_sale.total),
        created_at=orm_sale.created_at,
        customer_id=orm_sale.customer_id,
        customer_name=orm_sale.customer_name,
        customer_phone=orm_sale.customer_phone,
        customer_address=orm_sale.customer_address,
        payment_type=orm_sale.payment_type,
        amount_paid=to_decimal(orm_sale.amount_paid),
        remaining_balance=to_decimal(orm_sale.remaining_balance),
        due_date=orm_sale.due_date,
        shop_id=orm_sale.shop_id,
        items=tuple(sale_item_to_domain(item) for item in items),
    )


def payment_to_domain(orm_payment: ORMPayment) -> domain.Payment:
    """Convert SQLAlchemy Payment model to domain Payment entity."""
    return domain.Payment(
        id=orm_payment.id,
        customer_id=orm_payment.customer_id,
        sale_id=orm_payment.sale_id,
        amount=to_decimal(orm_payment.amount),
        created_at=orm_payment.created_at,
        method=orm_payment.method,
        note=orm_payment.note,
    )


def supplier_to_domain(orm_supplier: ORMSupplier) -> domain.Supplier:
    """Convert SQLAlchemy Supplier model to domain Supplier entity."""
    return domain.Supplier(
        id=orm_supplier.id,
        name=orm_supplier.name,
        contact=orm_supplier.contact,
        alternate_phone=orm_supplier.alternate_phone,
        shop_name=orm_supplier.shop_name,
        address=orm_supplier.address,
        notes=orm_supplier.notes,
        balance=to_decimal(orm_supplier.balance),
        total_purchased=to_decimal(orm_supplier.total_purchased),
        total_paid=to_decimal(orm_supplier.total_paid),
        created_at=orm_supplier.created_at,
        next_payment_date=orm_supplier.next_payment_date,
    )


def purchase_item_to_domain(orm_item: ORMPurchaseItem) -> domain.PurchaseItem:
    """Convert SQLAlchemy PurchaseItem model to domain PurchaseItem entity."""
    return domain.PurchaseItem(
        product_id=orm_item.product_id,
        name=orm_item.name,
        quantity=to_int(orm_item.quantity),
        cost_price=to_decimal(orm_item.cost_price),
        total=to_decimal(orm_item.total),
        unit=orm_item.unit,
        size=orm_item.size,
    )


def purchase_to_domain(
    orm_purchase: ORMPurchase, items: Iterable[ORMPurchaseItem] = ()
) -> domain.Purchase:
    """Convert SQLAlchemy Purchase model plus its item rows to a domain Purchase."""
    return domain.Purchase(
        id=orm_purchase.id,
        supplier_id=orm_purchase.supplier_id,
        supplier_name=orm_purchase.supplier_name,
        total_amount=to_decimal(orm_purchase.total_amount),
        paid_amount=to_decimal(orm_purchase.paid_amount),
        remaining_amount=to_decimal(orm_purchase.remaining_amount),
        created_at=orm_purchase.created_at,
        shop_id=orm_purchase.shop_id,
        items=tuple(purchase_item_to_domain(item) for item in items),
    )


def supplier_payment_to_domain(orm_payment: ORMSupplierPayment) -> domain.SupplierPayment:
    """Convert SQLAlchemy SupplierPayment model to domain SupplierPayment entity."""
    return domain.SupplierPayment(
        id=orm_payment.id,
        supplier_id=orm_payment.supplier_id,
        amount=to_decimal(orm_payment.amount),
        created_at=orm_payment.created_at,
        method=orm_payment.method,
        note=orm_payment.note,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        description=orm_expense.description,
        amount=to_decimal(orm_expense.amount),
        category=orm_expense.category,
        created_at=orm_expense.created_at,
        shop_id=orm_expense.shop_id,
    )
