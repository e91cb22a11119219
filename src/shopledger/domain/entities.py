"""Domain model entities for shopledger.

These are pure data classes representing business concepts, independent of
database schema. Read views such as a sale with its line items are assembled
by the projection layer from normalized tables.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

SHOP_ONE = "shop-1"
SHOP_TWO = "shop-2"

SALE_TYPE_SALE = "Sale"
SALE_TYPE_RETURN = "Return"
SALE_TYPES = (SALE_TYPE_SALE, SALE_TYPE_RETURN)

PAYMENT_TYPE_FULL = "Full"
PAYMENT_TYPE_PARTIAL = "Partial"

IMMEDIATE_PAYMENT_METHOD = "Cash"


def opposite_shop(shop_id: Optional[str]) -> str:
    """Return the other shop of the two-shop model."""
    return SHOP_TWO if shop_id == SHOP_ONE else SHOP_ONE


@dataclass(frozen=True)
class Product:
    """Product held in one shop location."""

    id: str
    name: str
    sku: Optional[str]
    purchase_price: Decimal
    sale_price: Decimal
    stock: int
    category: Optional[str]
    shop_id: Optional[str]
    supplier_id: Optional[str]
    supplier_name: Optional[str]
    size: Optional[str]
    unit: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Customer:
    """Customer with a running balance."""

    id: str
    name: str
    phone: Optional[str]
    address: Optional[str]
    balance: Decimal
    total_purchased: Decimal
    total_paid: Decimal
    created_at: datetime


@dataclass(frozen=True)
class SaleItem:
    """Line item snapshot within a sale."""

    product_id: str
    name: str
    sku: Optional[str]
    quantity: int
    sale_price: Decimal
    total: Decimal
    unit: Optional[str] = None
    size: Optional[str] = None


@dataclass(frozen=True)
class Sale:
    """Sale or return with its line items."""

    id: str
    type: str
    total: Decimal
    created_at: datetime
    customer_id: Optional[str]
    customer_name: Optional[str]
    customer_phone: Optional[str]
    customer_address: Optional[str]
    payment_type: Optional[str]
    amount_paid: Decimal
    remaining_balance: Decimal
    due_date: Optional[date]
    shop_id: Optional[str]
    items: tuple[SaleItem, ...] = ()


@dataclass(frozen=True)
class Payment:
    """Money received against a customer's balance."""

    id: str
    customer_id: str
    sale_id: Optional[str]
    amount: Decimal
    created_at: datetime
    method: Optional[str]
    note: Optional[str]


@dataclass(frozen=True)
class Supplier:
    """Supplier with a running balance owed to them."""

    id: str
    name: str
    contact: Optional[str]
    alternate_phone: Optional[str]
    shop_name: Optional[str]
    address: Optional[str]
    notes: Optional[str]
    balance: Decimal
    total_purchased: Decimal
    total_paid: Decimal
    created_at: datetime
    next_payment_date: Optional[date]


@dataclass(frozen=True)
class PurchaseItem:
    """Line item within a purchase."""

    product_id: str
    name: str
    quantity: int
    cost_price: Decimal
    total: Decimal
    unit: Optional[str] = None
    size: Optional[str] = None


@dataclass(frozen=True)
class Purchase:
    """Stock purchase from a supplier with its line items."""

    id: str
    supplier_id: str
    supplier_name: Optional[str]
    total_amount: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    created_at: datetime
    shop_id: Optional[str]
    items: tuple[PurchaseItem, ...] = ()


@dataclass(frozen=True)
class SupplierPayment:
    """Money paid to a supplier."""

    id: str
    supplier_id: str
    amount: Decimal
    created_at: datetime
    method: Optional[str]
    note: Optional[str]


@dataclass(frozen=True)
class Expense:
    """Shop expense, independent of the ledger graph."""

    id: str
    description: str
    amount: Decimal
    category: Optional[str]
    created_at: datetime
    shop_id: Optional[str]


@dataclass(frozen=True)
class PurchaseReceipt:
    """Outcome of a recorded purchase."""

    id: str
    total_amount: Decimal
    remaining_amount: Decimal
    warnings: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a stock transfer between the two shops."""

    source_product_id: str
    destination_product_id: str
    destination_shop_id: str
    quantity: int
    created_destination: bool
