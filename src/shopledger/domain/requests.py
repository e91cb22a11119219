"""Typed request objects for ledger operations.

Callers hand in loosely shaped payloads: camelCase or snake_case keys, amounts
as numbers or strings. ``from_payload`` normalizes them once, at the boundary,
so the ledger only ever sees the strictly typed objects below. Shape problems
raise ValidationError before any transaction begins.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from shopledger.domain.entities import (
    SALE_TYPE_SALE,
    SALE_TYPES,
    PAYMENT_TYPE_FULL,
    PAYMENT_TYPE_PARTIAL,
)
from shopledger.domain.errors import ValidationError, purchase_item_failed
from shopledger.utils.amount_parser import (
    parse_amount,
    coerce_amount,
    parse_quantity,
    coerce_quantity,
)
from shopledger.utils.date_parser import parse_date
from shopledger.utils.payload import pick


def normalize(request: Any, request_type: type) -> Any:
    """Return ``request`` as ``request_type``, building it from a payload if needed."""
    if isinstance(request, request_type):
        return request
    if isinstance(request, Mapping):
        return request_type.from_payload(request)
    raise ValidationError(f"Expected {request_type.__name__} or a mapping payload")


def _require_text(payload: Mapping[str, Any], *names: str) -> str:
    value = pick(payload, *names)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{names[0]} is required")
    return value.strip()


def _optional_text(payload: Mapping[str, Any], *names: str) -> Optional[str]:
    value = pick(payload, *names)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _amount(payload: Mapping[str, Any], name: str, default: Optional[Decimal] = None) -> Decimal:
    value = pick(payload, name)
    if value is None:
        if default is None:
            raise ValidationError(f"{name} is required")
        return default
    try:
        return parse_amount(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}: {e}") from e


def _positive_amount(payload: Mapping[str, Any], name: str) -> Decimal:
    amount = _amount(payload, name)
    if amount <= 0:
        raise ValidationError(f"{name} must be greater than zero")
    return amount


def _positive_quantity(payload: Mapping[str, Any], name: str, context: str = "") -> int:
    value = pick(payload, name)
    if value is None:
        raise ValidationError(f"{name} is required{context}")
    try:
        quantity = parse_quantity(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {name}{context}: {e}") from e
    if quantity <= 0:
        raise ValidationError(f"{name} must be greater than zero{context}")
    return quantity


def _due_date(payload: Mapping[str, Any]) -> Optional[date]:
    value = pick(payload, "dueDate")
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        raise ValidationError(f"Invalid dueDate: {e}") from e


def _item_list(payload: Mapping[str, Any]) -> Sequence[Any]:
    items = pick(payload, "items")
    if not isinstance(items, (list, tuple)) or not items:
        raise ValidationError("items array is required")
    return items


@dataclass(frozen=True)
class SaleLine:
    """One product line of a sale or return."""

    product_id: str
    quantity: int
    sale_price: Decimal
    name: Optional[str] = None
    sku: Optional[str] = None
    unit: Optional[str] = None
    size: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.sale_price * self.quantity

    @classmethod
    def from_payload(cls, item: Any, index: int) -> "SaleLine":
        if not isinstance(item, Mapping):
            raise ValidationError(f"Invalid sale item at index {index}: not an object")
        context = f" for item at index {index}"
        product_id = pick(item, "productId", "id")
        if not isinstance(product_id, str) or not product_id.strip():
            raise ValidationError(f"Missing or invalid productId{context}")
        price = pick(item, "salePrice", "price")
        if price is None:
            raise ValidationError(f"salePrice is required{context}")
        try:
            sale_price = parse_amount(price)
        except ValueError as e:
            raise ValidationError(f"Invalid salePrice{context}: {e}") from e
        return cls(
            product_id=product_id.strip(),
            quantity=_positive_quantity(item, "quantity", context),
            sale_price=sale_price,
            name=_optional_text(item, "name"),
            sku=_optional_text(item, "sku"),
            unit=_optional_text(item, "unit"),
            size=_optional_text(item, "size"),
        )


@dataclass(frozen=True)
class CustomerDetails:
    """Customer snapshot and settlement terms attached to a sale."""

    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_address: Optional[str] = None
    payment_type: Optional[str] = None
    amount_paid: Decimal = Decimal("0")
    remaining_balance: Decimal = Decimal("0")
    due_date: Optional[date] = None

    @classmethod
    def from_payload(cls, details: Mapping[str, Any], total: Decimal) -> "CustomerDetails":
        """Build details, defaulting to a fully paid sale when amounts are absent."""
        amount_paid = _amount(details, "amountPaid", default=total)
        remaining = _amount(details, "remainingBalance", default=total - amount_paid)
        payment_type = _optional_text(details, "paymentType")
        if payment_type is None:
            payment_type = PAYMENT_TYPE_FULL if remaining <= 0 else PAYMENT_TYPE_PARTIAL
        return cls(
            customer_id=_optional_text(details, "customerId"),
            customer_name=_optional_text(details, "customerName"),
            customer_phone=_optional_text(details, "customerPhone"),
            customer_address=_optional_text(details, "customerAddress"),
            payment_type=payment_type,
            amount_paid=amount_paid,
            remaining_balance=remaining,
            due_date=_due_date(details),
        )


@dataclass(frozen=True)
class SaleRequest:
    """RecordSale input."""

    items: tuple[SaleLine, ...]
    total: Decimal
    customer: CustomerDetails
    shop_id: Optional[str] = None
    type: str = SALE_TYPE_SALE

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SaleRequest":
        """Normalize a sale payload.

        Customer fields may be nested under ``customerDetails`` or given at the
        top level. A missing total defaults to the sum of the line totals.
        """
        items = tuple(
            SaleLine.from_payload(item, index) for index, item in enumerate(_item_list(payload))
        )
        sale_type = _optional_text(payload, "type") or SALE_TYPE_SALE
        if sale_type not in SALE_TYPES:
            raise ValidationError(
                f"Invalid sale type '{sale_type}'. Expected one of: {', '.join(SALE_TYPES)}"
            )
        total = _amount(payload, "total", default=sum((i.line_total for i in items), Decimal("0")))
        details = pick(payload, "customerDetails")
        if details is None:
            details = payload
        elif not isinstance(details, Mapping):
            raise ValidationError("customerDetails must be an object")
        return cls(
            items=items,
            total=total,
            customer=CustomerDetails.from_payload(details, total),
            shop_id=_optional_text(payload, "shopId"),
            type=sale_type,
        )


@dataclass(frozen=True)
class PaymentRequest:
    """RecordPayment input."""

    customer_id: str
    amount: Decimal
    sale_id: Optional[str] = None
    method: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PaymentRequest":
        return cls(
            customer_id=_require_text(payload, "customerId"),
            amount=_positive_amount(payload, "amount"),
            sale_id=_optional_text(payload, "saleId"),
            method=_optional_text(payload, "method"),
            note=_optional_text(payload, "note"),
        )


@dataclass(frozen=True)
class TransferRequest:
    """Transfer input: move stock from a product to its twin in the other shop."""

    source_product_id: str
    quantity: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransferRequest":
        return cls(
            source_product_id=_require_text(payload, "sourceProductId"),
            quantity=_positive_quantity(payload, "quantity"),
        )


@dataclass(frozen=True)
class PurchaseLine:
    """One product line of a purchase.

    Quantity and cost are coerced leniently (missing or non-numeric means 0);
    the line total is the declared total when it is a non-zero number, else
    ``quantity * cost_price``.
    """

    index: int
    product_id: str
    quantity: int
    cost_price: Decimal
    total: Decimal
    name: Optional[str] = None
    unit: Optional[str] = None
    size: Optional[str] = None

    @classmethod
    def from_payload(cls, item: Any, index: int) -> "PurchaseLine":
        if not isinstance(item, Mapping):
            raise ValidationError(f"Invalid purchase item at index {index}: not an object")
        product_id = pick(item, "productId")
        if not isinstance(product_id, str) or not product_id.strip():
            raise ValidationError(
                purchase_item_failed(index, product_id, "missing or invalid productId")
            )
        quantity = coerce_quantity(pick(item, "quantity"))
        cost_price = coerce_amount(pick(item, "costPrice"))
        computed = cost_price * quantity
        declared = coerce_amount(pick(item, "total"), default=computed)
        return cls(
            index=index,
            product_id=product_id.strip(),
            quantity=quantity,
            cost_price=cost_price,
            total=declared or computed,
            name=_optional_text(item, "name"),
            unit=_optional_text(item, "unit"),
            size=_optional_text(item, "size"),
        )


@dataclass(frozen=True)
class PurchaseRequest:
    """RecordPurchase input."""

    supplier_id: str
    items: tuple[PurchaseLine, ...]
    paid_amount: Decimal = Decimal("0")
    shop_id: Optional[str] = None
    due_date: Optional[date] = None

    @property
    def total_amount(self) -> Decimal:
        return sum((line.total for line in self.items), Decimal("0"))

    @property
    def remaining_amount(self) -> Decimal:
        return self.total_amount - self.paid_amount

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PurchaseRequest":
        raw_items = _item_list(payload)
        supplier_id = _require_text(payload, "supplierId")
        paid_amount = coerce_amount(pick(payload, "paidAmount"))
        if paid_amount < 0:
            raise ValidationError("paidAmount cannot be negative")
        return cls(
            supplier_id=supplier_id,
            items=tuple(
                PurchaseLine.from_payload(item, index) for index, item in enumerate(raw_items)
            ),
            paid_amount=paid_amount,
            shop_id=_optional_text(payload, "shopId"),
            due_date=_due_date(payload),
        )


@dataclass(frozen=True)
class SupplierPaymentRequest:
    """RecordSupplierPayment input."""

    supplier_id: str
    amount: Decimal
    method: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SupplierPaymentRequest":
        return cls(
            supplier_id=_require_text(payload, "supplierId"),
            amount=_positive_amount(payload, "amount"),
            method=_optional_text(payload, "method"),
            note=_optional_text(payload, "note"),
        )
