"""Ledger writes that must land together.

Each ``apply_*`` function performs every table mutation of one business
transaction on the given session. None of them commit: the caller owns the
transaction and rolls back if any step raises.
"""

import logging
from datetime import datetime, UTC

from sqlalchemy import delete
from sqlalchemy.orm import Session

from shopledger.database.models import (
    Customer,
    Payment,
    Product,
    Purchase,
    PurchaseItem,
    Sale,
    SaleItem,
    Supplier,
    SupplierPayment,
    RESET_ORDER,
)
from shopledger.database.sequencer import next_sale_id
from shopledger.domain.entities import (
    SALE_TYPE_RETURN,
    PAYMENT_TYPE_FULL,
    IMMEDIATE_PAYMENT_METHOD,
    PurchaseReceipt,
)
from shopledger.domain.errors import (
    NotFoundError,
    InsufficientStockError,
    customer_not_found,
    supplier_not_found,
    product_not_found,
    sale_not_found,
    insufficient_stock,
    purchase_item_failed,
)
from shopledger.domain.requests import (
    SaleRequest,
    PaymentRequest,
    PurchaseRequest,
    SupplierPaymentRequest,
)

logger = logging.getLogger(__name__)


def _require(session: Session, model, entity_id: str, message: str):
    entity = session.get(model, entity_id)
    if entity is None:
        raise NotFoundError(message)
    return entity


def apply_sale(session: Session, request: SaleRequest) -> str:
    """Record a sale or return. Returns the new sequential sale ID."""
    details = request.customer
    customer = None
    if details.customer_id:
        customer = _require(session, Customer, details.customer_id, customer_not_found(details.customer_id))

    sale_id = next_sale_id(session)
    sale = Sale(
        id=sale_id,
        type=request.type,
        total=request.total,
        created_at=datetime.now(UTC),
        customer_id=details.customer_id,
        customer_name=details.customer_name or (customer.name if customer else None),
        customer_phone=details.customer_phone or (customer.phone if customer else None),
        customer_address=details.customer_address or (customer.address if customer else None),
        payment_type=details.payment_type,
        amount_paid=details.amount_paid,
        remaining_balance=details.remaining_balance,
        due_date=details.due_date,
        shop_id=request.shop_id,
    )
    session.add(sale)

    is_return = request.type == SALE_TYPE_RETURN
    for line in request.items:
        product = _require(session, Product, line.product_id, product_not_found(line.product_id))
        if is_return:
            product.stock += line.quantity
        else:
            if product.stock < line.quantity:
                raise InsufficientStockError(
                    insufficient_stock(product.name, product.stock, line.quantity)
                )
            product.stock -= line.quantity

        session.add(
            SaleItem(
                sale_id=sale_id,
                product_id=line.product_id,
                name=line.name or product.name,
                sku=line.sku if line.sku is not None else product.sku,
                quantity=line.quantity,
                sale_price=line.sale_price,
                total=line.line_total,
                unit=line.unit if line.unit is not None else product.unit,
                size=line.size if line.size is not None else product.size,
            )
        )

    if customer is not None:
        if is_return:
            customer.balance -= details.remaining_balance
        else:
            customer.total_purchased += request.total
            customer.total_paid += details.amount_paid
            customer.balance += details.remaining_balance

    session.flush()
    return sale_id


def apply_payment(session: Session, request: PaymentRequest) -> str:
    """Record a customer payment, optionally allocated to one sale."""
    customer = _require(session, Customer, request.customer_id, customer_not_found(request.customer_id))

    sale = None
    if request.sale_id:
        sale = _require(session, Sale, request.sale_id, sale_not_found(request.sale_id))

    payment = Payment(
        customer_id=request.customer_id,
        sale_id=request.sale_id,
        amount=request.amount,
        created_at=datetime.now(UTC),
        method=request.method,
        note=request.note,
    )
    session.add(payment)

    customer.balance -= request.amount
    customer.total_paid += request.amount

    if sale is not None:
        sale.amount_paid += request.amount
        sale.remaining_balance -= request.amount
        if sale.remaining_balance <= 0:
            sale.payment_type = PAYMENT_TYPE_FULL

    session.flush()
    return payment.id


def apply_purchase(session: Session, request: PurchaseRequest) -> PurchaseReceipt:
    """Record a purchase, restock its products and update the supplier ledger.

    Raises:
        NotFoundError: If the supplier or any referenced product doesn't exist
        InsufficientStockError: If a negative quantity would empty a product
    """
    supplier = _require(session, Supplier, request.supplier_id, supplier_not_found(request.supplier_id))
    now = datetime.now(UTC)
    total_amount = request.total_amount
    remaining_amount = request.remaining_amount

    purchase = Purchase(
        supplier_id=supplier.id,
        supplier_name=supplier.name,
        total_amount=total_amount,
        paid_amount=request.paid_amount,
        remaining_amount=remaining_amount,
        created_at=now,
        shop_id=request.shop_id,
    )
    session.add(purchase)
    session.flush()

    warnings: list[str] = []
    for line in request.items:
        product = session.get(Product, line.product_id)
        if product is None:
            raise NotFoundError(
                purchase_item_failed(line.index, line.product_id, product_not_found(line.product_id))
            )

        name = line.name
        if not name:
            name = product.name
            warnings.append(f"Purchase item {line.index} missing name; using '{name}'")
        if line.quantity <= 0:
            warnings.append(f"Purchase item {line.index} has non-positive quantity {line.quantity}")
        if product.stock + line.quantity < 0:
            raise InsufficientStockError(
                purchase_item_failed(
                    line.index,
                    line.product_id,
                    insufficient_stock(product.name, product.stock, -line.quantity),
                )
            )

        session.add(
            PurchaseItem(
                purchase_id=purchase.id,
                product_id=line.product_id,
                name=name,
                quantity=line.quantity,
                cost_price=line.cost_price,
                total=line.total,
                unit=line.unit,
                size=line.size,
            )
        )

        # Latest purchase wins: cost and supplier are overwritten, not averaged
        product.stock += line.quantity
        product.purchase_price = line.cost_price
        product.supplier_id = supplier.id
        product.supplier_name = supplier.name

    supplier.total_purchased += total_amount
    supplier.balance += total_amount
    if request.due_date is not None:
        supplier.next_payment_date = request.due_date

    if request.paid_amount > 0:
        session.add(
            SupplierPayment(
                supplier_id=supplier.id,
                amount=request.paid_amount,
                created_at=now,
                method=IMMEDIATE_PAYMENT_METHOD,
                note=f"Immediate payment for Purchase #{purchase.id}",
            )
        )
        supplier.balance -= request.paid_amount
        supplier.total_paid += request.paid_amount

    session.flush()
    return PurchaseReceipt(
        id=purchase.id,
        total_amount=total_amount,
        remaining_amount=remaining_amount,
        warnings=tuple(warnings),
    )


def apply_supplier_payment(session: Session, request: SupplierPaymentRequest) -> str:
    """Record a payment to a supplier."""
    supplier = _require(session, Supplier, request.supplier_id, supplier_not_found(request.supplier_id))

    payment = SupplierPayment(
        supplier_id=supplier.id,
        amount=request.amount,
        created_at=datetime.now(UTC),
        method=request.method,
        note=request.note,
    )
    session.add(payment)

    supplier.balance -= request.amount
    supplier.total_paid += request.amount

    session.flush()
    return payment.id


def apply_reset(session: Session) -> dict[str, int]:
    """Delete every row of every table. Returns deleted row counts per table."""
    counts = {}
    for model in RESET_ORDER:
        result = session.execute(delete(model))
        counts[model.__tablename__] = result.rowcount
    return counts
