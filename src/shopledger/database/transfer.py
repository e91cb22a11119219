"""Stock transfer between the two shop locations."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from shopledger.database.models import Product
from shopledger.domain.entities import TransferResult, opposite_shop
from shopledger.domain.errors import (
    NotFoundError,
    InsufficientStockError,
    product_not_found,
    insufficient_stock,
)
from shopledger.domain.requests import TransferRequest

logger = logging.getLogger(__name__)


def find_counterpart(session: Session, source: Product, shop_id: str) -> Optional[Product]:
    """Find the product in ``shop_id`` that represents the same item as ``source``.

    Matches on SKU when the source has one, then falls back to the name. Two
    unrelated products sharing a name with no SKU are treated as the same item.
    """
    base = select(Product).where(Product.shop_id == shop_id).order_by(Product.created_at)
    if source.sku:
        match = session.scalars(base.where(Product.sku == source.sku)).first()
        if match is not None:
            return match
    return session.scalars(base.where(Product.name == source.name)).first()


def apply_transfer(session: Session, request: TransferRequest) -> TransferResult:
    """Move ``request.quantity`` units from the source product to the other shop.

    Raises:
        NotFoundError: If the source product doesn't exist
        InsufficientStockError: If the source cannot cover the quantity
    """
    source = session.get(Product, request.source_product_id)
    if source is None:
        raise NotFoundError(product_not_found(request.source_product_id))
    if source.stock < request.quantity:
        raise InsufficientStockError(insufficient_stock(source.name, source.stock, request.quantity))

    source.stock -= request.quantity
    target_shop = opposite_shop(source.shop_id)

    target = find_counterpart(session, source, target_shop)
    created = target is None
    if target is None:
        target = Product(
            name=source.name,
            sku=source.sku,
            purchase_price=source.purchase_price,
            sale_price=source.sale_price,
            stock=request.quantity,
            category=source.category,
            shop_id=target_shop,
            supplier_id=source.supplier_id,
            supplier_name=source.supplier_name,
            size=source.size,
            unit=source.unit,
        )
        session.add(target)
        session.flush()
        logger.debug("Created product %s in %s for transfer", target.id, target_shop)
    else:
        target.stock += request.quantity

    return TransferResult(
        source_product_id=source.id,
        destination_product_id=target.id,
        destination_shop_id=target_shop,
        quantity=request.quantity,
        created_destination=created,
    )
