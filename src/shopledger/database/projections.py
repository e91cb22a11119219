"""Read views that reassemble sales and purchases from normalized tables.

Parents and children are fetched with two queries and joined in memory by
parent ID. Record volumes are small, and this keeps parent columns from being
repeated once per line item.
"""

from collections import defaultdict
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shopledger.database.models import Sale, SaleItem, Purchase, PurchaseItem
from shopledger.database.mappers import sale_to_domain, purchase_to_domain
from shopledger.domain.entities import Sale as DomainSale, Purchase as DomainPurchase


def _group_by(rows, key: str) -> dict[str, list]:
    grouped: dict[str, list] = defaultdict(list)
    for row in rows:
        grouped[getattr(row, key)].append(row)
    return grouped


def load_sales(
    session: Session,
    sale_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    shop_id: Optional[str] = None,
) -> list[DomainSale]:
    """Load sales with their line items, newest first."""
    query = select(Sale)
    if sale_id is not None:
        query = query.where(Sale.id == sale_id)
    if customer_id is not None:
        query = query.where(Sale.customer_id == customer_id)
    if shop_id is not None:
        query = query.where(Sale.shop_id == shop_id)
    # Shorter digit strings are smaller numbers, so "10" sorts above "9"
    sales = session.scalars(
        query.order_by(Sale.created_at.desc(), func.length(Sale.id).desc(), Sale.id.desc())
    ).all()
    if not sales:
        return []

    item_query = select(SaleItem).order_by(SaleItem.id)
    if sale_id is not None or customer_id is not None or shop_id is not None:
        item_query = item_query.where(SaleItem.sale_id.in_([sale.id for sale in sales]))
    items_by_sale = _group_by(session.scalars(item_query), "sale_id")

    return [sale_to_domain(sale, items_by_sale.get(sale.id, ())) for sale in sales]


def load_purchases(
    session: Session,
    purchase_id: Optional[str] = None,
    supplier_id: Optional[str] = None,
) -> list[DomainPurchase]:
    """Load purchases with their line items, newest first."""
    query = select(Purchase)
    if purchase_id is not None:
        query = query.where(Purchase.id == purchase_id)
    if supplier_id is not None:
        query = query.where(Purchase.supplier_id == supplier_id)
    purchases = session.scalars(query.order_by(Purchase.created_at.desc())).all()
    if not purchases:
        return []

    item_query = select(PurchaseItem).order_by(PurchaseItem.id)
    if purchase_id is not None or supplier_id is not None:
        item_query = item_query.where(
            PurchaseItem.purchase_id.in_([purchase.id for purchase in purchases])
        )
    items_by_purchase = _group_by(session.scalars(item_query), "purchase_id")

    return [
        purchase_to_domain(purchase, items_by_purchase.get(purchase.id, ()))
        for purchase in purchases
    ]
