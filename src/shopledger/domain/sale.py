"""Sale domain service."""

import logging
from typing import Any, Mapping, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Sale as SaleEntity
from shopledger.domain.errors import NotFoundError, sale_not_found
from shopledger.domain.requests import SaleRequest, normalize

logger = logging.getLogger(__name__)


class SaleService:
    """Service for recording and reading sales and returns."""

    def __init__(self, db: Database):
        """Initialize sale service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_sale(self, request: SaleRequest | Mapping[str, Any]) -> str:
        """Record a sale or a return as one atomic transaction.

        A sale takes each line's quantity out of stock; a return puts it back.
        When a customer is attached, a sale adds the total, the amount paid
        and the unpaid remainder to the customer's running figures, while a
        return reduces the balance by the remaining balance given.

        Args:
            request: SaleRequest, or a payload accepted by SaleRequest.from_payload

        Returns:
            The new sequential sale ID (e.g. "42")

        Raises:
            ValidationError: If the request is malformed
            NotFoundError: If the customer or a product doesn't exist
            InsufficientStockError: If a sale line exceeds the product's stock
            ConstraintError: If the storage layer rejects the write
        """
        request = normalize(request, SaleRequest)
        sale_id = self.db.record_sale(request)
        logger.info(
            "Recorded %s %s: %d item(s), total %s, customer %s",
            request.type.lower(),
            sale_id,
            len(request.items),
            request.total,
            request.customer.customer_id or "walk-in",
        )
        return sale_id

    def get_sale(self, sale_id: str) -> Optional[SaleEntity]:
        """Get a sale with its line items, or None if not found."""
        return self.db.get_sale(sale_id)

    def require_sale(self, sale_id: str) -> SaleEntity:
        """Get a sale with its line items.

        Raises:
            NotFoundError: If sale doesn't exist
        """
        sale = self.db.get_sale(sale_id)
        if sale is None:
            raise NotFoundError(sale_not_found(sale_id))
        return sale

    def list_sales(
        self, customer_id: Optional[str] = None, shop_id: Optional[str] = None
    ) -> list[SaleEntity]:
        """List sales with their line items, newest first."""
        return self.db.list_sales(customer_id=customer_id, shop_id=shop_id)
