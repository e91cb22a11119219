"""Purchase domain service."""

import logging
from typing import Any, Mapping, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Purchase as PurchaseEntity, PurchaseReceipt
from shopledger.domain.errors import NotFoundError, purchase_not_found
from shopledger.domain.requests import PurchaseRequest, normalize

logger = logging.getLogger(__name__)


class PurchaseService:
    """Service for recording stock bought from suppliers."""

    def __init__(self, db: Database):
        """Initialize purchase service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_purchase(self, request: PurchaseRequest | Mapping[str, Any]) -> PurchaseReceipt:
        """Record a purchase as one atomic transaction.

        Restocks every product on the purchase and overwrites its cost price
        and supplier with this purchase's values. The supplier's balance and
        total purchased grow by the purchase total; a non-zero paid amount is
        booked straight away as a cash supplier payment.

        If any line fails, nothing from the purchase is kept and the error
        names the failing item index and product ID.

        Returns:
            PurchaseReceipt with ID, totals and any non-fatal warnings

        Raises:
            ValidationError: If the request or a line is malformed
            NotFoundError: If the supplier or a product doesn't exist
        """
        request = normalize(request, PurchaseRequest)
        receipt = self.db.record_purchase(request)
        for warning in receipt.warnings:
            logger.warning("Purchase %s: %s", receipt.id, warning)
        logger.info(
            "Recorded purchase %s from supplier %s: total %s, paid %s, remaining %s",
            receipt.id,
            request.supplier_id,
            receipt.total_amount,
            request.paid_amount,
            receipt.remaining_amount,
        )
        return receipt

    def get_purchase(self, purchase_id: str) -> Optional[PurchaseEntity]:
        """Get a purchase with its line items, or None if not found."""
        return self.db.get_purchase(purchase_id)

    def require_purchase(self, purchase_id: str) -> PurchaseEntity:
        """Get a purchase with its line items.

        Raises:
            NotFoundError: If purchase doesn't exist
        """
        purchase = self.db.get_purchase(purchase_id)
        if purchase is None:
            raise NotFoundError(purchase_not_found(purchase_id))
        return purchase

    def list_purchases(self, supplier_id: Optional[str] = None) -> list[PurchaseEntity]:
        """List purchases with their line items, newest first."""
        return self.db.list_purchases(supplier_id=supplier_id)
