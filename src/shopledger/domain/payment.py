"""Customer payment domain service."""

import logging
from typing import Any, Mapping, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Payment as PaymentEntity
from shopledger.domain.requests import PaymentRequest, normalize

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for money received from customers."""

    def __init__(self, db: Database):
        """Initialize payment service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_payment(self, request: PaymentRequest | Mapping[str, Any]) -> str:
        """Record a customer payment.

        Lowers the customer's balance and raises their total paid. When a sale
        is named, the payment is also allocated to it, and the sale is marked
        fully paid once nothing remains.

        Returns:
            Payment ID

        Raises:
            ValidationError: If the request is malformed or the amount is not positive
            NotFoundError: If the customer or the named sale doesn't exist
        """
        request = normalize(request, PaymentRequest)
        payment_id = self.db.record_payment(request)
        logger.info(
            "Recorded payment %s of %s from customer %s%s",
            payment_id,
            request.amount,
            request.customer_id,
            f" against sale {request.sale_id}" if request.sale_id else "",
        )
        return payment_id

    def list_payments(self, customer_id: Optional[str] = None) -> list[PaymentEntity]:
        """List payments, newest first, optionally for one customer."""
        return self.db.list_payments(customer_id=customer_id)
