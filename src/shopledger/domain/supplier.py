"""Supplier domain service."""

import logging
from typing import Any, Mapping, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import (
    Supplier as SupplierEntity,
    SupplierPayment as SupplierPaymentEntity,
)
from shopledger.domain.errors import ValidationError, NotFoundError, supplier_not_found
from shopledger.domain.requests import SupplierPaymentRequest, normalize

logger = logging.getLogger(__name__)


class SupplierService:
    """Service for managing suppliers and the payments made to them."""

    def __init__(self, db: Database):
        """Initialize supplier service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_supplier(
        self,
        name: str,
        contact: Optional[str] = None,
        alternate_phone: Optional[str] = None,
        shop_name: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Create a supplier with zero balance.

        Returns:
            Supplier ID

        Raises:
            ValidationError: If name is empty
        """
        if not name or not name.strip():
            raise ValidationError("name is required")
        supplier_id = self.db.create_supplier(
            name=name.strip(),
            contact=contact,
            alternate_phone=alternate_phone,
            shop_name=shop_name,
            address=address,
            notes=notes,
        )
        logger.info("Created supplier %s '%s'", supplier_id, name)
        return supplier_id

    def get_supplier(self, supplier_id: str) -> Optional[SupplierEntity]:
        """Get supplier by ID, or None if not found."""
        return self.db.get_supplier(supplier_id)

    def require_supplier(self, supplier_id: str) -> SupplierEntity:
        """Get supplier by ID.

        Raises:
            NotFoundError: If supplier doesn't exist
        """
        supplier = self.db.get_supplier(supplier_id)
        if supplier is None:
            raise NotFoundError(supplier_not_found(supplier_id))
        return supplier

    def list_suppliers(self) -> list[SupplierEntity]:
        """List all suppliers, newest first."""
        return self.db.list_suppliers()

    def update_supplier(self, supplier_id: str, **fields) -> None:
        """Update supplier contact details. Fields passed as None are left unchanged."""
        fields = {key: value for key, value in fields.items() if value is not None}
        if "name" in fields and not fields["name"].strip():
            raise ValidationError("name cannot be empty")
        if not fields:
            return
        self.db.update_supplier(supplier_id, **fields)

    def delete_supplier(self, supplier_id: str) -> None:
        """Delete a supplier. Their purchases keep the supplier name snapshot."""
        self.db.delete_supplier(supplier_id)
        logger.info("Deleted supplier %s", supplier_id)

    def record_payment(self, request: SupplierPaymentRequest | Mapping[str, Any]) -> str:
        """Record a payment to a supplier.

        Lowers the supplier's balance and raises their total paid.

        Returns:
            Supplier payment ID

        Raises:
            ValidationError: If the request is malformed or the amount is not positive
            NotFoundError: If supplier doesn't exist
        """
        request = normalize(request, SupplierPaymentRequest)
        payment_id = self.db.record_supplier_payment(request)
        logger.info(
            "Recorded supplier payment %s of %s to %s", payment_id, request.amount, request.supplier_id
        )
        return payment_id

    def list_payments(self, supplier_id: Optional[str] = None) -> list[SupplierPaymentEntity]:
        """List supplier payments, newest first, optionally for one supplier."""
        return self.db.list_supplier_payments(supplier_id=supplier_id)
