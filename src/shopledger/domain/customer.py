"""Customer domain service."""

import logging
from typing import Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Customer as CustomerEntity
from shopledger.domain.errors import ValidationError, NotFoundError, customer_not_found

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for managing customers.

    Balances are never edited here; they move only through sales, returns
    and payments.
    """

    def __init__(self, db: Database):
        """Initialize customer service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_customer(
        self, name: str, phone: Optional[str] = None, address: Optional[str] = None
    ) -> str:
        """Create a customer with zero balance.

        Returns:
            Customer ID

        Raises:
            ValidationError: If name is empty
        """
        if not name or not name.strip():
            raise ValidationError("name is required")
        customer_id = self.db.create_customer(name=name.strip(), phone=phone, address=address)
        logger.info("Created customer %s '%s'", customer_id, name)
        return customer_id

    def get_customer(self, customer_id: str) -> Optional[CustomerEntity]:
        """Get customer by ID, or None if not found."""
        return self.db.get_customer(customer_id)

    def require_customer(self, customer_id: str) -> CustomerEntity:
        """Get customer by ID.

        Raises:
            NotFoundError: If customer doesn't exist
        """
        customer = self.db.get_customer(customer_id)
        if customer is None:
            raise NotFoundError(customer_not_found(customer_id))
        return customer

    def list_customers(self) -> list[CustomerEntity]:
        """List all customers, newest first."""
        return self.db.list_customers()

    def update_customer(
        self,
        customer_id: str,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Update a customer's contact details. None leaves a field unchanged."""
        fields = {
            key: value
            for key, value in (("name", name), ("phone", phone), ("address", address))
            if value is not None
        }
        if "name" in fields and not fields["name"].strip():
            raise ValidationError("name cannot be empty")
        if not fields:
            return
        self.db.update_customer(customer_id, **fields)

    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer. Their sales keep the customer snapshot."""
        self.db.delete_customer(customer_id)
        logger.info("Deleted customer %s", customer_id)
