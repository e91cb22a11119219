"""Expense domain service."""

import logging
from typing import Any, Optional

from shopledger.database.base import Database
from shopledger.domain.entities import Expense as ExpenseEntity
from shopledger.domain.errors import ValidationError
from shopledger.utils.amount_parser import parse_amount

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for shop expenses."""

    def __init__(self, db: Database):
        self.db = db

    def create_expense(
        self,
        description: str,
        amount: Any,
        category: Optional[str] = None,
        shop_id: Optional[str] = None,
    ) -> str:
        """Record an expense. Returns expense ID."""
        if not description or not description.strip():
            raise ValidationError("description is required")
        try:
            parsed = parse_amount(amount)
        except ValueError as e:
            raise ValidationError(f"Invalid amount: {e}") from e
        if parsed <= 0:
            raise ValidationError("amount must be greater than zero")

        expense_id = self.db.create_expense(
            description=description.strip(), amount=parsed, category=category, shop_id=shop_id
        )
        logger.info("Recorded expense %s of %s", expense_id, parsed)
        return expense_id

    def list_expenses(self, shop_id: Optional[str] = None) -> list[ExpenseEntity]:
        """List expenses, newest first, optionally for one shop."""
        return self.db.list_expenses(shop_id=shop_id)
