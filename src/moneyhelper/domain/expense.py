"""Expense domain service."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from moneyhelper.database.base import Database
from moneyhelper.domain.entities import Expense
from moneyhelper.domain.errors import NotFoundError, ValidationError, category_not_found


class ExpenseService:
    """Service for recording and listing expenses."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_expense(
        self,
        category_id: int,
        amount: Decimal,
        occurred_at: datetime,
        description: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> int:
        """Record an expense.

        Args:
            category_id: Category ID
            amount: Positive amount spent
            occurred_at: When the money was spent
            description: Optional merchant or purpose
            external_id: Optional bank authorization code

        Returns:
            Expense ID

        Raises:
            ValidationError: If the amount is not a positive finite number
            NotFoundError: If the category doesn't exist
        """
        amount = Decimal(amount)
        if not amount.is_finite():
            raise ValidationError(f"Expense amount must be a finite number, got {amount}")
        if amount <= 0:
            raise ValidationError(f"Expense amount must be positive, got {amount}")

        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

        return self.db.create_expense(
            category_id=category_id,
            amount=amount,
            occurred_at=occurred_at,
            description=description,
            external_id=external_id,
        )

    def list_expenses(
        self,
        category_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Expense]:
        """List expenses in chronological order.

        Args:
            category_id: Optional category ID filter
            start: Optional inclusive lower bound
            end: Optional exclusive upper bound
        """
        return self.db.list_expenses(category_id=category_id, start=start, end=end)
