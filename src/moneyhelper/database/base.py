"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from moneyhelper.domain.entities import Category, Expense, Prediction


class Database(ABC):
    """Abstract database interface for moneyhelper."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str, icon: str, is_fixed: bool = False) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by exact name."""
        pass

    @abstractmethod
    def list_categories(self, include_fixed: bool = True) -> list[Category]:
        """List categories ordered by name."""
        pass

    @abstractmethod
    def update_category_fixed(self, category_id: int, is_fixed: bool) -> None:
        """Mark a category as fixed (excluded from forecasts) or variable."""
        pass

    # Expense operations
    @abstractmethod
    def create_expense(
        self,
        category_id: int,
        amount: Decimal,
        occurred_at: datetime,
        description: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> int:
        """Create an expense. Returns expense ID."""
        pass

    @abstractmethod
    def expense_exists(
        self,
        occurred_at: datetime,
        amount: Decimal,
        external_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> bool:
        """Check whether an equivalent expense is already stored.

        With an external ID, expenses match on external ID and timestamp.
        Without one, they match on timestamp, amount and description.
        """
        pass

    @abstractmethod
    def list_expenses(
        self,
        category_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Expense]:
        """List expenses in chronological order with optional filters.

        Args:
            category_id: Optional category ID filter
            start: Optional inclusive lower bound on occurred_at
            end: Optional exclusive upper bound on occurred_at
        """
        pass

    # Prediction operations
    @abstractmethod
    def upsert_prediction(self, category_id: int, amount: float) -> None:
        """Store the prediction for a category, replacing any previous one."""
        pass

    @abstractmethod
    def get_prediction(self, category_id: int) -> Optional[Prediction]:
        """Get the stored prediction for a category."""
        pass

    @abstractmethod
    def list_predictions(self) -> list[Prediction]:
        """List all stored predictions."""
        pass

    @abstractmethod
    def delete_prediction(self, category_id: int) -> None:
        """Delete the stored prediction for a category, if any."""
        pass

    @abstractmethod
    def clear_predictions(self) -> int:
        """Delete all stored predictions. Returns number of rows deleted."""
        pass
