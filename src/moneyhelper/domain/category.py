"""Category domain service."""

import logging
from datetime import date, datetime, time
from typing import Optional

from moneyhelper.database.base import Database
from moneyhelper.domain.entities import Category, CategoryMonthStats, MonthSummary
from moneyhelper.domain.errors import (
    NotFoundError,
    ValidationError,
    category_name_not_found,
    category_not_found,
)
from moneyhelper.domain.vocabulary import default_icon
from moneyhelper.utils.date_parser import month_start, next_month

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self, name: str, icon: Optional[str] = None, is_fixed: bool = False
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            icon: Optional icon, defaults to the icon for known category names
            is_fixed: Fixed categories are excluded from forecasts

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a category with this name already exists
        """
        name = name.strip() if name else ""
        if not name:
            raise ValidationError("Category name cannot be empty")

        return self.db.create_category(
            name=name,
            icon=icon or default_icon(name),
            is_fixed=is_fixed,
        )

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID.

        Args:
            category_id: Category ID

        Returns:
            Category or None if not found
        """
        return self.db.get_category(category_id)

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name."""
        return self.db.get_category_by_name(name)

    def get_or_create_category(self, name: str) -> tuple[Category, bool]:
        """Return the category with this name, creating it when missing.

        Returns:
            Tuple of (category, created)
        """
        category = self.db.get_category_by_name(name)
        if category is not None:
            return category, False

        category_id = self.create_category(name)
        return self.db.get_category(category_id), True

    def list_categories(self, include_fixed: bool = True) -> list[Category]:
        """List categories.

        Args:
            include_fixed: If False, only variable categories are returned

        Returns:
            List of categories ordered by name
        """
        return self.db.list_categories(include_fixed=include_fixed)

    def set_fixed(self, category: int | str, is_fixed: bool) -> Category:
        """Mark a category, by ID or name, as fixed or variable.

        Fixed categories are not forecast, so fixing one also drops its
        stored prediction.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        resolved = self.resolve(category)
        self.db.update_category_fixed(resolved.id, is_fixed)
        if is_fixed:
            self.db.delete_prediction(resolved.id)
        return self.db.get_category(resolved.id)

    def resolve(self, category: int | str) -> Category:
        """Resolve a category ID or name to a Category.

        Raises:
            NotFoundError: If no category matches
        """
        if isinstance(category, int):
            found = self.db.get_category(category)
            if found is None:
                raise NotFoundError(category_not_found(category))
            return found

        try:
            category_id = int(category)
        except (ValueError, TypeError):
            found = self.db.get_category_by_name(category)
            if found is None:
                raise NotFoundError(category_name_not_found(category))
            return found

        found = self.db.get_category(category_id)
        if found is None:
            raise NotFoundError(category_not_found(category_id))
        return found

    def month_summary(self, month: date) -> MonthSummary:
        """Summarize spending per category for the month containing ``month``.

        Only categories with expenses in that month are included. Each one
        is compared with its stored prediction, which serves as its budget.

        Args:
            month: Any date within the month

        Returns:
            MonthSummary with categories ordered by spending, largest first
        """
        first_day = month_start(month)
        start = datetime.combine(first_day, time())
        end = datetime.combine(next_month(first_day), time())

        spent: dict[int, float] = {}
        for expense in self.db.list_expenses(start=start, end=end):
            spent[expense.category_id] = spent.get(expense.category_id, 0.0) + float(expense.amount)

        total = sum(spent.values())
        rows = []
        for category_id, amount in spent.items():
            category = self.db.get_category(category_id)
            prediction = self.db.get_prediction(category_id)
            rows.append(
                CategoryMonthStats(
                    category_id=category_id,
                    name=category.name,
                    icon=category.icon,
                    is_fixed=category.is_fixed,
                    spent=amount,
                    budget=prediction.amount if prediction is not None else 0.0,
                    percentage=int(amount / total * 100) if total > 0 else 0,
                )
            )
        rows.sort(key=lambda stats: (-stats.spent, stats.name))

        logger.debug(
            "Month %s: %d categories, %.2f spent", first_day.strftime("%m.%Y"), len(rows), total
        )
        return MonthSummary(month=first_day, categories=tuple(rows))

    def top_categories(self, month: date, limit: int) -> list[CategoryMonthStats]:
        """Return up to ``limit`` categories with the largest spending in a month."""
        if limit <= 0:
            return []
        return [stats for stats in self.month_summary(month).categories if stats.spent > 0][:limit]

    def total_expense(self, month: date) -> float:
        """Return total spending in the month containing ``month``."""
        return self.month_summary(month).total_spent
