"""Domain model entities for moneyhelper.

These are pure data classes representing business concepts, independent of
database schema. Parser and forecaster results live here too so that the
storage layer and the CLI share one vocabulary of types.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Category:
    """Spending category domain entity."""

    id: int
    name: str
    icon: str
    is_fixed: bool
    created_at: datetime


@dataclass(frozen=True)
class Expense:
    """Stored expense domain entity."""

    id: int
    category_id: int
    amount: Decimal
    occurred_at: datetime
    description: Optional[str]
    external_id: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Prediction:
    """Stored next-month prediction for a category."""

    id: int
    category_id: int
    amount: float
    created_at: datetime


@dataclass(frozen=True)
class ParsedTransaction:
    """One operation recognized in statement text.

    ``amount`` is the rounded magnitude; the direction of the operation is
    carried by ``is_income``.
    """

    occurred_at: datetime
    external_id: Optional[str]
    amount: int
    is_income: bool
    category: str
    description: str


@dataclass(frozen=True)
class ParseSummary:
    """Full outcome of parsing one statement text."""

    expenses: tuple[ParsedTransaction, ...] = ()
    incomes: tuple[ParsedTransaction, ...] = ()
    discarded_blocks: int = 0

    @property
    def total(self) -> int:
        """Number of blocks that produced a transaction."""
        return len(self.expenses) + len(self.incomes)


@dataclass(frozen=True)
class MonthlyExpensePoint:
    """Aggregated category total for one month of history.

    ``month_index`` starts at 1 for the oldest month.
    """

    month_index: int
    total: float


@dataclass(frozen=True)
class RegressionResult:
    """Outcome of a least-squares forecast.

    When ``valid`` is False the numeric fields are None and
    ``failure_reason`` explains why no forecast was produced.
    """

    valid: bool
    slope: Optional[float] = None
    intercept: Optional[float] = None
    predicted_next: Optional[float] = None
    failure_reason: Optional[str] = None

    @classmethod
    def failure(cls, reason: str) -> "RegressionResult":
        return cls(valid=False, failure_reason=reason)


@dataclass(frozen=True)
class CategoryForecast:
    """Forecast outcome for a single category in a batch run."""

    category_id: int
    category_name: str
    result: RegressionResult
    months: int = 0

    @property
    def valid(self) -> bool:
        return self.result.valid


@dataclass
class ImportResult:
    """Statistics collected while importing a statement."""

    total: int = 0
    imported: int = 0
    duplicates: int = 0
    skipped_income: int = 0
    discarded_blocks: int = 0
    created_categories: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryMonthStats:
    """Spending of one category in one month, measured against its budget.

    The budget is the category's stored prediction, 0 when none is stored.
    ``percentage`` is the truncated share of the month's total spending.
    """

    category_id: int
    name: str
    icon: str
    is_fixed: bool
    spent: float
    budget: float = 0.0
    percentage: int = 0

    @property
    def over_budget(self) -> bool:
        return self.budget > 0 and self.spent > self.budget

    @property
    def difference(self) -> float:
        """Overspend when positive, savings when negative."""
        return self.spent - self.budget

    @property
    def remaining_budget(self) -> float:
        return max(0.0, self.budget - self.spent)

    @property
    def budget_fulfillment(self) -> int:
        """Spent share of the budget in percent, may exceed 100."""
        if self.budget == 0:
            return 0
        return int(self.spent / self.budget * 100)


@dataclass(frozen=True)
class MonthSummary:
    """Per-category spending for one month, largest spend first."""

    month: date
    categories: tuple[CategoryMonthStats, ...] = ()

    @property
    def total_spent(self) -> float:
        return sum(stats.spent for stats in self.categories)

    @property
    def total_budget(self) -> float:
        return sum(stats.budget for stats in self.categories)

    @property
    def over_budget_count(self) -> int:
        return sum(1 for stats in self.categories if stats.over_budget)

    @property
    def remaining_budget(self) -> float:
        return max(0.0, self.total_budget - self.total_spent)

    @property
    def budget_fulfillment(self) -> int:
        if self.total_budget == 0:
            return 0
        return int(self.total_spent / self.total_budget * 100)
