"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from moneyhelper.domain import entities as domain
from moneyhelper.database.models import (
    Category as ORMCategory,
    Expense as ORMExpense,
    Prediction as ORMPrediction,
)


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        icon=orm_category.icon,
        is_fixed=orm_category.is_fixed,
        created_at=orm_category.created_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.Expense:
    """Convert SQLAlchemy Expense model to domain Expense entity."""
    return domain.Expense(
        id=orm_expense.id,
        category_id=orm_expense.category_id,
        amount=orm_expense.amount,
        occurred_at=orm_expense.occurred_at,
        description=orm_expense.description,
        external_id=orm_expense.external_id,
        created_at=orm_expense.created_at,
    )


def prediction_to_domain(orm_prediction: ORMPrediction) -> domain.Prediction:
    """Convert SQLAlchemy Prediction model to domain Prediction entity."""
    return domain.Prediction(
        id=orm_prediction.id,
        category_id=orm_prediction.category_id,
        amount=orm_prediction.amount,
        created_at=orm_prediction.created_at,
    )
