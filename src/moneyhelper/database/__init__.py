"""Database layer for moneyhelper application."""

from moneyhelper.database.base import Database
from moneyhelper.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
