"""Shared pytest fixtures for moneyhelper tests."""

import tempfile
import os
from datetime import datetime
from pathlib import Path
import pytest

from moneyhelper.database.factories import create_sqlite_database
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.expense import ExpenseService
from moneyhelper.domain.prediction import PredictionService
from moneyhelper.domain.statement_import import StatementImportService
from moneyhelper.domain.statement_parser import StatementTextParser

FIXED_NOW = datetime(2024, 2, 1, 12, 0)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def expense_service(temp_db):
    """Create an ExpenseService with a temporary database."""
    return ExpenseService(temp_db)


@pytest.fixture
def prediction_service(temp_db):
    """Create a PredictionService with a temporary database."""
    return PredictionService(temp_db)


@pytest.fixture
def parser():
    """Create a statement parser with a fixed clock."""
    return StatementTextParser(clock=lambda: FIXED_NOW)


@pytest.fixture
def import_service(temp_db, parser):
    """Create a StatementImportService with a temporary database."""
    return StatementImportService(temp_db, parser=parser)


@pytest.fixture
def sample_categories(category_service):
    """Initialize default categories and return their IDs by name."""
    from moneyhelper.cli.commands.init_categories import INITIAL_CATEGORIES

    category_ids = {}
    for category_name, is_fixed in INITIAL_CATEGORIES:
        category_ids[category_name] = category_service.create_category(
            name=category_name, is_fixed=is_fixed
        )
    return category_ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def statement_text(fixtures_dir):
    """Return the text layer of a sample card statement."""
    return (fixtures_dir / "statement.txt").read_text(encoding="utf-8")
