"""Statement import domain service."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

from moneyhelper.database.base import Database
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.entities import ImportResult, ParsedTransaction, ParseSummary
from moneyhelper.domain.errors import DomainError
from moneyhelper.domain.expense import ExpenseService
from moneyhelper.domain.statement_parser import StatementTextParser
from moneyhelper.utils.pdf_text import extract_pdf_text

logger = logging.getLogger(__name__)


class StatementImportService:
    """Service for importing bank statements as expenses."""

    def __init__(self, db: Database, parser: Optional[StatementTextParser] = None):
        """Initialize statement import service.

        Args:
            db: Database instance
            parser: Statement parser, a default-configured one if omitted
        """
        self.db = db
        self.parser = parser or StatementTextParser()
        self.category_service = CategoryService(db)
        self.expense_service = ExpenseService(db)

    def preview_statement(self, pdf_path: str | Path) -> ParseSummary:
        """Parse a PDF statement without storing anything.

        Raises:
            ExtractionError: If text cannot be extracted from the file
        """
        return self.parser.analyze(extract_pdf_text(pdf_path))

    def import_statement(self, pdf_path: str | Path) -> ImportResult:
        """Import expenses from a PDF statement.

        Args:
            pdf_path: Path to the statement PDF

        Returns:
            ImportResult with import statistics

        Raises:
            ExtractionError: If text cannot be extracted from the file
        """
        raw_text = extract_pdf_text(pdf_path)
        return self.import_text(raw_text)

    def import_text(self, raw_text: str) -> ImportResult:
        """Import expenses from already extracted statement text.

        Income operations are counted and skipped. Operations already stored
        are counted as duplicates. Categories named by the parser that do
        not exist yet are created.

        Args:
            raw_text: Statement text

        Returns:
            ImportResult with import statistics
        """
        summary = self.parser.analyze(raw_text)
        result = ImportResult(
            total=summary.total,
            skipped_income=len(summary.incomes),
            discarded_blocks=summary.discarded_blocks,
        )

        category_ids: dict[str, int] = {}

        for number, transaction in enumerate(summary.expenses, start=1):
            try:
                if self._is_duplicate(transaction):
                    result.duplicates += 1
                    continue

                category_id = category_ids.get(transaction.category)
                if category_id is None:
                    category, created = self.category_service.get_or_create_category(
                        transaction.category
                    )
                    if created:
                        logger.info("Created category %s", category.name)
                        result.created_categories.append(category.name)
                    category_id = category.id
                    category_ids[transaction.category] = category_id

                self.expense_service.add_expense(
                    category_id=category_id,
                    amount=Decimal(transaction.amount),
                    occurred_at=transaction.occurred_at,
                    description=transaction.description,
                    external_id=transaction.external_id,
                )
                result.imported += 1

            except DomainError as e:
                logger.warning("Operation %d not imported: %s", number, e)
                result.errors.append(f"Operation {number}: {e}")

        logger.info(
            "Import finished: %d imported, %d duplicates, %d incomes skipped",
            result.imported,
            result.duplicates,
            result.skipped_income,
        )
        return result

    def _is_duplicate(self, transaction: ParsedTransaction) -> bool:
        return self.db.expense_exists(
            occurred_at=transaction.occurred_at,
            amount=Decimal(transaction.amount),
            external_id=transaction.external_id,
            description=transaction.description,
        )
