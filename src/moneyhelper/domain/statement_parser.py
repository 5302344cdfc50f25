"""Bank statement text parser.

Turns the text layer of a card statement into transaction records. Each
operation starts with a line of the form::

    15.01.2024 14:30 123456 Супермаркеты 349,97 36 975,65

(date, time, authorization code, bank category, operation amount, running
balance) and is usually followed by a line or two naming the merchant.
"""

import logging
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import datetime
from enum import Enum
from typing import Optional

from moneyhelper.domain.entities import ParsedTransaction, ParseSummary
from moneyhelper.domain.vocabulary import (
    CATEGORY_VOCABULARY,
    NO_DESCRIPTION,
    OTHER,
    guess_category,
    map_category,
)
from moneyhelper.utils.amount_parser import extract_amounts
from moneyhelper.utils.date_parser import parse_statement_datetime

logger = logging.getLogger(__name__)

# Number of lines after the start line that may belong to one operation
LOOKAHEAD_LINES = 4

CARD_OPERATION_MARKER = "Операция по карте"

BLOCK_START_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4}\s+\d{2}:\d{2}")
DATETIME_RE = re.compile(r"(\d{2}\.\d{2}\.\d{4})\s+(\d{2}:\d{2})")
AUTH_CODE_RE = re.compile(r"\d{2}:\d{2}\s+(\d{6})(?!\d)")
OPERATION_PREFIX_RE = re.compile(r"^\d{2}\.\d{2}\.\d{4}\s+\d{2}:\d{2}(?:\s+\d{6}(?!\d))?")

# Alternatives in vocabulary order; at one position the earlier label wins,
# so "Перевод СБП" is read as "Перевод"
CATEGORY_RE = re.compile("|".join(re.escape(label) for label in CATEGORY_VOCABULARY))

DESCRIPTION_CODE_RE = re.compile(r"\s*\d{6}\s*")
DESCRIPTION_AMOUNT_RE = re.compile(r"[+-]?\s*\d{1,3}(?:[,\s]\d{3})*[,.]\d{2}")
WHITESPACE_RE = re.compile(r"\s+")

NUMERIC_ONLY_RE = re.compile(r"^[\d\s.,+-]+$")
CARD_OPERATION_RE = re.compile(r"Операция по карте\s*\*+\d+\.?")
INLINE_DATE_RE = re.compile(r"\d{2}\.\d{2}\.\d{4}(?:\s+\d{2}:\d{2})?")
TRAILING_COUNTRY_RE = re.compile(r"\s+RUS\.?$")
TRAILING_CODE_RE = re.compile(r"\s+[A-Z]{3}\s*$")
LONG_DIGITS_RE = re.compile(r"\d{6,}")
MONEY_RE = re.compile(r"\d+[,.]\d{2}")


class AmountPolicy(Enum):
    """Which extracted amount of a main line is the operation amount.

    ``REFERENCE`` is the historical import behavior: when a line yields two
    or more amounts the second one is used, a single amount is used as is.
    ``FIRST`` always takes the first amount, which is the operation column
    on statements that print a running balance.
    """

    REFERENCE = "reference"
    FIRST = "first"

    def select(self, amounts: Sequence[int]) -> int:
        if self is AmountPolicy.REFERENCE and len(amounts) > 1:
            return amounts[1]
        return amounts[0]


def is_block_start(line: str) -> bool:
    """Return True if a trimmed line opens a new operation block."""
    return BLOCK_START_RE.match(line) is not None


def split_blocks(lines: Iterable[str]) -> Iterator[list[str]]:
    """Group statement lines into operation blocks.

    A block is a start line plus at most ``LOOKAHEAD_LINES`` following
    lines. The next start line closes the current block early, so blocks
    never overlap. Lines outside any block are dropped.

    Yields:
        Lists of trimmed lines, the first of which is the start line
    """
    block: list[str] = []
    remaining = 0

    for raw_line in lines:
        line = raw_line.strip()

        if is_block_start(line):
            if block:
                yield block
            block = [line]
            remaining = LOOKAHEAD_LINES
            continue

        if not block:
            continue

        block.append(line)
        remaining -= 1
        if remaining == 0:
            yield block
            block = []

    if block:
        yield block


def extract_external_id(line: str) -> Optional[str]:
    """Return the 6-digit authorization code printed after the time, if any."""
    match = AUTH_CODE_RE.search(line)
    return match.group(1) if match else None


def find_category_label(line: str) -> Optional[str]:
    """Return the first bank category label found in a line."""
    match = CATEGORY_RE.search(line)
    return match.group(0) if match else None


def description_from_main_line(line: str, label: Optional[str]) -> Optional[str]:
    """Strip date, code, category label and amounts from a main line.

    Returns:
        The remaining text when it is longer than two characters, else None
    """
    cleaned = DATETIME_RE.sub("", line, count=1)
    cleaned = DESCRIPTION_CODE_RE.sub(" ", cleaned, count=1)
    if label is not None:
        cleaned = cleaned.replace(label, "")
    cleaned = DESCRIPTION_AMOUNT_RE.sub("", cleaned)
    cleaned = WHITESPACE_RE.sub(" ", cleaned).strip()

    if len(cleaned) > 2:
        return cleaned
    return None


def merchant_name(line: str) -> Optional[str]:
    """Clean a continuation line down to a merchant name.

    Returns:
        The merchant text when it is longer than three characters and not
        just numbers and punctuation, else None
    """
    if NUMERIC_ONLY_RE.match(line):
        return None

    cleaned = CARD_OPERATION_RE.sub("", line)
    cleaned = INLINE_DATE_RE.sub("", cleaned)
    cleaned = TRAILING_COUNTRY_RE.sub("", cleaned.rstrip())
    cleaned = TRAILING_CODE_RE.sub("", cleaned)
    cleaned = LONG_DIGITS_RE.sub("", cleaned)
    cleaned = MONEY_RE.sub("", cleaned)
    cleaned = WHITESPACE_RE.sub(" ", cleaned).strip()

    if len(cleaned) > 3 and not NUMERIC_ONLY_RE.match(cleaned):
        return cleaned
    return None


class StatementTextParser:
    """Parser for the text layer of card statements.

    Instances hold configuration only, so one parser can be shared between
    threads and reused for any number of statements.
    """

    def __init__(
        self,
        amount_policy: AmountPolicy = AmountPolicy.REFERENCE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize statement parser.

        Args:
            amount_policy: Rule for picking the operation amount of a line
            clock: Source of the timestamp used when a date cannot be parsed
        """
        self.amount_policy = amount_policy
        self.clock = clock

    def parse(self, raw_text: str) -> list[ParsedTransaction]:
        """Parse statement text into expense transactions.

        Income operations are recognized but left out of the result.

        Args:
            raw_text: Newline separated text extracted from a statement

        Returns:
            Expense transactions in the order they appear in the text
        """
        return list(self.analyze(raw_text).expenses)

    def analyze(self, raw_text: str) -> ParseSummary:
        """Parse statement text and report every recognized operation.

        Args:
            raw_text: Newline separated text extracted from a statement

        Returns:
            ParseSummary with expenses, incomes and the number of blocks
            that had no amount
        """
        lines = raw_text.split("\n")
        logger.debug("Parsing statement text with %d lines", len(lines))

        expenses: list[ParsedTransaction] = []
        incomes: list[ParsedTransaction] = []
        discarded = 0

        for block in split_blocks(lines):
            transaction = self.parse_block(block)
            if transaction is None:
                discarded += 1
                logger.debug("Block discarded, no amount: %s", block[0])
            elif transaction.is_income:
                incomes.append(transaction)
                logger.debug("Income skipped: %s %s", transaction.amount, transaction.description)
            else:
                expenses.append(transaction)
                logger.debug(
                    "Expense recognized: %s, %s, %s",
                    transaction.amount,
                    transaction.category,
                    transaction.description,
                )

        logger.info(
            "Statement parsed: %d expenses, %d incomes skipped, %d blocks discarded",
            len(expenses),
            len(incomes),
            discarded,
        )
        return ParseSummary(
            expenses=tuple(expenses),
            incomes=tuple(incomes),
            discarded_blocks=discarded,
        )

    def parse_block(self, block: Sequence[str]) -> Optional[ParsedTransaction]:
        """Build one transaction from a block of lines.

        Args:
            block: Start line followed by its lookahead lines

        Returns:
            ParsedTransaction, or None when the start line holds no amount
        """
        main_line = block[0].strip()

        external_id = extract_external_id(main_line)
        occurred_at = self._parse_timestamp(main_line)

        label = find_category_label(main_line)
        category = map_category(label) if label is not None else None

        amounts = extract_amounts(OPERATION_PREFIX_RE.sub("", main_line, count=1))
        if not amounts:
            return None
        amount = abs(self.amount_policy.select(amounts))

        is_income = "+" in main_line

        description = description_from_main_line(main_line, label)
        if description is None:
            for line in block[1:]:
                line = line.strip()
                if not line or CARD_OPERATION_MARKER in line:
                    continue
                description = merchant_name(line)
                if description is not None:
                    break

        if category is None and description is not None:
            category = guess_category(description)
            logger.debug("Category guessed from description %r: %s", description, category)

        if category is None:
            category = OTHER
        if description is None:
            description = label if label is not None else NO_DESCRIPTION

        return ParsedTransaction(
            occurred_at=occurred_at,
            external_id=external_id,
            amount=amount,
            is_income=is_income,
            category=category,
            description=description,
        )

    def _parse_timestamp(self, line: str) -> datetime:
        match = DATETIME_RE.search(line)
        if match:
            try:
                return parse_statement_datetime(f"{match.group(1)} {match.group(2)}")
            except ValueError:
                logger.warning("Invalid operation date %r, using current time", match.group(0))
        return self.clock()
