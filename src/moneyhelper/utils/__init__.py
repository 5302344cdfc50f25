"""Utility functions for moneyhelper."""

from moneyhelper.utils.date_parser import parse_date, parse_statement_datetime
from moneyhelper.utils.amount_parser import parse_amount, extract_amounts, round_amount

__all__ = [
    "parse_date",
    "parse_statement_datetime",
    "parse_amount",
    "extract_amounts",
    "round_amount",
]
