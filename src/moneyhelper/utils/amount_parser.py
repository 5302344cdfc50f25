"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

# Optionally signed integer part, "," or "." separator, exactly two fraction digits
AMOUNT_TOKEN_RE = re.compile(r"[+-]?\d+[,.]\d{2}")
WHITESPACE_RE = re.compile(r"\s+")

# Matches at or above this magnitude are treated as account numbers, not money
MAX_PLAUSIBLE_AMOUNT = 10_000_000


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "123,45"
    - "1 234,56" (space as thousands separator)
    - "-123.45"
    - "350 ₽" / "350 руб."

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency markers
    cleaned = re.sub(r"(₽|руб\.?|RUB)", "", amount_str.strip(), flags=re.IGNORECASE)

    # Remove whitespace, including non-breaking spaces used as group separators
    cleaned = WHITESPACE_RE.sub("", cleaned)

    # A single comma is the decimal separator
    if cleaned.count(",") == 1 and "." not in cleaned:
        cleaned = cleaned.replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")

    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not value.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return value


def round_amount(token: str) -> int:
    """Round a statement amount token to the nearest integer, halves up.

    Args:
        token: Amount such as "349,97", "+109,00" or "1234.56"

    Returns:
        Rounded signed integer

    Raises:
        ValueError: If the token is not a number
    """
    try:
        value = Decimal(token.replace(",", "."))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{token}': {e}")
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def extract_amounts(text: str) -> list[int]:
    """Extract every money-shaped token from a statement line.

    All whitespace is removed first so that space-grouped thousands
    ("36 975,65") collapse into one token. A token counts only when it is
    preceded by a non-digit character, by the start of the text, or directly
    by the previous amount, since adjacent columns touch once spaces are gone.

    Args:
        text: Line fragment holding amount columns

    Returns:
        Rounded signed amounts in order of appearance, excluding zeros and
        implausibly large values
    """
    compact = WHITESPACE_RE.sub("", text)
    amounts: list[int] = []
    pos = 0
    previous_end = -1

    while True:
        match = AMOUNT_TOKEN_RE.search(compact, pos)
        if match is None:
            break

        start = match.start()
        if start > 0 and start != previous_end and compact[start - 1].isdigit():
            pos = start + 1
            continue

        previous_end = match.end()
        pos = match.end()

        amount = round_amount(match.group())
        if amount != 0 and abs(amount) < MAX_PLAUSIBLE_AMOUNT:
            amounts.append(amount)

    return amounts
