"""Plain-text extraction from PDF statements."""

import logging
from pathlib import Path

import pdfplumber

from moneyhelper.domain.errors import (
    ExtractionError,
    statement_not_found,
    statement_unreadable,
)

logger = logging.getLogger(__name__)


def extract_pdf_text(pdf_path: str | Path) -> str:
    """Extract the text layer of a PDF document.

    Pages are joined with newlines so that the result is line oriented.

    Args:
        pdf_path: Path to the PDF file

    Returns:
        Extracted text, possibly empty for scanned documents

    Raises:
        ExtractionError: If the file is missing or cannot be opened or decoded
    """
    path = Path(pdf_path)
    if not path.is_file():
        raise ExtractionError(statement_not_found(str(path)))

    try:
        with pdfplumber.open(path) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.error("Failed to read PDF %s: %s", path, e)
        raise ExtractionError(statement_unreadable(str(path), e)) from e

    text = "\n".join(pages)
    logger.info("Extracted %d characters from %d pages of %s", len(text), len(pages), path.name)
    if text:
        logger.debug("Statement head:\n%s", text[:2000])
    return text
