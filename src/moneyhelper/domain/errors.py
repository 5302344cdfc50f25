"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or file does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ExtractionError(DomainError):
    """Text could not be obtained from a statement document."""


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_name_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def duplicate_category_name(name: str) -> str:
    """Return message for a category name that is already taken."""
    return f"Category with name '{name}' already exists"


def statement_not_found(path: str) -> str:
    """Return message for a missing statement file."""
    return f"Statement file not found: {path}"


def statement_unreadable(path: str, reason: object) -> str:
    """Return message when text cannot be extracted from a statement."""
    return f"Could not extract text from '{path}': {reason}"
