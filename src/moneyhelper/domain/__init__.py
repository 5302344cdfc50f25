"""Domain layer for moneyhelper application."""

# Services import the database layer, which imports domain entities, so
# they are resolved lazily to keep ``moneyhelper.domain.entities`` importable
# on its own.
_SERVICES = {
    "CategoryService": "moneyhelper.domain.category",
    "ExpenseService": "moneyhelper.domain.expense",
    "PredictionService": "moneyhelper.domain.prediction",
    "StatementImportService": "moneyhelper.domain.statement_import",
    "StatementTextParser": "moneyhelper.domain.statement_parser",
    "ExpenseForecaster": "moneyhelper.domain.forecaster",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
