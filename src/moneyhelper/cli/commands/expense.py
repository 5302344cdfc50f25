"""Expense commands."""

from datetime import datetime, time

import click
from moneyhelper.cli.error_handling import handle_domain_error
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.errors import DomainError
from moneyhelper.domain.expense import ExpenseService
from moneyhelper.utils.amount_parser import parse_amount
from moneyhelper.utils.date_parser import month_start, next_month, parse_date


@click.group()
def expense_group():
    """Record and view expenses."""
    pass


@expense_group.command("add")
@click.argument("category")
@click.argument("amount")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Expense date (DD.MM.YYYY or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Merchant or purpose")
@click.pass_context
def add_expense(ctx, category: str, amount: str, date_str: str, description: str | None):
    """Record an expense manually.

    Examples:
        moneyhelper expense add Продукты 349,97 --date 15.01.2024
        moneyhelper expense add 3 1200 --description "Такси"
    """
    db = ctx.obj["db"]
    service = ExpenseService(db)
    category_service = CategoryService(db)

    try:
        expense_date = parse_date(date_str)
        value = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    try:
        cat = category_service.resolve(category)
        expense_id = service.add_expense(
            category_id=cat.id,
            amount=value,
            occurred_at=datetime.combine(expense_date, time()),
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added expense {expense_id}: {value} in '{cat.name}' on {expense_date:%d.%m.%Y}")


@expense_group.command("list")
@click.option("--category", help="Category name or ID")
@click.option("--month", "month_str", help="Any date within the month to show (e.g. 'this month')")
@click.pass_context
def list_expenses(ctx, category: str | None, month_str: str | None):
    """List expenses, optionally for one category or month."""
    db = ctx.obj["db"]
    service = ExpenseService(db)
    category_service = CategoryService(db)

    start = end = None
    if month_str:
        try:
            day = parse_date(month_str)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
            return
        start = datetime.combine(month_start(day), time())
        end = datetime.combine(next_month(day), time())

    category_id = None
    if category:
        try:
            category_id = category_service.resolve(category).id
        except DomainError as e:
            handle_domain_error(ctx, e)
            return

    expenses = service.list_expenses(category_id=category_id, start=start, end=end)
    if not expenses:
        click.echo("No expenses found.")
        return

    names = {cat.id: cat.name for cat in category_service.list_categories()}
    total = 0
    for exp in expenses:
        click.echo(
            f"{exp.occurred_at:%d.%m.%Y %H:%M}  {exp.amount:>10}  "
            f"{names.get(exp.category_id, '?'):<20} {exp.description or ''}"
        )
        total += exp.amount
    click.echo(f"\nTotal: {total}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
