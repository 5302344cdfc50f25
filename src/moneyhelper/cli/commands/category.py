"""Category management commands."""

import click
from moneyhelper.cli.error_handling import handle_domain_error
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.errors import DomainError
from moneyhelper.utils.date_parser import parse_date


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-categories' to create default categories.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        fixed = " [fixed]" if cat.is_fixed else ""
        click.echo(f"{cat.icon} {cat.name} (ID: {cat.id}){fixed}")


@category_group.command("create")
@click.argument("name")
@click.option("--icon", help="Icon shown next to the category")
@click.option("--fixed", is_flag=True, help="Fixed monthly cost, excluded from forecasts")
@click.pass_context
def create_category(ctx, name: str, icon: str | None, fixed: bool):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(name=name, icon=icon, is_fixed=fixed)
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@category_group.command("fix")
@click.argument("category")
@click.pass_context
def fix_category(ctx, category: str):
    """Mark a category (name or ID) as a fixed cost."""
    _set_fixed(ctx, category, True)


@category_group.command("unfix")
@click.argument("category")
@click.pass_context
def unfix_category(ctx, category: str):
    """Mark a category (name or ID) as a variable cost."""
    _set_fixed(ctx, category, False)


@category_group.command("month")
@click.option(
    "--month",
    "month_str",
    default="this month",
    show_default=True,
    help="Any date within the month (DD.MM.YYYY or relative like 'last month')",
)
@click.option("--top", type=click.IntRange(min=1), help="Show only the N largest categories")
@click.pass_context
def month_summary(ctx, month_str: str, top: int | None):
    """Show spending per category for a month against predicted budgets."""
    service = CategoryService(ctx.obj["db"])

    try:
        day = parse_date(month_str)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
        return

    summary = service.month_summary(day)
    if not summary.categories:
        click.echo(f"No expenses for {summary.month:%m.%Y}.")
        return

    rows = service.top_categories(day, top) if top else summary.categories

    click.echo(f"\nSpending for {summary.month:%m.%Y}:")
    for stats in rows:
        line = f"{stats.icon} {stats.name}: {stats.spent:.2f} ({stats.percentage}%)"
        if stats.budget > 0:
            line += f", budget {stats.budget:.2f}, {stats.budget_fulfillment}% used"
            if stats.over_budget:
                line += f" [over by {stats.difference:.2f}]"
        else:
            line += ", no budget"
        click.echo(line)

    click.echo(f"\nTotal: {summary.total_spent:.2f}")
    if summary.total_budget > 0:
        click.echo(
            f"Budget: {summary.total_budget:.2f}, remaining {summary.remaining_budget:.2f}, "
            f"{summary.budget_fulfillment}% used"
        )
    click.echo(f"Over budget: {summary.over_budget_count} of {len(summary.categories)} categories")


def _set_fixed(ctx, category: str, is_fixed: bool) -> None:
    service = CategoryService(ctx.obj["db"])
    try:
        updated = service.set_fixed(category, is_fixed)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    state = "fixed" if is_fixed else "variable"
    click.echo(f"Category '{updated.name}' is now {state}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
