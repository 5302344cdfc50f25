"""Initialize default categories."""

import click
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.errors import DomainError
from moneyhelper.domain.vocabulary import CAFES, GROCERIES, OTHER, SUBSCRIPTIONS, TRANSFERS, TRANSPORT


# Default categories as (name, is_fixed)
INITIAL_CATEGORIES = [
    (GROCERIES, False),
    (TRANSPORT, False),
    (CAFES, False),
    (TRANSFERS, False),
    (OTHER, False),
    (SUBSCRIPTIONS, True),
    ("Аренда", True),
    ("Коммунальные услуги", True),
]


@click.command("init-categories")
@click.pass_context
def init_categories(ctx):
    """Initialize database with default categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    click.echo("Creating default categories...")

    created = 0
    existing = 0
    errors = 0

    for category_name, is_fixed in INITIAL_CATEGORIES:
        if service.get_category_by_name(category_name) is not None:
            existing += 1
            continue
        try:
            service.create_category(name=category_name, is_fixed=is_fixed)
            created += 1
        except DomainError as e:
            click.echo(f"Warning: Could not create category '{category_name}': {e}", err=True)
            errors += 1

    message = f"Successfully created {created} categories."
    if existing:
        message += f" {existing} already existed."
    if errors:
        message = f"Created {created} categories with {errors} errors."
    click.echo(message)


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
