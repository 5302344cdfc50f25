"""Statement import command."""

import click
from moneyhelper.cli.error_handling import handle_domain_error
from moneyhelper.domain.errors import DomainError
from moneyhelper.domain.statement_import import StatementImportService
from moneyhelper.domain.statement_parser import AmountPolicy, StatementTextParser


def print_preview(summary) -> None:
    """Print the expenses a statement would import."""
    for txn in summary.expenses:
        code = f" [{txn.external_id}]" if txn.external_id else ""
        click.echo(
            f"  {txn.occurred_at:%d.%m.%Y %H:%M}{code}  {txn.amount:>10}  "
            f"{txn.category:<20} {txn.description}"
        )
    click.echo(f"\nExpenses: {len(summary.expenses)}")
    click.echo(f"Incomes skipped: {len(summary.incomes)}")
    if summary.discarded_blocks:
        click.echo(f"Unrecognized operations: {summary.discarded_blocks}")


@click.command("import")
@click.argument("pdf_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--first-amount",
    is_flag=True,
    help="Use the first amount of each operation line instead of the second one",
)
@click.option("--dry-run", is_flag=True, help="Show parsed expenses without saving them")
@click.pass_context
def import_statement(ctx, pdf_file: str, first_amount: bool, dry_run: bool):
    """Import expenses from a bank PDF statement."""
    db = ctx.obj["db"]
    policy = AmountPolicy.FIRST if first_amount else AmountPolicy.REFERENCE
    service = StatementImportService(db, parser=StatementTextParser(amount_policy=policy))

    try:
        if dry_run:
            print_preview(service.preview_statement(pdf_file))
            return

        result = service.import_statement(pdf_file)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"\nImport complete:")
    click.echo(f"  Operations found: {result.total}")
    click.echo(f"  Imported: {result.imported} expenses")
    click.echo(f"  Skipped: {result.duplicates} duplicates")
    click.echo(f"  Skipped: {result.skipped_income} incomes")
    if result.created_categories:
        click.echo(f"  New categories: {', '.join(result.created_categories)}")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
