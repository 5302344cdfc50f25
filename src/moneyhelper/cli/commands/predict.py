"""Expense forecasting commands."""

import click
from moneyhelper.cli.error_handling import handle_domain_error
from moneyhelper.domain.category import CategoryService
from moneyhelper.domain.entities import CategoryForecast
from moneyhelper.domain.errors import DomainError
from moneyhelper.domain.prediction import PredictionService


def format_forecast(forecast: CategoryForecast) -> str:
    """Format one forecast row for display."""
    if forecast.valid:
        return (
            f"{forecast.category_name}: {forecast.result.predicted_next:.2f} "
            f"(trend {forecast.result.slope:+.2f}/month, {forecast.months} months)"
        )
    return f"{forecast.category_name}: {forecast.result.failure_reason}"


@click.group()
def predict_group():
    """Forecast next month's spending."""
    pass


@predict_group.command("run")
@click.pass_context
def run_predictions(ctx):
    """Recompute and store predictions for all variable categories."""
    db = ctx.obj["db"]
    service = PredictionService(db)

    forecasts = service.forecast_all_categories()
    if not forecasts:
        click.echo("No variable categories found.")
        return

    click.echo("\nPredictions for next month:")
    for forecast in forecasts:
        click.echo(f"  {format_forecast(forecast)}")

    stored = sum(1 for forecast in forecasts if forecast.valid)
    click.echo(f"\nStored {stored} of {len(forecasts)} predictions.")


@predict_group.command("list")
@click.pass_context
def list_predictions(ctx):
    """Show stored predictions."""
    db = ctx.obj["db"]
    service = PredictionService(db)
    category_service = CategoryService(db)

    predictions = service.get_all_predictions()
    if not predictions:
        click.echo("No predictions stored. Run 'predict run' first.")
        return

    total = 0.0
    for category_id, amount in predictions.items():
        cat = category_service.get_category(category_id)
        name = cat.name if cat else f"Category {category_id}"
        click.echo(f"  {name}: {amount:.2f}")
        total += amount
    click.echo(f"\nTotal: {total:.2f}")


@predict_group.command("category")
@click.argument("category")
@click.pass_context
def predict_category(ctx, category: str):
    """Forecast one category (by name or ID) without storing it."""
    db = ctx.obj["db"]
    service = PredictionService(db)
    category_service = CategoryService(db)

    try:
        resolved = category_service.resolve(category)
        forecast = service.forecast_category(resolved.id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(format_forecast(forecast))
    stored = service.get_prediction(resolved.id)
    if stored is not None:
        click.echo(f"Stored prediction: {stored:.2f}")


def register_commands(cli):
    """Register predict commands with main CLI."""
    cli.add_command(predict_group, name="predict")
