"""Command-line interface for the Course Bid Forecaster."""

import click

from bid_forecaster import __version__
from bid_forecaster.core import InvalidInputError, Phase
from bid_forecaster.data import load_course_context
from bid_forecaster.engine import (
    BidForecaster,
    bid_for_target_probability,
    probability_for_bid,
)
from bid_forecaster.utils import setup_logging

PHASE_CHOICES = click.Choice([phase.value for phase in Phase])


def _forecast_file(path: str, reference_term: str):
    context = load_course_context(path)
    return BidForecaster().forecast(context, reference_term=reference_term)


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Course Bid Forecaster - clearing price forecasts for course bidding."""
    setup_logging(level="DEBUG" if debug else "WARNING")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--term", "-t", default=None, help="Reference term treated as now (e.g. 'Fall 2025')")
@click.option("--curve", is_flag=True, help="Show the phase 1 win probability curve")
def forecast(path: str, term: str, curve: bool):
    """Forecast every bidding phase for the course in PATH."""
    from bid_forecaster.cli.display import ForecastView

    try:
        result = _forecast_file(path, term)
    except InvalidInputError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    ForecastView().render(result, show_curve=curve)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--bid", "-b", required=True, type=float, help="Bid amount in points")
@click.option("--phase", "-p", default="1", type=PHASE_CHOICES, help="Bidding phase")
@click.option("--term", "-t", default=None, help="Reference term treated as now")
def probability(path: str, bid: float, phase: str, term: str):
    """Estimate the chance that BID wins in a phase."""
    try:
        result = _forecast_file(path, term)
    except InvalidInputError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    phase_result = result[Phase(phase)]
    if not phase_result.probability_curve:
        click.echo(f"No probability curve for {phase_result.phase.label}", err=True)
        raise SystemExit(1)

    chance = probability_for_bid(bid, phase_result.probability_curve)
    click.echo(f"{phase_result.phase.label}: a bid of {bid:g} points wins ~{chance}% of the time")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--probability", "-P", "target", required=True, type=click.FloatRange(0, 100),
              help="Target win probability (0-100)")
@click.option("--phase", "-p", default="1", type=PHASE_CHOICES, help="Bidding phase")
@click.option("--term", "-t", default=None, help="Reference term treated as now")
def target(path: str, target: float, phase: str, term: str):
    """Find the bid needed for a target win probability."""
    try:
        result = _forecast_file(path, term)
    except InvalidInputError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    phase_result = result[Phase(phase)]
    if not phase_result.probability_curve:
        click.echo(f"No probability curve for {phase_result.phase.label}", err=True)
        raise SystemExit(1)

    bid = bid_for_target_probability(target, phase_result.probability_curve)
    click.echo(f"{phase_result.phase.label}: bid {bid} points for ~{target:g}% win probability")


if __name__ == "__main__":
    main()
