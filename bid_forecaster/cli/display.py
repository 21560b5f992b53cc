"""
Terminal rendering of forecasts.

Uses Rich tables and panels.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from bid_forecaster.core import CompleteForecast, Confidence, ForecastResult, Trend

CONFIDENCE_STYLES = {
    Confidence.HIGH: "bold green",
    Confidence.MEDIUM: "yellow",
    Confidence.LOW: "red",
    Confidence.INSUFFICIENT: "dim",
}

TREND_ARROWS = {
    Trend.RISING: "[red]↑ rising[/red]",
    Trend.FALLING: "[green]↓ falling[/green]",
    Trend.STABLE: "→ stable",
    Trend.UNKNOWN: "[dim]? unknown[/dim]",
}


class ForecastView:
    """Renders a CompleteForecast to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def phase_table(self, forecast: CompleteForecast) -> Table:
        """Bid tiers and signals for every phase."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Phase")
        table.add_column("Expected", justify="right")
        table.add_column("Safe", justify="right")
        table.add_column("Aggressive", justify="right")
        table.add_column("Minimum", justify="right")
        table.add_column("Confidence")
        table.add_column("Trend")
        table.add_column("Source")

        for result in forecast.forecasts.values():
            source = f"from {result.source_phase.label}" if result.is_derived else "history"
            if not result.has_data:
                source = "-"
            table.add_row(
                result.phase.label,
                f"{result.expected_price}",
                f"[b]{result.safe_bid}[/b]",
                f"{result.aggressive_bid}",
                f"{result.minimum_bid}",
                Text(result.confidence.value, style=CONFIDENCE_STYLES[result.confidence]),
                TREND_ARROWS[result.trend],
                source,
            )
        return table

    def factor_table(self, result: ForecastResult) -> Table:
        """Audit trail of adjustments for one phase."""
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Factor")
        table.add_column("Impact", justify="right")
        table.add_column("Description")
        for factor in result.factors:
            table.add_row(factor.name, f"{factor.impact:+.1f}", factor.description)
        return table

    def curve_table(self, result: ForecastResult, every: int = 5) -> Table:
        """Sampled rows of the win probability curve."""
        table = Table(box=box.SIMPLE)
        table.add_column("Bid", justify="right")
        table.add_column("P(win)", justify="right")
        for point in result.probability_curve[::every]:
            table.add_row(str(point.bid), f"{point.probability}%")
        return table

    def render(self, forecast: CompleteForecast, show_curve: bool = False) -> None:
        title = f"{forecast.course_id or 'Course'} - {forecast.professor or 'Unknown professor'}"
        self.console.print(Panel(self.phase_table(forecast), title=title, border_style="cyan"))

        phase1 = forecast.phase1
        if phase1.factors:
            self.console.print(Panel(self.factor_table(phase1), title="Phase 1 Factors", border_style="blue"))

        if show_curve and phase1.probability_curve:
            self.console.print(Panel(self.curve_table(phase1), title="Phase 1 Win Probability", border_style="magenta"))

        self.console.print(Panel(forecast.overall_recommendation, title="Recommendation", border_style="green"))
        for note in forecast.strategy_notes:
            self.console.print(f"  • {note}")
