"""Command-line interface."""

from bid_forecaster.cli.commands import main

__all__ = ["main"]
