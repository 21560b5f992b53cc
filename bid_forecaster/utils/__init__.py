"""Utility modules for the Course Bid Forecaster."""

from bid_forecaster.utils.logging import setup_logging

__all__ = ["setup_logging"]
