"""Ingestion adapters that produce CourseContext values."""

from bid_forecaster.data.history import (
    normalize_phase,
    observation_from_row,
    observations_from_rows,
    context_from_course_stats,
    context_from_document,
    JsonHistorySource,
    load_course_context,
)

__all__ = [
    "normalize_phase",
    "observation_from_row",
    "observations_from_rows",
    "context_from_course_stats",
    "context_from_document",
    "JsonHistorySource",
    "load_course_context",
]
