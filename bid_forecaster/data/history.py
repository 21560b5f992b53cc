"""
Course history ingestion.

Converts already-tabulated records into a validated CourseContext:
- loose bid rows (snake_case or camelCase keys)
- legacy course stats with per-term priceR1..priceR4 columns
- a JSON document on disk (used by the CLI)

Header normalisation of raw CSV exports happens upstream of this module.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from bid_forecaster.core import (
    CourseContext,
    HistoricalObservation,
    HistorySource,
    InvalidInputError,
    Phase,
    ProfessorSignal,
)

logger = logging.getLogger(__name__)

# Legacy history columns by phase
LEGACY_PRICE_COLUMNS = {
    "priceR1": Phase.PHASE_1,
    "priceR2": Phase.PHASE_2,
    "priceR3": Phase.PHASE_3,
    "priceR4": Phase.PHASE_4,
}


def normalize_phase(label: Any) -> Optional[Phase]:
    """
    Map a raw phase label to a Phase.

    Returns:
        The Phase, or None for labels such as "Year-Long" or "Unknown"
    """
    try:
        return Phase.from_label(label)
    except InvalidInputError:
        logger.debug(f"Skipping unrecognised phase label {label!r}")
        return None


def _first(row: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return default


def observation_from_row(row: Mapping[str, Any]) -> Optional[HistoricalObservation]:
    """
    Build an observation from a loose record.

    Returns:
        HistoricalObservation, or None when the phase is not a bidding phase

    Raises:
        InvalidInputError: On negative or non-numeric values
    """
    phase = normalize_phase(_first(row, "phase", "Phase", default="Unknown"))
    if phase is None:
        return None

    try:
        price = float(_first(row, "clearing_price", "clearingPrice", "price", default=0))
        seats = int(_first(row, "seats_available", "spotsAvailable", "seats", default=0))
        bids = int(_first(row, "bids_placed", "bidsPlaced", "bids", default=0))
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Non-numeric value in record {dict(row)!r}: {e}") from e

    return HistoricalObservation(
        term=str(_first(row, "term", "Term", default="Unknown")),
        phase=phase,
        clearing_price=price,
        seats_available=seats,
        bids_placed=bids,
    )


def observations_from_rows(rows: Iterable[Mapping[str, Any]]) -> List[HistoricalObservation]:
    """Convert loose records, dropping those without a bidding phase."""
    observations = []
    for row in rows:
        obs = observation_from_row(row)
        if obs is not None:
            observations.append(obs)
    return observations


def _to_float(value: Any, field: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Non-numeric {field}: {value!r}") from e


def _professor_signal(rating: Any) -> Optional[ProfessorSignal]:
    if rating in (None, "", 0):
        return None
    return ProfessorSignal(rating=_to_float(rating, "professor rating"))


def context_from_course_stats(
    course_stats: Mapping[str, Any],
    additional_bids: Optional[Iterable[Mapping[str, Any]]] = None,
) -> CourseContext:
    """
    Convert legacy course stats into a CourseContext.

    Each history entry contributes one observation per positive priceR1..R4.
    Additional bid rows fill in seats/bids for a matching term+phase or are
    appended as new observations.

    Args:
        course_stats: Dict with courseId, courseName, professor, history,
            and optional professorRating, meetingPattern, campus
        additional_bids: Loose bid rows with demand data

    Returns:
        CourseContext ready for forecasting

    Raises:
        InvalidInputError: On non-numeric prices or rating
    """
    observations: List[HistoricalObservation] = []
    for entry in course_stats.get("history", []):
        for column, phase in LEGACY_PRICE_COLUMNS.items():
            price = _to_float(entry.get(column) or 0, column)
            if price > 0:
                observations.append(HistoricalObservation(
                    term=entry.get("term", "Unknown"),
                    phase=phase,
                    clearing_price=price,
                ))

    for row in additional_bids or []:
        extra = observation_from_row(row)
        if extra is None:
            continue
        for i, existing in enumerate(observations):
            if existing.term == extra.term and existing.phase is extra.phase:
                observations[i] = replace(
                    existing,
                    seats_available=extra.seats_available,
                    bids_placed=extra.bids_placed,
                )
                break
        else:
            observations.append(extra)

    return CourseContext(
        course_id=course_stats.get("courseId", ""),
        professor=course_stats.get("professor", ""),
        course_name=course_stats.get("courseName", ""),
        observations=tuple(observations),
        professor_signal=_professor_signal(course_stats.get("professorRating")),
        meeting_time=course_stats.get("meetingPattern"),
        campus=course_stats.get("campus"),
    )


def context_from_document(document: Mapping[str, Any]) -> CourseContext:
    """
    Build a CourseContext from a JSON-style document.

    Documents with a "history" list are treated as legacy course stats;
    otherwise an "observations" list of bid rows is expected.
    """
    if "history" in document:
        return context_from_course_stats(document, document.get("bids"))

    return CourseContext(
        course_id=_first(document, "course_id", "courseId", default=""),
        professor=_first(document, "professor", default=""),
        course_name=_first(document, "course_name", "courseName", default=""),
        observations=tuple(observations_from_rows(document.get("observations", []))),
        professor_signal=_professor_signal(_first(document, "rating", "professorRating")),
        meeting_time=_first(document, "meeting_time", "meetingTime", "meetingPattern"),
        campus=document.get("campus"),
    )


class JsonHistorySource(HistorySource):
    """Reads a course context from a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_context(self) -> CourseContext:
        """
        Load and validate the course context.

        Raises:
            InvalidInputError: If the file is not a JSON object or holds bad values
        """
        with self.path.open(encoding="utf-8") as f:
            try:
                document: Dict[str, Any] = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidInputError(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise InvalidInputError(f"{self.path} must contain a JSON object")

        context = context_from_document(document)
        logger.info(f"Loaded {len(context.observations)} observations from {self.path}")
        return context


def load_course_context(path: Union[str, Path]) -> CourseContext:
    """Convenience function to read a course context from a JSON file."""
    return JsonHistorySource(path).load_context()
