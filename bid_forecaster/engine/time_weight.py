"""
Time Weight Model

Maps a historical term to:
- a recency weight exp(-decay * years_ago)
- an inflation factor (1 + rate) ** years_ago that restates an old clearing
  price in current points

Terms are ordinals: year * 4 + season (Winter=0, Spring=1, Summer=2, Fall=3).
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)

TERMS_PER_YEAR = 4

SEASON_ORDER = {
    "winter": 0,
    "spring": 1,
    "summer": 2,
    "fall": 3,
}

UNPARSED_TERM = 0

_TERM_PATTERN = re.compile(r"(winter|spring|summer|fall)\s+(\d{4})", re.IGNORECASE)


def parse_term(term: str) -> int:
    """
    Parse "Fall 2024" style tokens into a sortable ordinal.

    Returns:
        year * 4 + season, or UNPARSED_TERM (0) when no season+year is found
    """
    match = _TERM_PATTERN.search(term or "")
    if not match:
        return UNPARSED_TERM
    return int(match.group(2)) * TERMS_PER_YEAR + SEASON_ORDER[match.group(1).lower()]


def term_for_date(day: Optional[date] = None) -> int:
    """
    Term ordinal containing the given date (default: today).

    Jan-Mar = Winter, Apr-Jun = Spring, Jul-Aug = Summer, Sep-Dec = Fall.
    """
    day = day or date.today()
    if day.month <= 3:
        season = SEASON_ORDER["winter"]
    elif day.month <= 6:
        season = SEASON_ORDER["spring"]
    elif day.month <= 8:
        season = SEASON_ORDER["summer"]
    else:
        season = SEASON_ORDER["fall"]
    return day.year * TERMS_PER_YEAR + season


@dataclass(frozen=True)
class TermWeight:
    """Weighting applied to one historical observation."""
    term_index: int
    years_ago: float
    decay_weight: float
    inflation_factor: float

    @property
    def is_parsed(self) -> bool:
        return self.term_index != UNPARSED_TERM


class TimeWeightModel:
    """
    Recency and inflation weighting of historical terms.

    Future terms count as current (no negative ages). Terms that cannot be
    parsed are left uninflated and aged like the oldest dated term of their
    series, never younger than max_age_years, so they cannot outweigh any
    dated observation.
    """

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config

    def years_between(
        self,
        term_index: int,
        reference_index: int,
        unparsed_age: Optional[float] = None,
    ) -> float:
        """Age in years of a term relative to the reference term."""
        if term_index == UNPARSED_TERM:
            return self.config.max_age_years if unparsed_age is None else unparsed_age
        return max(0.0, (reference_index - term_index) / TERMS_PER_YEAR)

    def decay_weight(
        self,
        term_index: int,
        reference_index: int,
        unparsed_age: Optional[float] = None,
    ) -> float:
        years = self.years_between(term_index, reference_index, unparsed_age)
        return math.exp(-self.config.time_decay_factor * years)

    def inflation_factor(self, term_index: int, reference_index: int) -> float:
        if term_index == UNPARSED_TERM:
            return 1.0
        years = self.years_between(term_index, reference_index)
        return (1.0 + self.config.inflation_rate) ** years

    def weigh(self, term: str, reference_index: int, unparsed_age: Optional[float] = None) -> TermWeight:
        """
        Weight a raw term token against the reference term.

        Args:
            term: Term token such as "Spring 2023"
            reference_index: Ordinal of the term treated as "now"
            unparsed_age: Age given to an unparsable term (default: max_age_years)

        Returns:
            TermWeight with decay weight and inflation factor
        """
        term_index = parse_term(term)
        if term_index == UNPARSED_TERM:
            logger.debug(f"Unparsable term {term!r}, treating as oldest data")

        return TermWeight(
            term_index=term_index,
            years_ago=self.years_between(term_index, reference_index, unparsed_age),
            decay_weight=self.decay_weight(term_index, reference_index, unparsed_age),
            inflation_factor=self.inflation_factor(term_index, reference_index),
        )

    def weigh_series(self, terms: Sequence[str], reference_index: int) -> List[TermWeight]:
        """Weight every term of one price series, aging unparsable terms as its oldest."""
        ages = [
            self.years_between(index, reference_index)
            for index in map(parse_term, terms)
            if index != UNPARSED_TERM
        ]
        unparsed_age = max([self.config.max_age_years] + ages)
        return [self.weigh(term, reference_index, unparsed_age) for term in terms]

    def reference_index(self, reference_term: Optional[str] = None, today: Optional[date] = None) -> int:
        """
        Resolve the "now" term.

        An explicit, parsable reference term wins; otherwise the term
        containing today's date is used.
        """
        if reference_term:
            index = parse_term(reference_term)
            if index != UNPARSED_TERM:
                return index
            logger.warning(f"Reference term {reference_term!r} not understood, using current date")
        return term_for_date(today)
