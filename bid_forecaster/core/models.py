"""
Shared data models and interfaces for the Course Bid Forecaster.

ALL MODULES IMPORT FROM HERE.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class InvalidInputError(ValueError):
    """Raised when a caller hands the engine malformed data."""


# =============================================================================
# ENUMS
# =============================================================================

class Phase(Enum):
    """Bidding phase within a term."""
    PHASE_1 = "1"
    PHASE_2 = "2"
    PHASE_3 = "3"
    PHASE_4 = "4"     # Pay What You Bid / Add-Drop

    @property
    def is_direct(self) -> bool:
        """True for the phases that normally carry their own history."""
        return self in (Phase.PHASE_1, Phase.PHASE_2)

    @property
    def label(self) -> str:
        return "PWYB" if self is Phase.PHASE_4 else f"Phase {self.value}"

    @classmethod
    def from_label(cls, label) -> "Phase":
        """
        Map a raw phase label onto a Phase.

        Accepts "1".."4", "Phase 2", "Round 3", "PWYB", "Pay What You Bid"
        and "Add/Drop" (case-insensitive).

        Raises:
            InvalidInputError: If the label names no known phase
        """
        if isinstance(label, Phase):
            return label

        text = str(label).strip().lower()
        for phase in cls:
            if text == phase.value:
                return phase
        if "pwyb" in text or "pay" in text or "add/drop" in text:
            return cls.PHASE_4
        for phase in cls:
            if f"phase {phase.value}" in text or f"round {phase.value}" in text:
                return phase
        raise InvalidInputError(f"Unknown phase label: {label!r}")


class Confidence(Enum):
    """How much data backs a forecast."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INSUFFICIENT = "insufficient"

    def degraded(self) -> "Confidence":
        """One tier lower, never dropping a backed estimate to insufficient."""
        if self is Confidence.HIGH:
            return Confidence.MEDIUM
        if self is Confidence.INSUFFICIENT:
            return Confidence.INSUFFICIENT
        return Confidence.LOW


class Trend(Enum):
    """Direction of clearing prices over time."""
    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"
    UNKNOWN = "unknown"


class DemandLevel(Enum):
    """Coarse bucket of demand pressure."""
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"

    @classmethod
    def from_pressure(cls, pressure: float) -> "DemandLevel":
        if pressure > 0.8:
            return cls.VERY_HIGH
        if pressure > 0.6:
            return cls.HIGH
        if pressure > 0.4:
            return cls.MODERATE
        return cls.LOW


# =============================================================================
# DATA CLASSES - INPUT
# =============================================================================

def _check_non_negative(name: str, value: float) -> None:
    if value is None or math.isnan(value) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative number, got {value!r}")


@dataclass(frozen=True)
class HistoricalObservation:
    """
    One clearing event for a course in a given term and phase.

    Zero seats or bids mean "not reported", not "none".
    """
    term: str                      # e.g., "Fall 2024"
    phase: Phase
    clearing_price: float          # Points needed to win a seat
    seats_available: int = 0
    bids_placed: int = 0

    def __post_init__(self):
        object.__setattr__(self, "phase", Phase.from_label(self.phase))
        _check_non_negative("clearing_price", self.clearing_price)
        _check_non_negative("seats_available", self.seats_available)
        _check_non_negative("bids_placed", self.bids_placed)

    @property
    def demand_ratio(self) -> Optional[float]:
        """Bids per seat, or None when either side is unreported."""
        if self.seats_available > 0 and self.bids_placed > 0:
            return self.bids_placed / self.seats_available
        return None


@dataclass(frozen=True)
class ProfessorSignal:
    """Instructor rating on a 1-6 scale (0 means unrated)."""
    rating: float
    difficulty: Optional[float] = None
    would_take_again_pct: Optional[float] = None

    def __post_init__(self):
        if self.rating is None or math.isnan(self.rating):
            raise InvalidInputError("rating must be a number")
        if self.rating != 0 and not 1.0 <= self.rating <= 6.0:
            raise InvalidInputError(f"rating must be within 1-6, got {self.rating}")

    @property
    def is_rated(self) -> bool:
        return self.rating > 0


@dataclass(frozen=True)
class CourseContext:
    """Everything the engine needs to forecast one course/professor pair."""
    course_id: str
    professor: str
    observations: Tuple[HistoricalObservation, ...] = ()
    course_name: str = ""
    professor_signal: Optional[ProfessorSignal] = None
    meeting_time: Optional[str] = None     # e.g., "Tue 8:30AM - 11:30AM"
    campus: Optional[str] = None           # e.g., "Evanston", "Chicago"

    def __post_init__(self):
        # Accept any iterable but store an immutable tuple
        observations = tuple(self.observations)
        for obs in observations:
            if not isinstance(obs, HistoricalObservation):
                raise InvalidInputError(f"Expected HistoricalObservation, got {type(obs).__name__}")
        object.__setattr__(self, "observations", observations)

    def for_phase(self, phase: Phase) -> List[HistoricalObservation]:
        return [obs for obs in self.observations if obs.phase is phase]

    @property
    def rating(self) -> Optional[float]:
        return self.professor_signal.rating if self.professor_signal else None


# =============================================================================
# DATA CLASSES - OUTPUT
# =============================================================================

@dataclass(frozen=True)
class ForecastFactor:
    """Audit record of one contribution to a forecast."""
    name: str
    impact: float                  # Price points; positive raises the forecast
    description: str


@dataclass(frozen=True)
class ProbabilityPoint:
    """One sample of the bid -> win probability curve."""
    bid: int
    probability: int               # 0-100


@dataclass
class ForecastResult:
    """
    Forecast for a single phase.

    All monetary values are whole points >= 0.
    """
    phase: Phase
    expected_price: int
    safe_bid: int                  # ~85% win probability
    aggressive_bid: int            # ~50-60% win probability
    minimum_bid: int               # ~25-30% win probability
    confidence: Confidence
    data_points: int
    trend: Trend = Trend.UNKNOWN
    trend_strength: float = 0.0    # 0-1
    trend_significant: bool = False
    trend_p_value: float = 1.0
    volatility: float = 0.0        # Coefficient of variation
    demand_pressure: float = 0.5   # 0-1
    uncertainty_margin: float = 0.0
    factors: List[ForecastFactor] = field(default_factory=list)
    probability_curve: List[ProbabilityPoint] = field(default_factory=list)
    source_phase: Optional[Phase] = None   # Set when estimated from another phase

    @property
    def is_derived(self) -> bool:
        return self.source_phase is not None

    @property
    def has_data(self) -> bool:
        return self.confidence is not Confidence.INSUFFICIENT and self.expected_price > 0


@dataclass
class CompleteForecast:
    """Forecasts for all four phases plus strategy advice."""
    course_id: str
    professor: str
    forecasts: Dict[Phase, ForecastResult]
    overall_recommendation: str
    strategy_notes: List[str] = field(default_factory=list)

    def __getitem__(self, phase: Phase) -> ForecastResult:
        return self.forecasts[phase]

    @property
    def phase1(self) -> ForecastResult:
        return self.forecasts[Phase.PHASE_1]

    @property
    def phase2(self) -> ForecastResult:
        return self.forecasts[Phase.PHASE_2]

    @property
    def phase3(self) -> ForecastResult:
        return self.forecasts[Phase.PHASE_3]

    @property
    def phase4(self) -> ForecastResult:
        return self.forecasts[Phase.PHASE_4]


@dataclass
class ForecastSummary:
    """Condensed view of a CompleteForecast for list displays."""
    safe_bids: Dict[Phase, int]
    confidence: Confidence
    trend: Trend
    demand_level: DemandLevel
    strategy_notes: List[str] = field(default_factory=list)
    phase1_curve: List[ProbabilityPoint] = field(default_factory=list)
    phase2_curve: List[ProbabilityPoint] = field(default_factory=list)


# =============================================================================
# ABSTRACT INTERFACES
# =============================================================================

class HistorySource(ABC):
    """Supplies validated course contexts (the ingestion side)."""

    @abstractmethod
    def load_context(self) -> CourseContext:
        """Return the course context to forecast."""
        pass


class ForecastEngine(ABC):
    """Turns a course context into a complete forecast."""

    @abstractmethod
    def forecast(self, context: CourseContext, reference_term: Optional[str] = None) -> CompleteForecast:
        """
        Forecast every phase for the given course.

        Args:
            context: Course history and covariates
            reference_term: Term treated as "now" (default: derived from today)

        Returns:
            CompleteForecast with one result per phase
        """
        pass
