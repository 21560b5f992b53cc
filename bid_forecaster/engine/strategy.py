"""Strategy notes and the overall bidding recommendation."""

from typing import Dict, List, Optional

from bid_forecaster.config import ForecastConfig, DEFAULT_CONFIG
from bid_forecaster.core import Confidence, ForecastResult, Phase, Trend


class StrategyAdvisor:
    """Writes human-readable advice from the four phase forecasts."""

    def __init__(self, config: ForecastConfig = DEFAULT_CONFIG):
        self.config = config.strategy

    def notes(self, forecasts: Dict[Phase, ForecastResult], rating: Optional[float] = None) -> List[str]:
        cfg = self.config
        p1 = forecasts[Phase.PHASE_1]
        p2 = forecasts[Phase.PHASE_2]
        p3 = forecasts[Phase.PHASE_3]
        p4 = forecasts[Phase.PHASE_4]
        notes = []

        if p1.demand_pressure > cfg.high_demand:
            notes.append("HIGH DEMAND: This course consistently has more bidders than seats. Consider using safe bid.")

        if p1.trend is Trend.RISING and p1.trend_strength > cfg.strong_trend:
            notes.append("RISING PRICES: Strong upward trend detected. Historical prices may underestimate future clearing.")
        if p1.trend is Trend.FALLING and p1.trend_strength > cfg.strong_trend:
            notes.append("FALLING PRICES: Downward trend detected. You may be able to bid more aggressively.")

        if p2.expected_price > p1.expected_price * cfg.phase2_premium:
            notes.append("Phase 2 significantly higher than Phase 1. Strongly recommend bidding in Phase 1.")

        if p3.expected_price < p1.expected_price * cfg.phase3_discount and p3.confidence is not Confidence.INSUFFICIENT:
            notes.append("Phase 3 (combined pool) offers potential savings. Consider waiting if flexible on section.")

        if p4.expected_price < p1.expected_price * cfg.phase4_discount and p4.confidence is not Confidence.INSUFFICIENT:
            notes.append("PWYB phase could save significant points, but seat availability is unpredictable.")

        if rating and rating >= cfg.star_rating:
            notes.append(f"STAR PROFESSOR: {rating:.1f}/6.0 rating. Expect competitive bidding.")

        if p1.volatility > cfg.high_volatility:
            notes.append("HIGH VOLATILITY: Prices vary significantly term-to-term. Consider padding your bid.")

        if p1.confidence in (Confidence.LOW, Confidence.INSUFFICIENT):
            notes.append("LIMITED DATA: Forecast based on limited history. Use with caution.")

        return notes

    def recommendation(self, forecasts: Dict[Phase, ForecastResult]) -> str:
        """Single-sentence recommendation of which phase and bid to use."""
        p1 = forecasts[Phase.PHASE_1]
        p3 = forecasts[Phase.PHASE_3]
        p4 = forecasts[Phase.PHASE_4]

        viable = [f for f in forecasts.values() if f.has_data]
        if not viable:
            return "Insufficient data for recommendation. Start with the median clearing price from similar courses."

        # Ties keep the earlier phase
        cheapest = min(viable, key=lambda f: f.expected_price)

        if p1.demand_pressure > self.config.high_demand:
            return (
                f"High demand course. Recommend Phase 1 with safe bid of {p1.safe_bid} points. "
                "Later phases are risky due to seat scarcity."
            )

        if cheapest.phase is Phase.PHASE_4 and p4.confidence is not Confidence.LOW:
            return (
                f"Value opportunity in PWYB at ~{p4.expected_price} points, but availability uncertain. "
                f"Safe option: Phase 1 at {p1.safe_bid} points."
            )

        if cheapest.phase is Phase.PHASE_3 and p3.confidence is not Confidence.LOW:
            return (
                f"Phase 3 offers best value at ~{p3.expected_price} points if section flexibility is OK. "
                f"For specific section: Phase 1 at {p1.safe_bid} points."
            )

        return (
            f"Recommend Phase 1 with {p1.safe_bid} points for high confidence, "
            f"or {p1.aggressive_bid} points if willing to risk Phase 2."
        )
