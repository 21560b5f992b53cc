"""
Global settings and constants for the Course Bid Forecaster.

Default model parameters, overridable from the environment (or a .env file).
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


# =============================================================================
# TIME WEIGHTING
# =============================================================================

# Value of 0.3 means data from 1 year ago has weight e^(-0.3) ~ 0.74
TIME_DECAY_FACTOR = float(os.getenv("BID_TIME_DECAY_FACTOR", "0.3"))

# Yearly price drift applied to historical clearing prices
INFLATION_RATE = float(os.getenv("BID_INFLATION_RATE", "0.03"))  # 3%

# Age assigned to terms that cannot be parsed
MAX_AGE_YEARS = float(os.getenv("BID_MAX_AGE_YEARS", "10.0"))


# =============================================================================
# CONFIDENCE THRESHOLDS
# =============================================================================

MIN_DATA_HIGH_CONFIDENCE = int(os.getenv("BID_MIN_DATA_HIGH_CONFIDENCE", "6"))
MIN_DATA_MEDIUM_CONFIDENCE = int(os.getenv("BID_MIN_DATA_MEDIUM_CONFIDENCE", "4"))
MIN_DATA_LOW_CONFIDENCE = 1


# =============================================================================
# TREND DETECTION
# =============================================================================

TREND_SIGNIFICANCE_LEVEL = float(os.getenv("BID_TREND_SIGNIFICANCE_LEVEL", "0.10"))
TREND_MIN_RELATIVE_SLOPE = float(os.getenv("BID_TREND_MIN_RELATIVE_SLOPE", "0.05"))


# =============================================================================
# ADJUSTMENTS
# =============================================================================

RATING_IMPACT_SCALE = float(os.getenv("BID_RATING_IMPACT_SCALE", "0.25"))  # max +/- 25%


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
