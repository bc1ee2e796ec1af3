"""Numerical constants and defaults used throughout pyfishery.

Centralizes values that would otherwise be scattered as magic numbers
across the engines and the driver.
"""

# ============================================================================
# MODEL NAMES
# ============================================================================

MODEL_SIMPLE = "simple"
MODEL_DELAY = "delay"
MODEL_AGE = "age"
MODEL_NAMES = (MODEL_SIMPLE, MODEL_DELAY, MODEL_AGE)

# ============================================================================
# TIME STEPPING
# ============================================================================

# Delay-equation model sub-steps per simulated year (forward Euler)
DEFAULT_DELAY_STEPS_PER_YEAR = 100

# Reference run horizons in years
DEFAULT_SIMPLE_YEARS = 15
DEFAULT_DELAY_YEARS = 20
DEFAULT_AGE_YEARS = 25

# ============================================================================
# NUMERICAL THRESHOLDS
# ============================================================================

# Below this total mortality the Baranov catch fraction uses its Z -> 0 limit
MIN_TOTAL_MORTALITY = 1e-10

# Stock at or below this value counts as crashed
CRASH_THRESHOLD = 0.0

# ============================================================================
# OUTPUT
# ============================================================================

# Decimal places written to CSV time series
CSV_DECIMAL_PLACES = 8

# File name timestamp for generated result files
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
