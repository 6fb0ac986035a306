"""Core constants for chargefit estimation and fitting.

These constants define the numerical guards, thresholds and bound factors
used across the fitting pipeline. Tunable knobs (charge-uncertainty
weighting, minimum uncertainty floor) live in the configuration models
instead.
"""

# =============================================================================
# Sample Size
# =============================================================================

MIN_FIT_POINTS = 5
"""Minimum number of samples required for any 5-parameter fit attempt."""

N_MODEL_PARAMS = 5
"""Number of free parameters of the power-law Lorentzian (A, m, gamma, beta, B)."""

# =============================================================================
# Robust Statistics
# =============================================================================

MAD_TO_SIGMA = 1.4826  # Normal-consistency factor
"""Scale applied to the median absolute deviation.

Makes the MAD a consistent estimator of the standard deviation for
normally distributed data.
"""

MAD_FLOOR = 1e-12
"""Smallest MAD accepted before substituting the standard deviation."""

# =============================================================================
# Model Guards
# =============================================================================

GAMMA_FLOOR = 1e-12
"""Lower bound applied to |gamma| before it is used as a divisor."""

BETA_FLOOR = 0.1
"""Lower bound applied to |beta| before exponentiation."""

BASE_FLOOR = 1e-12
"""Lower bound applied to 1 + ((x - m) / gamma)^2 before exponentiation."""

# =============================================================================
# Charge Uncertainty
# =============================================================================

CHARGE_UNCERTAINTY_FRACTION = 0.05
"""Per-profile charge uncertainty as a fraction of the maximum charge."""

# =============================================================================
# Outlier Rejection
# =============================================================================

CONSERVATIVE_SIGMA = 2.5
"""MAD multiplier of the conservative outlier-filtered dataset."""

LENIENT_SIGMA = 3.0
"""MAD multiplier of the lenient outlier-filtered dataset."""

EXTREME_LENIENT_SIGMA = 4.0
"""MAD multiplier used when a pass would discard more than half the points."""

# =============================================================================
# Initial Estimates
# =============================================================================

ESTIMATE_SPREAD_FRACTION = 0.1
"""Fraction of the amplitude a sample must exceed to enter the width moment."""

ESTIMATE_MIN_AMPLITUDE_FRACTION = 0.1
"""Amplitude floor as a fraction of the full charge range."""

ESTIMATE_GAMMA_LIMITS = (0.3, 3.0)
"""Clamp for the physics-based width estimate, in pixel-spacing units."""

ROBUST_GAMMA_MIN = 0.5
"""Minimum robust width estimate, in pixel-spacing units."""

FALLBACK_GAMMA = 0.7
"""Width of the conservative fallback estimate, in pixel-spacing units."""

# =============================================================================
# Parameter Bounds
# =============================================================================

AMPLITUDE_MIN_FRACTION = 0.01  # Relative to the amplitude estimate
AMPLITUDE_MAX_CHARGE_FACTOR = 1.5  # Relative to the largest observed charge
AMPLITUDE_MAX_ESTIMATE_FACTOR = 100.0  # Relative to the amplitude estimate

CENTER_RANGE = 3.0
"""Half-width of the center bounds, in pixel-spacing units."""

STAGE2_CENTER_RANGE = 0.5
"""Half-width of the center bounds around the stage-1 center."""

GAMMA_BOUNDS = (0.05, 4.0)
"""Width bounds, in pixel-spacing units."""

BETA_BOUNDS = (0.2, 4.0)
"""Power-exponent bounds of the full fit."""

STAGE1_BETA_BOUNDS = (0.9, 1.1)
"""Power-exponent bounds of stage 1 (near-pure Lorentzian)."""

BASELINE_AMPLITUDE_FACTOR = 0.5
BASELINE_OFFSET_FACTOR = 2.0

# =============================================================================
# Acceptance
# =============================================================================

ACCEPTED_BETA_RANGE = (0.1, 5.0)
"""Open interval the fitted exponent must fall in for a fit to be accepted."""

MAX_AMPLITUDE_ERROR_RATIO = 10.0
"""Covariance errors are rejected when sigma_A exceeds this multiple of A."""

MAX_CENTER_ERROR_PITCH = 5.0
"""Covariance errors are rejected when sigma_m exceeds this many pitches."""

PARAMETER_TOLERANCE = 1e-15
"""Parameter (step) tolerance shared by every solver configuration."""

PSEUDO_P_VALUE_SCALE = 10.0
"""Reduced chi-square at which the pseudo p-value reaches zero."""

# =============================================================================
# Line Grouping
# =============================================================================

LINE_GROUPING_TOLERANCE = 0.1
"""Row/column merge tolerance, in pixel-spacing units."""

DIAGONAL_TOLERANCE = 0.5
"""Diagonal membership tolerance, in pixel-spacing units."""

DIAGONAL_PITCH_FACTOR = 1.41421356237
"""Centre-to-centre pitch along a diagonal, in pixel-spacing units."""
