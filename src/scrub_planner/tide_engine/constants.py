"""
Model constants for the single-constituent tide predictor and the
scrubbing-window scorer.

The predictor approximates a station's tides with the principal lunar
semidiurnal constituent (M2) modulated by a spring/neap factor derived
from the lunar phase.  All numbers that drive the model are gathered
here as immutable values so they can be swapped per call (tests,
alternative calibrations) without touching module globals.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

# ---------------------------------------------------------------------------
# Lunar reference values.
# ---------------------------------------------------------------------------

KNOWN_NEW_MOON: datetime = datetime(2024, 1, 11, 11, 57)
"""Reference new-moon instant (UTC, naive)."""

LUNAR_CYCLE: float = 29.53059
"""Mean synodic month in days."""

# ---------------------------------------------------------------------------
# Tide timing.
# ---------------------------------------------------------------------------

M2_PERIOD: float = 12.4206
"""Period of the M2 constituent in hours (360 / 28.9841042 deg/hr)."""

DAILY_ADVANCE_HOURS: float = 0.8333
"""Daily retardation of the first high water, hours per day."""


@dataclass(frozen=True)
class TideModelConstants:
    """
    Constants of the harmonic approximation.

    Attributes
    ----------
    known_new_moon : datetime
        Epoch of the lunar-phase computation.
    lunar_cycle : float
        Synodic month length in days.
    m2_period : float
        Semidiurnal period in hours.
    daily_advance_hours : float
        Hours the first high water advances per predicted day.
    spring_lag_days : int
        Age of the tide: the spring/neap factor for a day is taken from
        the lunar phase this many days earlier.
    jitter_amplitude : float
        Half-width (m) of the uniform height perturbation.
    second_tide_offset : float
        The second high water of a day is lowered, and the second low
        water raised, by this many metres.
    """

    known_new_moon: datetime = KNOWN_NEW_MOON
    lunar_cycle: float = LUNAR_CYCLE
    m2_period: float = M2_PERIOD
    daily_advance_hours: float = DAILY_ADVANCE_HOURS
    spring_lag_days: int = 2
    jitter_amplitude: float = 0.075
    second_tide_offset: float = 0.1

    def with_overrides(self, **changes) -> TideModelConstants:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_MODEL_CONSTANTS = TideModelConstants()


@dataclass(frozen=True)
class ScrubbingThresholds:
    """
    Limits used to rate a scrubbing window.

    Ranges are in metres, times in hours.
    """

    excellent_range: float = 4.5
    good_range: float = 3.5
    refloat_cutoff_hour: int = 20
    next_high_min_separation_hours: float = 6.0


DEFAULT_SCRUBBING_THRESHOLDS = ScrubbingThresholds()

# Default high-water acceptance window ("beach the boat" between these).
DEFAULT_HIGH_WATER_START = '06:30'
DEFAULT_HIGH_WATER_END = '09:00'

# Prediction horizons used when filling a calendar month.
SUBSCRIBER_EXTRA_DAYS = 7
FREE_PREDICTION_DAYS = 14
SUBSCRIBER_API_DAYS = 30
FREE_API_DAYS = 7
