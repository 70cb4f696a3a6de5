"""
Tide event prediction from station levels.

Synthesizes high/low water times and heights with a single dominant
semidiurnal constituent (M2) whose amplitude is modulated between neaps
and springs by the lunar phase.  This is a fallback for dates the
authoritative feed does not cover; timing is approximate to within an
hour or two and heights to a few decimetres.

For each predicted day::

    f   = spring_neap_factor(day - lag)
    HW  = MHWN + (MHWS - MHWN) * f
    LW  = MLWN - (MLWN - MLWS) * f
    hw1 = (offset + day * 0.8333) mod 24

with the second high water one M2 period after the first and each low
water half a period after its high water.
"""
from __future__ import annotations

import calendar
import logging
import math
import numbers
from datetime import date, datetime, timedelta

import numpy as np

from .constants import (
    DEFAULT_MODEL_CONSTANTS,
    FREE_API_DAYS,
    FREE_PREDICTION_DAYS,
    SUBSCRIBER_API_DAYS,
    SUBSCRIBER_EXTRA_DAYS,
    TideModelConstants,
)
from .events import PREDICTED_SOURCE, EventKind, TideEvent
from .lunar import lunar_phase, spring_neap_factor, to_utc_naive
from .stations import Station, StationConstants

logger = logging.getLogger(__name__)


def predict_events(
    station: Station | StationConstants,
    start_date: date | datetime,
    days: int,
    rng: np.random.Generator | None = None,
    constants: TideModelConstants | None = None,
    logger: logging.Logger | None = None,
) -> list[TideEvent]:
    """
    Predict high and low water events for *days* days from *start_date*.

    Parameters
    ----------
    station : Station or StationConstants
        Station (or its tidal levels) to predict for.
    start_date : date or datetime
        First day; any time-of-day component is discarded.
    days : int
        Number of days to predict.  ``0`` gives an empty list.
    rng : numpy.random.Generator, optional
        Source of the height jitter.  Anything with a ``random()``
        method returning floats in ``[0, 1)`` will do.  A fresh
        ``np.random.default_rng()`` is used if omitted.
    constants : TideModelConstants, optional
        Model constants (defaults to :data:`DEFAULT_MODEL_CONSTANTS`).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TideEvent
        Predicted events sorted by timestamp, two to four per day.

    Raises
    ------
    TypeError
        If *days* is not an integer.
    ValueError
        If *days* is negative.
    """
    _log = logger or logging.getLogger(__name__)

    if isinstance(days, bool) or not isinstance(days, numbers.Integral):
        raise TypeError(f"days must be an integer, got {type(days).__name__}.")
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}.")

    c = constants or DEFAULT_MODEL_CONSTANTS
    if rng is None:
        rng = np.random.default_rng()
    levels = station.constants if isinstance(station, Station) else station

    reference = to_utc_naive(start_date).replace(
        hour=0, minute=0, second=0, microsecond=0,
    )
    initial_offset = (lunar_phase(reference, c) * 24 * 0.5 + 2) % c.m2_period

    def jittered(base: float) -> float:
        noise = (float(rng.random()) - 0.5) * 2 * c.jitter_amplitude
        return max(0.0, base + noise)

    events: list[TideEvent] = []
    for day in range(days):
        current = reference + timedelta(days=day)
        factor = spring_neap_factor(current - timedelta(days=c.spring_lag_days), c)
        hw_height, lw_height = _event_heights(levels, factor)

        hw1 = (initial_offset + day * c.daily_advance_hours) % 24
        hw2 = (hw1 + c.m2_period) % 24
        lw1 = (hw1 + c.m2_period / 2) % 24
        lw2 = (hw2 + c.m2_period / 2) % 24

        events.append(_event(EventKind.HIGH_WATER, current, hw1, jittered(hw_height)))
        if _distinct_tide(hw1, hw2):
            events.append(_event(
                EventKind.HIGH_WATER, current, hw2,
                jittered(hw_height - c.second_tide_offset),
            ))
        events.append(_event(EventKind.LOW_WATER, current, lw1, jittered(lw_height)))
        if _distinct_tide(lw1, lw2):
            events.append(_event(
                EventKind.LOW_WATER, current, lw2,
                jittered(lw_height + c.second_tide_offset),
            ))

    events.sort(key=lambda e: e.timestamp)
    _log.info(
        'Predicted %d tide events over %d day(s) from %s.',
        len(events), days, reference.date().isoformat(),
    )
    return events


def _event_heights(levels: StationConstants, factor: float) -> tuple[float, float]:
    """Base high and low water heights for a spring/neap factor."""
    mhws = levels.mean_high_water_springs
    mhwn = levels.mean_high_water_neaps
    mlwn = levels.mean_low_water_neaps
    mlws = levels.mean_low_water_springs
    return mhwn + (mhws - mhwn) * factor, mlwn - (mlwn - mlws) * factor


def _distinct_tide(first: float, second: float) -> bool:
    """Whether the second tide of a pair falls on a distinct part of the day."""
    return abs(second - first) > 6 or second < first


def _event(kind: EventKind, day: datetime, hour: float, height: float) -> TideEvent:
    whole = math.floor(hour)
    minutes = math.floor((hour - whole) * 60 + 0.5)
    return TideEvent(
        kind=kind,
        timestamp=day + timedelta(hours=whole, minutes=minutes),
        height=height,
        is_predicted=True,
        source=PREDICTED_SOURCE,
    )


def prediction_days_for_month(year: int, month: int, subscriber: bool = False) -> int:
    """
    Days to predict when filling the calendar for *month*.

    Subscribers get the whole month plus a week of look-ahead; everyone
    else gets two weeks.
    """
    if not subscriber:
        return FREE_PREDICTION_DAYS
    return calendar.monthrange(year, month)[1] + SUBSCRIBER_EXTRA_DAYS


def api_duration_days(subscriber: bool = False) -> int:
    """Days of authoritative events requested from the tidal feed."""
    return SUBSCRIBER_API_DAYS if subscriber else FREE_API_DAYS
