"""
Lunar phase arithmetic.

The phase is the fractional position within the mean synodic month,
measured from a fixed reference new moon: 0 is new moon, 0.5 full moon.
Spring tides follow new and full moon; neaps follow the quarters.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import NamedTuple

from .constants import DEFAULT_MODEL_CONSTANTS, TideModelConstants

_SECONDS_PER_DAY = 86400.0


class MoonPhase(NamedTuple):
    name: str
    is_spring: bool


# Upper phase bound -> named phase.  Phases at or above the last bound
# wrap back to New Moon.
_PHASE_NAMES = (
    (0.0625, MoonPhase('New Moon', True)),
    (0.1875, MoonPhase('Waxing Crescent', False)),
    (0.3125, MoonPhase('First Quarter', False)),
    (0.4375, MoonPhase('Waxing Gibbous', False)),
    (0.5625, MoonPhase('Full Moon', True)),
    (0.6875, MoonPhase('Waning Gibbous', False)),
    (0.8125, MoonPhase('Last Quarter', False)),
    (0.9375, MoonPhase('Waning Crescent', False)),
)


def to_utc_naive(moment: date | datetime) -> datetime:
    """Coerce a date or datetime to a naive UTC datetime."""
    if not isinstance(moment, datetime):
        return datetime(moment.year, moment.month, moment.day)
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def lunar_phase(
    moment: date | datetime,
    constants: TideModelConstants | None = None,
) -> float:
    """
    Fractional lunar-cycle position of *moment*, in ``[0, 1)``.

    Parameters
    ----------
    moment : date or datetime
        Naive values are taken as UTC; a bare date means its midnight.
    constants : TideModelConstants, optional
        Supplies the reference new moon and cycle length.

    Returns
    -------
    float
        0 at new moon, 0.5 at full moon.
    """
    c = constants or DEFAULT_MODEL_CONSTANTS
    elapsed = to_utc_naive(moment) - c.known_new_moon
    days_since_new = elapsed.total_seconds() / _SECONDS_PER_DAY
    phase = (days_since_new % c.lunar_cycle) / c.lunar_cycle
    # Float modulo of a tiny negative number can land exactly on the cycle.
    if phase >= 1.0:
        phase -= 1.0
    return phase


def spring_neap_factor(
    moment: date | datetime,
    constants: TideModelConstants | None = None,
) -> float:
    """
    Spring/neap modulation for the lunar phase at *moment*.

    1 at new or full moon (springs), 0 at the quarters (neaps).
    """
    phase = lunar_phase(moment, constants)
    spring_proximity = min(abs(phase - 0.0), abs(phase - 0.5), abs(phase - 1.0))
    return 1.0 - spring_proximity / 0.25


def moon_phase(
    moment: date | datetime,
    constants: TideModelConstants | None = None,
) -> MoonPhase:
    """Named moon phase for *moment* (eight phases, 1/16-cycle bins)."""
    phase = lunar_phase(moment, constants)
    for upper, named in _PHASE_NAMES:
        if phase < upper:
            return named
    return _PHASE_NAMES[0][1]
