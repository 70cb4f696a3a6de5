"""
Scrubbing-window analysis.

A boat is scrubbed by taking the ground at high water, working on the
hull around the following low water, and refloating on the next high
water.  For each calendar day this module picks the best high water
inside the owner's preferred clock-time window and rates it by the
tidal range that follows and by whether the refloat happens before
evening.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from .constants import (
    DEFAULT_HIGH_WATER_END,
    DEFAULT_HIGH_WATER_START,
    DEFAULT_SCRUBBING_THRESHOLDS,
    ScrubbingThresholds,
)
from .events import TideEvent

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*$')


class ScrubRating(str, Enum):
    EXCELLENT = 'excellent'
    GOOD = 'good'
    FAIR = 'fair'
    # Display-only; never produced by assess_scrubbing_days.
    POOR = 'poor'

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def order(self) -> int:
        return _ORDER[self]


_LABELS = {
    ScrubRating.EXCELLENT: 'Excellent',
    ScrubRating.GOOD: 'Good',
    ScrubRating.FAIR: 'Fair',
    ScrubRating.POOR: 'Not Ideal',
}
_ORDER = {
    ScrubRating.EXCELLENT: 0,
    ScrubRating.GOOD: 1,
    ScrubRating.FAIR: 2,
    ScrubRating.POOR: 3,
}


def parse_clock_time(value: str) -> int:
    """
    Parse an ``HH:MM`` string into minutes after midnight.

    Raises
    ------
    ValueError
        If *value* is not a valid 24-hour clock time.
    """
    match = _CLOCK_RE.match(value)
    if not match:
        raise ValueError(f"Expected a clock time 'HH:MM', got '{value}'.")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Clock time '{value}' is out of range.")
    return hours * 60 + minutes


@dataclass(frozen=True)
class ScrubWindowPreference:
    """
    Acceptable clock-time range for the high water used to beach the boat.

    Bounds are minutes after midnight and inclusive.  A start later than
    the end is accepted and simply matches nothing.
    """

    window_start: int
    window_end: int

    @classmethod
    def from_clock_strings(
        cls,
        start: str = DEFAULT_HIGH_WATER_START,
        end: str = DEFAULT_HIGH_WATER_END,
    ) -> ScrubWindowPreference:
        return cls(parse_clock_time(start), parse_clock_time(end))

    def contains(self, moment: datetime) -> bool:
        minute_of_day = moment.hour * 60 + moment.minute
        return self.window_start <= minute_of_day <= self.window_end


@dataclass(frozen=True)
class ScrubbingAssessment:
    """Best scrubbing opportunity found for one calendar day."""

    rating: ScrubRating
    high_water_event: TideEvent
    low_water_event: TideEvent
    next_high_water_event: TideEvent | None
    tidal_range: float

    @property
    def refloat_estimate(self) -> datetime | None:
        if self.next_high_water_event is None:
            return None
        return self.next_high_water_event.timestamp

    @property
    def beach_time(self) -> datetime:
        return self.high_water_event.timestamp

    @property
    def work_time(self) -> datetime:
        return self.low_water_event.timestamp


def rate_window(
    tidal_range: float,
    refloat_ok: bool,
    thresholds: ScrubbingThresholds | None = None,
) -> ScrubRating:
    """Rating for a tidal range and refloat condition."""
    t = thresholds or DEFAULT_SCRUBBING_THRESHOLDS
    if tidal_range >= t.excellent_range and refloat_ok:
        return ScrubRating.EXCELLENT
    if tidal_range >= t.good_range and refloat_ok:
        return ScrubRating.GOOD
    return ScrubRating.FAIR


def _replaces(candidate: ScrubRating, current: ScrubbingAssessment | None) -> bool:
    if current is None:
        return True
    return candidate is ScrubRating.EXCELLENT or (
        candidate is ScrubRating.GOOD and current.rating is not ScrubRating.EXCELLENT
    )


def assess_scrubbing_days(
    events: Iterable[TideEvent],
    preference: ScrubWindowPreference,
    thresholds: ScrubbingThresholds | None = None,
    logger: logging.Logger | None = None,
) -> dict[date, ScrubbingAssessment]:
    """
    Rate each calendar day's best scrubbing window.

    Parameters
    ----------
    events : iterable of TideEvent
        Merged event list, sorted by timestamp.
    preference : ScrubWindowPreference
        Clock-time window the beaching high water must fall in.
    thresholds : ScrubbingThresholds, optional
        Range and time limits used by the rating.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    dict
        ``{date: ScrubbingAssessment}`` for days with at least one
        qualifying high water that is followed by a low water.  Other
        days are absent.
    """
    _log = logger or logging.getLogger(__name__)
    t = thresholds or DEFAULT_SCRUBBING_THRESHOLDS

    events = list(events)
    all_highs = [e for e in events if e.is_high_water]
    all_lows = [e for e in events if e.is_low_water]
    min_separation = timedelta(hours=t.next_high_min_separation_hours)

    by_date: dict[date, list[TideEvent]] = {}
    for event in events:
        by_date.setdefault(event.timestamp.date(), []).append(event)

    results: dict[date, ScrubbingAssessment] = {}
    for day, day_events in by_date.items():
        for hw in (e for e in day_events if e.is_high_water):
            if not preference.contains(hw.timestamp):
                continue

            # Both searches span the whole list so a late high water can
            # pair with the next day's tides.
            following_low = next(
                (lw for lw in all_lows if lw.timestamp > hw.timestamp), None,
            )
            if following_low is None:
                continue
            next_high = next(
                (
                    h for h in all_highs
                    if h.timestamp > hw.timestamp and (
                        h.timestamp.date() != hw.timestamp.date()
                        or h.timestamp - hw.timestamp > min_separation
                    )
                ),
                None,
            )

            tidal_range = hw.height - following_low.height
            refloat_ok = (
                next_high is None
                or next_high.timestamp.hour < t.refloat_cutoff_hour
            )
            rating = rate_window(tidal_range, refloat_ok, t)

            if _replaces(rating, results.get(day)):
                results[day] = ScrubbingAssessment(
                    rating=rating,
                    high_water_event=hw,
                    low_water_event=following_low,
                    next_high_water_event=next_high,
                    tidal_range=tidal_range,
                )

    _log.info(
        'Scrubbing analysis: %d of %d day(s) have a window between '
        'minute %d and %d.',
        len(results), len(by_date),
        preference.window_start, preference.window_end,
    )
    return results


def rank_assessments(
    assessments: Mapping[date, ScrubbingAssessment],
) -> list[tuple[date, ScrubbingAssessment]]:
    """Order days best rating first, then chronologically."""
    return sorted(
        assessments.items(),
        key=lambda item: (item[1].rating.order, item[0]),
    )


def maintenance_log_entry(day: date, assessment: ScrubbingAssessment) -> dict:
    """Maintenance-log reminder for scrubbing on *day*."""
    return {
        'title': f"Scrub boat - {day.strftime('%a %b %d %Y')}",
        'due_date': assessment.work_time.isoformat(),
        'notes': 'Added from scrubbing schedule',
    }
