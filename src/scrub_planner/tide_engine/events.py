"""
Tide event records and the merge of authoritative and predicted events.

Authoritative events come from a third-party tidal feed (one JSON record
per extremum).  Predicted events are synthesized by
:func:`~scrub_planner.tide_engine.tidal_prediction.predict_events`.
When both exist for a calendar date the authoritative ones win.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import pandas as pd

logger = logging.getLogger(__name__)

PREDICTED_SOURCE = 'Predicted'
AUTHORITATIVE_SOURCE = 'Authoritative'


class EventKind(str, Enum):
    HIGH_WATER = 'HighWater'
    LOW_WATER = 'LowWater'


@dataclass(frozen=True)
class TideEvent:
    """A single high or low water."""

    kind: EventKind
    timestamp: datetime
    height: float
    is_predicted: bool = True
    source: str = PREDICTED_SOURCE

    @property
    def is_high_water(self) -> bool:
        return self.kind is EventKind.HIGH_WATER

    @property
    def is_low_water(self) -> bool:
        return self.kind is EventKind.LOW_WATER


def _parse_timestamp(value) -> datetime:
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert('UTC').tz_localize(None)
    return ts.to_pydatetime()


def normalize_api_events(
    records: Iterable[Mapping],
    logger: logging.Logger | None = None,
) -> list[TideEvent]:
    """
    Convert authoritative feed records to :class:`TideEvent` objects.

    Parameters
    ----------
    records : iterable of mapping
        Records with ``EventType`` (``"HighWater"`` / ``"LowWater"``),
        ``DateTime`` (ISO 8601) and ``Height`` (metres) keys.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TideEvent
        Events flagged ``is_predicted=False``, in input order.

    Raises
    ------
    ValueError
        If a record lacks a required key, has an unknown event type or a
        non-numeric height.
    """
    _log = logger or logging.getLogger(__name__)

    events = []
    for i, record in enumerate(records):
        missing = [k for k in ('EventType', 'DateTime', 'Height')
                   if record.get(k) is None]
        if missing:
            raise ValueError(
                f"Record {i} is missing required field(s): {', '.join(missing)}."
            )
        try:
            kind = EventKind(record['EventType'])
        except ValueError:
            raise ValueError(
                f"Record {i} has unknown EventType '{record['EventType']}'."
            ) from None
        try:
            height = float(record['Height'])
        except (TypeError, ValueError):
            raise ValueError(
                f"Record {i} has non-numeric Height '{record['Height']}'."
            ) from None
        events.append(TideEvent(
            kind=kind,
            timestamp=_parse_timestamp(record['DateTime']),
            height=height,
            is_predicted=False,
            source=AUTHORITATIVE_SOURCE,
        ))

    _log.info('Normalized %d authoritative tide events.', len(events))
    return events


def merge_events(
    authoritative: Iterable[TideEvent],
    predicted: Iterable[TideEvent],
    logger: logging.Logger | None = None,
) -> list[TideEvent]:
    """
    Combine authoritative and predicted events into one ordered list.

    Every authoritative event is kept.  A predicted event is kept only
    if no authoritative event falls on the same calendar date.
    """
    _log = logger or logging.getLogger(__name__)

    authoritative = list(authoritative)
    covered = {e.timestamp.date() for e in authoritative}
    fill = [e for e in predicted if e.timestamp.date() not in covered]

    merged = sorted(authoritative + fill, key=lambda e: e.timestamp)
    _log.info(
        'Merged %d authoritative and %d predicted events (%d dates covered).',
        len(authoritative), len(fill), len(covered),
    )
    return merged


def events_to_frame(events: Iterable[TideEvent]) -> pd.DataFrame:
    """
    Tabulate events.

    Returns
    -------
    pd.DataFrame
        Columns: ``DateTime``, ``EventType``, ``Height``,
        ``IsPredicted``, ``Source``.
    """
    rows = [
        {
            'DateTime': e.timestamp,
            'EventType': e.kind.value,
            'Height': e.height,
            'IsPredicted': e.is_predicted,
            'Source': e.source,
        }
        for e in events
    ]
    return pd.DataFrame(
        rows, columns=['DateTime', 'EventType', 'Height', 'IsPredicted', 'Source'],
    )
