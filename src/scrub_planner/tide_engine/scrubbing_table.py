"""
Tabular summary of a month's scrubbing days.

Produces the ranked list shown next to the tide calendar (best rating
first, then by date) as a DataFrame, and writes it to CSV with a small
metadata header for sharing with club members.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path

import pandas as pd

from .scrubbing import (
    ScrubbingAssessment,
    ScrubRating,
    ScrubWindowPreference,
    rank_assessments,
)

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    'Date', 'Rating', 'Beach_At', 'Work_At', 'Refloat_At', 'Tidal_Range',
]


def build_scrubbing_table(
    assessments: Mapping[date, ScrubbingAssessment],
    logger: logging.Logger | None = None,
) -> pd.DataFrame:
    """
    Build the ranked scrubbing-day table.

    Parameters
    ----------
    assessments : mapping
        Output of :func:`~scrub_planner.tide_engine.scrubbing.assess_scrubbing_days`.
    logger : logging.Logger, optional
        Logger instance.

    Returns
    -------
    pd.DataFrame
        Columns: ``Date``, ``Rating``, ``Beach_At``, ``Work_At``,
        ``Refloat_At`` (``HH:MM`` or empty), ``Tidal_Range`` (metres,
        one decimal).
    """
    _log = logger or logging.getLogger(__name__)

    rows = []
    for day, a in rank_assessments(assessments):
        refloat = a.refloat_estimate
        rows.append({
            'Date': day.isoformat(),
            'Rating': a.rating.label,
            'Beach_At': a.beach_time.strftime('%H:%M'),
            'Work_At': a.work_time.strftime('%H:%M'),
            'Refloat_At': refloat.strftime('%H:%M') if refloat else '',
            'Tidal_Range': round(a.tidal_range, 1),
        })

    table = pd.DataFrame(rows, columns=TABLE_COLUMNS)
    _log.info('Scrubbing table built: %d day(s).', len(table))
    return table


def _clock(minutes: int) -> str:
    return f'{minutes // 60:02d}:{minutes % 60:02d}'


def write_scrubbing_table_csv(
    table: pd.DataFrame,
    output_path: str,
    station_id: str = '',
    preference: ScrubWindowPreference | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """
    Write a scrubbing table to CSV behind a short ``#`` header.

    The header names the station, the high-water window the days were
    chosen from, and how many days earned each rating.  Read it back
    with ``pd.read_csv(path, comment='#')``.
    """
    _log = logger or logging.getLogger(__name__)

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    counts = table['Rating'].value_counts()
    ratings = ', '.join(
        f'{r.label}={int(counts.get(r.label, 0))}'
        for r in ScrubRating if r is not ScrubRating.POOR
    )
    header = []
    if station_id:
        header.append(f'# Station: {station_id}')
    if preference is not None:
        header.append(
            f'# Window: {_clock(preference.window_start)}-{_clock(preference.window_end)}'
        )
    header.append(f'# Rating counts: {ratings}')

    path.write_text('\n'.join(header) + '\n')
    table.to_csv(path, mode='a', index=False)

    _log.info('Scrubbing table written to %s.', path)
