"""
Build model constants and scrubbing thresholds from the config file.

Keys absent from the ``[tide_model]`` or ``[scrubbing]`` sections keep
their built-in defaults.
"""
from __future__ import annotations

import logging
from dataclasses import replace

import pandas as pd

from scrub_planner.utils import Utils

from .constants import (
    DEFAULT_HIGH_WATER_END,
    DEFAULT_HIGH_WATER_START,
    DEFAULT_MODEL_CONSTANTS,
    DEFAULT_SCRUBBING_THRESHOLDS,
    ScrubbingThresholds,
    TideModelConstants,
)
from .scrubbing import ScrubWindowPreference

logger = logging.getLogger(__name__)

_MODEL_FIELDS = {
    'lunar_cycle_days': ('lunar_cycle', float),
    'm2_period_hours': ('m2_period', float),
    'daily_advance_hours': ('daily_advance_hours', float),
    'spring_lag_days': ('spring_lag_days', int),
    'jitter_amplitude_m': ('jitter_amplitude', float),
    'second_tide_offset_m': ('second_tide_offset', float),
}

_THRESHOLD_FIELDS = {
    'excellent_range_m': ('excellent_range', float),
    'good_range_m': ('good_range', float),
    'refloat_cutoff_hour': ('refloat_cutoff_hour', int),
    'next_high_min_separation_hours': ('next_high_min_separation_hours', float),
}


def _convert(section: dict[str, str], fields: dict) -> dict:
    changes = {}
    for key, (name, cast) in fields.items():
        if key in section:
            try:
                changes[name] = cast(section[key])
            except ValueError:
                raise ValueError(
                    f"Config key '{key}' has invalid value '{section[key]}'."
                ) from None
    return changes


def load_model_constants(
    config_file: str | None = None,
    logger: logging.Logger | None = None,
) -> TideModelConstants:
    """
    Read ``[tide_model]`` into a :class:`TideModelConstants`.

    Raises
    ------
    ValueError
        If a key holds a value that cannot be converted.
    """
    _log = logger or logging.getLogger(__name__)
    section = Utils(config_file).read_config_section('tide_model', _log)

    changes = _convert(section, _MODEL_FIELDS)
    if 'known_new_moon' in section:
        epoch = pd.Timestamp(section['known_new_moon'])
        if epoch.tzinfo is not None:
            epoch = epoch.tz_convert('UTC').tz_localize(None)
        changes['known_new_moon'] = epoch.to_pydatetime()

    _log.info('Tide model constants: %d override(s) from config.', len(changes))
    return DEFAULT_MODEL_CONSTANTS.with_overrides(**changes)


def load_scrubbing_thresholds(
    config_file: str | None = None,
    logger: logging.Logger | None = None,
) -> ScrubbingThresholds:
    """Read ``[scrubbing]`` into a :class:`ScrubbingThresholds`."""
    _log = logger or logging.getLogger(__name__)
    section = Utils(config_file).read_config_section('scrubbing', _log)

    changes = _convert(section, _THRESHOLD_FIELDS)
    _log.info('Scrubbing thresholds: %d override(s) from config.', len(changes))
    return replace(DEFAULT_SCRUBBING_THRESHOLDS, **changes)


def load_scrub_preference(
    config_file: str | None = None,
    logger: logging.Logger | None = None,
) -> ScrubWindowPreference:
    """Default high-water window from ``[scrubbing]`` (``HH:MM`` strings)."""
    _log = logger or logging.getLogger(__name__)
    section = Utils(config_file).read_config_section('scrubbing', _log)
    return ScrubWindowPreference.from_clock_strings(
        section.get('high_water_start', DEFAULT_HIGH_WATER_START),
        section.get('high_water_end', DEFAULT_HIGH_WATER_END),
    )
