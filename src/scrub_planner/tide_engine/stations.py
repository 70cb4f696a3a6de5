"""
Tidal station descriptors and the built-in demonstration catalogue.

A station is characterised for prediction purposes by its four tidal
levels (MHWS, MHWN, MLWN, MLWS).  When the station feed does not carry
them, the defaults below are used and no error is raised.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_MHWS = 4.5
DEFAULT_MHWN = 3.5
DEFAULT_MLWN = 1.5
DEFAULT_MLWS = 0.5

# Feed key -> field name.
_SHORT_KEYS = {
    'mhws': 'mean_high_water_springs',
    'mhwn': 'mean_high_water_neaps',
    'mlwn': 'mean_low_water_neaps',
    'mlws': 'mean_low_water_springs',
}


@dataclass(frozen=True)
class StationConstants:
    """Characteristic tidal levels of a station, in metres above datum."""

    mean_high_water_springs: float = DEFAULT_MHWS
    mean_high_water_neaps: float = DEFAULT_MHWN
    mean_low_water_neaps: float = DEFAULT_MLWN
    mean_low_water_springs: float = DEFAULT_MLWS

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> StationConstants:
        """
        Build constants from a feed record.

        Accepts either the short keys (``mhws``, ``mhwn``, ``mlwn``,
        ``mlws``) or the full field names.  Missing or ``None`` values
        fall back to the defaults.
        """
        values = {}
        for short, name in _SHORT_KEYS.items():
            value = mapping.get(name, mapping.get(short))
            if value is not None:
                values[name] = float(value)
        return cls(**values)


@dataclass(frozen=True)
class Station:
    """A tidal station as listed by the station feed."""

    id: str
    name: str
    country: str = ''
    latitude: float | None = None
    longitude: float | None = None
    constants: StationConstants = field(default_factory=StationConstants)


def _demo(station_id, name, country, lat, lon, mhws, mhwn, mlwn, mlws):
    return Station(
        id=station_id, name=name, country=country, latitude=lat, longitude=lon,
        constants=StationConstants(mhws, mhwn, mlwn, mlws),
    )


DEMO_STATIONS: tuple[Station, ...] = (
    _demo('0001', 'Aberdeen', 'Scotland', 57.143, -2.079, 4.3, 3.4, 1.3, 0.5),
    _demo('0113', 'London Bridge', 'England', 51.507, -0.087, 7.1, 6.0, 1.5, 0.5),
    _demo('0162', 'Liverpool (Alfred Dock)', 'England', 53.405, -2.994, 9.4, 7.5, 2.9, 1.0),
    _demo('0240', 'Southampton', 'England', 50.899, -1.391, 4.5, 3.7, 1.8, 0.5),
    _demo('0316', 'Dover', 'England', 51.114, 1.318, 6.8, 5.3, 1.9, 0.8),
    _demo('0402', 'Bristol (Avonmouth)', 'England', 51.509, -2.711, 13.2, 9.8, 3.8, 0.9),
    _demo('0452', 'Plymouth (Devonport)', 'England', 50.368, -4.186, 5.5, 4.4, 2.2, 0.8),
    _demo('0503', 'Cardiff', 'Wales', 51.461, -3.165, 12.4, 9.2, 3.6, 0.8),
    _demo('0590', 'Holyhead', 'Wales', 53.314, -4.633, 5.6, 4.4, 2.0, 0.7),
    _demo('0621', 'Belfast', 'Northern Ireland', 54.607, -5.909, 3.5, 3.0, 1.1, 0.4),
)
"""UK stations with published tidal levels, used when no feed is available."""


def get_station(station_id: str, stations=DEMO_STATIONS) -> Station:
    """Return the station with *station_id*; raise ``KeyError`` if unknown."""
    for station in stations:
        if station.id == station_id:
            return station
    raise KeyError(f"Unknown station id '{station_id}'.")


def find_stations(query: str, stations=DEMO_STATIONS) -> list[Station]:
    """Case-insensitive substring search over station name and country."""
    needle = query.lower()
    return [
        s for s in stations
        if needle in s.name.lower() or needle in s.country.lower()
    ]
