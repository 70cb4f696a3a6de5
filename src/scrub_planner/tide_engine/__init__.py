"""
Tide Engine Subpackage

Provides functionality for:
- Lunar phase and spring/neap modulation
- High/low water prediction from station tidal levels
- Merging authoritative feed events with predicted events
- Scrubbing-window rating per calendar day
- Ranked scrubbing-day tables
"""

from scrub_planner.tide_engine.constants import (
    DEFAULT_MODEL_CONSTANTS,
    DEFAULT_SCRUBBING_THRESHOLDS,
    ScrubbingThresholds,
    TideModelConstants,
)
from scrub_planner.tide_engine.events import (
    EventKind,
    TideEvent,
    events_to_frame,
    merge_events,
    normalize_api_events,
)
from scrub_planner.tide_engine.lunar import (
    MoonPhase,
    lunar_phase,
    moon_phase,
    spring_neap_factor,
)
from scrub_planner.tide_engine.scrubbing import (
    ScrubbingAssessment,
    ScrubRating,
    ScrubWindowPreference,
    assess_scrubbing_days,
    maintenance_log_entry,
    parse_clock_time,
    rank_assessments,
)
from scrub_planner.tide_engine.scrubbing_table import (
    build_scrubbing_table,
    write_scrubbing_table_csv,
)
from scrub_planner.tide_engine.settings import (
    load_model_constants,
    load_scrub_preference,
    load_scrubbing_thresholds,
)
from scrub_planner.tide_engine.stations import (
    DEMO_STATIONS,
    Station,
    StationConstants,
    find_stations,
    get_station,
)
from scrub_planner.tide_engine.tidal_prediction import (
    api_duration_days,
    predict_events,
    prediction_days_for_month,
)

__all__ = [
    # Constants
    'TideModelConstants',
    'ScrubbingThresholds',
    'DEFAULT_MODEL_CONSTANTS',
    'DEFAULT_SCRUBBING_THRESHOLDS',
    'load_model_constants',
    'load_scrub_preference',
    'load_scrubbing_thresholds',
    # Stations
    'Station',
    'StationConstants',
    'DEMO_STATIONS',
    'get_station',
    'find_stations',
    # Lunar phase
    'MoonPhase',
    'lunar_phase',
    'spring_neap_factor',
    'moon_phase',
    # Events
    'EventKind',
    'TideEvent',
    'normalize_api_events',
    'merge_events',
    'events_to_frame',
    # Prediction
    'predict_events',
    'prediction_days_for_month',
    'api_duration_days',
    # Scrubbing analysis
    'ScrubRating',
    'ScrubWindowPreference',
    'ScrubbingAssessment',
    'parse_clock_time',
    'assess_scrubbing_days',
    'rank_assessments',
    'maintenance_log_entry',
    # Scrubbing table
    'build_scrubbing_table',
    'write_scrubbing_table_csv',
]
