"""
Predict tides for a station and list the month's best scrubbing days.

Uses the built-in station catalogue and the harmonic approximation only;
authoritative events, if available, can be supplied as a JSON file in
the tidal feed's format and take precedence on the dates they cover.
"""
from __future__ import annotations

import argparse
import json
import logging.config
import os
import sys
from datetime import datetime
from pathlib import Path

import numpy as np

from scrub_planner.tide_engine import (
    assess_scrubbing_days,
    build_scrubbing_table,
    get_station,
    load_model_constants,
    load_scrub_preference,
    load_scrubbing_thresholds,
    merge_events,
    normalize_api_events,
    parse_clock_time,
    predict_events,
    prediction_days_for_month,
    ScrubWindowPreference,
    write_scrubbing_table_csv,
)
from scrub_planner.utils import Utils


def _setup_logger(logger, log_config_file=None):
    """
    Initialize logger if not provided.

    Only the logging config is required; a missing application config
    falls back to the built-in defaults.
    """
    if logger is not None:
        return logger

    if log_config_file is None:
        log_config_file = (Path(__file__).parent.parent / 'conf/logging.conf').resolve()
    if not os.path.isfile(log_config_file):
        sys.exit(f'Logging config {log_config_file} not found.')

    logging.config.fileConfig(log_config_file)
    logger = logging.getLogger('root')
    logger.info('Using log config %s', log_config_file)

    config_file = Utils().get_config_file()
    if os.path.isfile(config_file):
        logger.info('Using config %s', config_file)
    else:
        logger.warning('Config %s not found; using built-in defaults.', config_file)
    return logger


def predict_scrub_days(args, logger=None):
    logger = _setup_logger(logger)

    station = get_station(args.Station)
    start = datetime.strptime(args.StartDate, '%Y-%m-%d')
    days = args.Days
    if days is None:
        days = prediction_days_for_month(start.year, start.month, args.Subscriber)

    constants = load_model_constants(logger=logger)
    thresholds = load_scrubbing_thresholds(logger=logger)
    preference = load_scrub_preference(logger=logger)
    if args.WindowStart or args.WindowEnd:
        preference = ScrubWindowPreference(
            parse_clock_time(args.WindowStart) if args.WindowStart
            else preference.window_start,
            parse_clock_time(args.WindowEnd) if args.WindowEnd
            else preference.window_end,
        )

    rng = np.random.default_rng(args.Seed)
    predicted = predict_events(
        station, start, days, rng=rng, constants=constants, logger=logger,
    )

    authoritative = []
    if args.Events:
        with open(args.Events) as f:
            authoritative = normalize_api_events(json.load(f), logger=logger)
    events = merge_events(authoritative, predicted, logger=logger)

    assessments = assess_scrubbing_days(
        events, preference, thresholds=thresholds, logger=logger,
    )
    table = build_scrubbing_table(assessments, logger=logger)

    if args.Output:
        write_scrubbing_table_csv(
            table, args.Output, station_id=station.id,
            preference=preference,
            logger=logger,
        )
    elif table.empty:
        print('No suitable dates found. Try adjusting the time window.')
    else:
        print(table.to_string(index=False))
    return table


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        prog='python predict_scrub_days.py',
        description='Rank scrubbing days for a tidal station',
    )
    parser.add_argument('-s', '--Station', required=True, help='Station id, e.g. 0240')
    parser.add_argument('-d', '--StartDate', required=True, help='Start date YYYY-MM-DD')
    parser.add_argument('-n', '--Days', required=False, type=int,
                        help='Days to predict (default: calendar month horizon)')
    parser.add_argument('--Subscriber', action='store_true',
                        help='Use the subscriber prediction horizon')
    parser.add_argument('--WindowStart', required=False, help='Earliest high water HH:MM')
    parser.add_argument('--WindowEnd', required=False, help='Latest high water HH:MM')
    parser.add_argument('--Seed', required=False, type=int, help='Seed for height jitter')
    parser.add_argument('-e', '--Events', required=False,
                        help='JSON file of authoritative tide events')
    parser.add_argument('-o', '--Output', required=False, help='CSV output path')

    predict_scrub_days(parser.parse_args(), None)
