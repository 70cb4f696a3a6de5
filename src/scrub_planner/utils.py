"""
Configuration file helpers.

The configuration is an INI file, ``conf/scrub_planner.conf`` at the
repository root unless the ``SCRUB_PLANNER_CONFIG`` environment variable
points elsewhere.
"""
from __future__ import annotations

import configparser
import os
from logging import Logger
from pathlib import Path

CONFIG_ENV_VAR = 'SCRUB_PLANNER_CONFIG'


class Utils:
    """Locate and read the scrub planner configuration."""

    def __init__(self, config_file: str | os.PathLike | None = None):
        self.config_file = config_file

    def get_config_file(self) -> Path:
        if self.config_file is not None:
            return Path(self.config_file)
        env_file = os.environ.get(CONFIG_ENV_VAR)
        if env_file:
            return Path(env_file)
        return (Path(__file__).parent.parent.parent / 'conf/scrub_planner.conf').resolve()

    def read_config_section(self, section: str, logger: Logger) -> dict[str, str]:
        """
        Return the key/value pairs of *section*.

        A missing file or section yields an empty dict so callers can fall
        back to built-in defaults.
        """
        config_file = self.get_config_file()
        if not config_file.is_file():
            logger.warning('Config file %s not found; using defaults.', config_file)
            return {}

        parser = configparser.ConfigParser()
        parser.read(config_file)
        if not parser.has_section(section):
            logger.warning('Section [%s] missing from %s; using defaults.',
                           section, config_file)
            return {}
        return dict(parser.items(section))
