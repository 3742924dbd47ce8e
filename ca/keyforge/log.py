# This file is part of keyforge.
#
# keyforge is free software: you can redistribute it and/or modify it under the terms of the GNU General
# Public License as published by the Free Software Foundation, either version 3 of the License, or (at your
# option) any later version.
#
# keyforge is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the
# implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License
# for more details.
#
# You should have received a copy of the GNU General Public License along with keyforge. If not, see
# <http://www.gnu.org/licenses/>.

"""Logging configuration for the command line interface."""

import logging.config
import os
import typing
from collections.abc import Mapping
from typing import Any

from keyforge import constants
from keyforge.exceptions import ConfigurationError
from keyforge.typehints import LogLevelName


def get_logging_config(
    level: str = constants.LOG_LEVEL, log_format: str = constants.LOG_FORMAT
) -> dict[str, Any]:
    """Get the configuration for :py:func:`logging.config.dictConfig`.

    Messages of keyforge itself are logged with the given `level`, messages from other libraries only if they
    are at least warnings. All messages are written to standard error.

    >>> config = get_logging_config("DEBUG")
    >>> config["loggers"]["keyforge"]
    {'level': 'DEBUG'}
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "main": {
                "format": log_format,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "main",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "keyforge": {
                "level": level.upper(),
            },
        },
        "root": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    }


def configure_logging(level: str | None = None, environ: Mapping[str, str] | None = None) -> None:
    """Configure logging.

    If `level` is not given, the level is read from the ``KEYFORGE_LOG_LEVEL`` environment variable. The
    format can be set with ``KEYFORGE_LOG_FORMAT``. `environ` defaults to :py:data:`os.environ`.

    Raises :py:class:`~keyforge.exceptions.ConfigurationError` if the level is not a known log level.
    """
    if environ is None:
        environ = os.environ
    prefix = constants.ENVIRONMENT_PREFIX

    if level is None:
        level = environ.get(f"{prefix}LOG_LEVEL") or constants.LOG_LEVEL
    level = level.upper()
    if level not in typing.get_args(LogLevelName):
        raise ConfigurationError(f"{level}: Unknown log level.")
    log_format = environ.get(f"{prefix}LOG_FORMAT") or constants.LOG_FORMAT

    logging.config.dictConfig(get_logging_config(level, log_format))
