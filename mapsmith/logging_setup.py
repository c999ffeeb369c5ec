# -*- coding: utf-8 -*-

# Mapsmith
# Copyright (C) 2025 Jwadow
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""
Logging setup for applications using Mapsmith.

Mapsmith logs through loguru and stays silent until setup_logging() is
called (the "mapsmith" logger namespace is disabled on import).
"""

import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from mapsmith.config import LOG_LEVEL

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = LOG_LEVEL, log_file: Optional[Path] = None) -> List[int]:
    """
    Enable Mapsmith logs and configure loguru sinks.

    Existing sinks are removed so repeated calls don't duplicate output.

    Args:
        level: Log level name (TRACE, DEBUG, INFO, ...)
        log_file: Optional file sink, rotated at 10 MB

    Returns:
        Ids of the added sinks
    """
    level = level.upper()
    logger.enable("mapsmith")
    logger.remove()

    sink_ids = [logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=True)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink_ids.append(
            logger.add(str(log_file), level=level, format=LOG_FORMAT, rotation="10 MB")
        )
    return sink_ids
