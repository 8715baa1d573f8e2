"""Shared helpers for Court Pairing."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import logging
import os
import uuid
from typing import Optional

LOG_LEVEL_ENV = "COURTPAIRING_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger with the package handler attached.

    Args:
        name: Logger name, usually ``__name__``
        level: Explicit level name; defaults to ``$COURTPAIRING_LOG_LEVEL`` or WARNING

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))
    return logger


def generate_id(prefix: str = "") -> str:
    """Generate a short unique identifier, optionally prefixed."""
    short = uuid.uuid4().hex[:12]
    return f"{prefix}_{short}" if prefix else short
