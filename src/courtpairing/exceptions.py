"""Exceptions for use in Court Pairing"""

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


# ========== Base Application Exception ==========


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the package inherit from this class so callers
    can catch every application-specific error with a single except clause.
    """

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Base exception for schedule input validation errors.

    Raised before any match is produced; a failed generation never returns
    a partial schedule.
    """

    pass


class InsufficientPlayersException(ValidationException):
    """Raised when there are too few players for the requested format."""

    pass


class InsufficientTeamsException(ValidationException):
    """Raised when a fixed-team session has fewer than two teams."""

    pass


class UnsupportedFormatException(ValidationException):
    """Raised when a session format is not registered."""

    pass


class InvalidTeamException(ValidationException):
    """Raised when a fixed team is malformed or shares a player with another team."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Result Exceptions ==========


class ResultException(CourtPairingException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a score is invalid (e.g., blank, negative or out of range)."""

    pass


class ResultNotFoundException(ResultException):
    """Raised when a requested match or scored result cannot be found."""

    pass
