"""Schedule generation for play sessions and club round-robins."""

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

from courtpairing.scheduling.club_schedule import (
    ClubScheduler,
    assign_courts,
    auto_seed_division,
    court_for,
)
from courtpairing.scheduling.engine import SchedulingEngine, replace_schedule
from courtpairing.scheduling.formats import (
    FORMAT_REGISTRY,
    FixedTeams,
    GenerationContext,
    RotatingDoubles,
    SessionFormat,
    Singles,
    get_format,
    register_format,
)
from courtpairing.scheduling.results import parse_score, record_score

__all__ = [
    "ClubScheduler",
    "FORMAT_REGISTRY",
    "FixedTeams",
    "GenerationContext",
    "RotatingDoubles",
    "SchedulingEngine",
    "SessionFormat",
    "Singles",
    "assign_courts",
    "auto_seed_division",
    "court_for",
    "get_format",
    "parse_score",
    "record_score",
    "register_format",
    "replace_schedule",
]
