"""Standings tables derived from scored matches."""

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

from courtpairing.standings.calculator import (
    compute_club_standings,
    compute_individual_coverage,
    compute_player_standings,
    compute_session_standings,
    session_progress,
    top_performers,
)
from courtpairing.standings.ordering import sort_standings, standings_sort_key
from courtpairing.standings.playoff import apply_playoff_override, playoff_ready

__all__ = [
    "apply_playoff_override",
    "compute_club_standings",
    "compute_individual_coverage",
    "compute_player_standings",
    "compute_session_standings",
    "playoff_ready",
    "session_progress",
    "sort_standings",
    "standings_sort_key",
    "top_performers",
]
