"""Standing rows and coverage counters."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Standing:
    """Aggregated results of one club or player.

    Rows are rebuilt from the match list every time; they are never stored
    as source of truth.

    Attributes
    ----------
    id : str
        Club or player id.
    name : str
        Display name, used as the last tie-break before the id.
    club_id : str or None
        Owning club for player rows.
    """

    id: str
    name: str = ""
    club_id: Optional[str] = None
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    point_diff: int = 0
    matches_played: int = 0

    def record(self, scored: int, conceded: int) -> None:
        """Add one decided match from this entity's point of view."""
        self.matches_played += 1
        self.points_for += scored
        self.points_against += conceded
        self.point_diff += scored - conceded
        if scored > conceded:
            self.wins += 1
        else:
            self.losses += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "club_id": self.club_id,
            "wins": self.wins,
            "losses": self.losses,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "point_diff": self.point_diff,
            "matches_played": self.matches_played,
        }


@dataclass(frozen=True)
class IndividualCoverage:
    """How many scored matches could be credited to individual players."""

    scored_matches: int = 0
    scored_matches_with_player_mapping: int = 0

    @property
    def is_complete(self) -> bool:
        return self.scored_matches_with_player_mapping >= self.scored_matches

    @property
    def ratio(self) -> float:
        if self.scored_matches == 0:
            return 1.0
        return self.scored_matches_with_player_mapping / self.scored_matches

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scored_matches": self.scored_matches,
            "scored_matches_with_player_mapping": self.scored_matches_with_player_mapping,
        }
