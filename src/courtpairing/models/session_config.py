"""SessionConfig data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from courtpairing.constants import (
    DEFAULT_COURTS,
    DEFAULT_ROUNDS,
    FORMAT_DOUBLES_ROTATE,
    MAX_COURTS,
    MAX_ROUNDS,
    MIN_COURTS,
    MIN_ROUNDS,
)
from courtpairing.models.player import Team


def clamp_int(value: Any, minimum: int, maximum: int, fallback: int) -> int:
    """Parse ``value`` as an int clamped to [minimum, maximum].

    Unparseable values yield ``fallback``.
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return fallback
    return max(minimum, min(maximum, number))


@dataclass
class SessionConfig:
    """Scheduling parameters of one play session.

    Attributes
    ----------
    id : str
        Session identifier, copied onto generated matches.
    name : str
        Session name used in exports.
    date : str
        ISO date of the session (``YYYY-MM-DD``), may be empty.
    format : str
        One of ``DOUBLES_ROTATE``, ``DOUBLES_FIXED_TEAMS`` or ``SINGLES``.
    courts : int
        Courts available per round.
    rounds : int
        Number of rounds to generate.
    prefer_mixed : bool
        Prefer mixed-gender partners in rotating doubles.
    teams : list of Team
        Fixed teams, only used by ``DOUBLES_FIXED_TEAMS``.
    """

    id: str = "session"
    name: str = ""
    date: str = ""
    format: str = FORMAT_DOUBLES_ROTATE
    courts: int = DEFAULT_COURTS
    rounds: int = DEFAULT_ROUNDS
    prefer_mixed: bool = False
    teams: List[Team] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "format": self.format,
            "courts": self.courts,
            "rounds": self.rounds,
            "prefer_mixed": self.prefer_mixed,
            "teams": [team.to_dict() for team in self.teams],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Deserialize configuration from dictionary, clamping courts and rounds."""
        prefer_mixed: Optional[Any] = data.get("prefer_mixed", data.get("preferMixed"))
        return cls(
            id=str(data.get("id") or "session"),
            name=str(data.get("name") or ""),
            date=str(data.get("date") or ""),
            format=str(data.get("format") or FORMAT_DOUBLES_ROTATE).upper(),
            courts=clamp_int(data.get("courts"), MIN_COURTS, MAX_COURTS, DEFAULT_COURTS),
            rounds=clamp_int(data.get("rounds"), MIN_ROUNDS, MAX_ROUNDS, DEFAULT_ROUNDS),
            prefer_mixed=bool(prefer_mixed),
            teams=[Team.from_dict(t) for t in data.get("teams") or []],
        )
