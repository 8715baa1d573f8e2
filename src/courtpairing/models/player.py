"""Player and fixed-team data classes."""

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
from typing import Any, Dict, Optional, Tuple

from courtpairing.constants import GENDER_FEMALE, GENDER_MALE, GENDER_UNKNOWN


def normalize_gender(value: Optional[str]) -> str:
    """Map any stored gender marker onto M, F or X (unknown)."""
    if value is None:
        return GENDER_UNKNOWN
    marker = str(value).strip().upper()[:1]
    if marker == GENDER_MALE:
        return GENDER_MALE
    if marker in (GENDER_FEMALE, "W"):
        return GENDER_FEMALE
    return GENDER_UNKNOWN


@dataclass(frozen=True)
class Player:
    """A rostered player.

    Players are immutable once referenced by a match; edits produce a new
    instance with the same id.

    Attributes
    ----------
    id : str
        Stable player identifier.
    club_id : str
        Club the player represents.
    gender : str
        ``"M"``, ``"F"`` or ``"X"`` when unknown.
    display_name : str
        Name shown on score sheets and exports.
    division_id : str or None
        Skill division, used by the club round-robin variant.
    """

    id: str
    club_id: str = ""
    gender: str = GENDER_UNKNOWN
    display_name: str = ""
    division_id: Optional[str] = None

    @property
    def gender_known(self) -> bool:
        return self.gender in (GENDER_MALE, GENDER_FEMALE)

    def name_or(self, fallback: str) -> str:
        """Return the display name, or ``fallback`` when blank."""
        name = self.display_name.strip()
        return name if name else fallback

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "club_id": self.club_id,
            "gender": self.gender,
            "display_name": self.display_name,
            "division_id": self.division_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary.

        Accepts the legacy ``name`` / ``firstName`` + ``lastName`` shapes.
        """
        name = data.get("display_name", data.get("displayName", data.get("name")))
        if not str(name or "").strip():
            first = str(data.get("firstName") or "").strip()
            last = str(data.get("lastName") or "").strip()
            name = f"{first} {last}".strip()
        return cls(
            id=str(data["id"]),
            club_id=str(data.get("club_id", data.get("clubId")) or ""),
            gender=normalize_gender(data.get("gender")),
            display_name=str(name or "").strip(),
            division_id=data.get("division_id", data.get("divisionId")),
        )


@dataclass(frozen=True)
class Team:
    """A user-defined doubles team that persists across rounds.

    Attributes
    ----------
    id : str
        Stable team identifier.
    players : tuple of str
        The two player ids of the team.
    """

    id: str
    players: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {"id": self.id, "players": list(self.players)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        return cls(
            id=str(data["id"]), players=tuple(str(p) for p in data.get("players", []))
        )
