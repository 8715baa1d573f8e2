"""Club round-robin tournament data classes."""

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
from typing import Any, Dict, List, Optional, Tuple

from courtpairing.constants import (
    EVENT_MENS_DOUBLES,
    EVENT_MIXED_DOUBLES,
    EVENT_WOMENS_DOUBLES,
)
from courtpairing.models.match import ClubMatch
from courtpairing.models.player import Player


def seed_key(event_type: str, seed: int) -> str:
    """Key of a seeded event inside a club's seed mapping."""
    return f"{event_type}:{seed}"


@dataclass(frozen=True)
class Club:
    id: str
    name: str = ""
    code: str = ""

    @property
    def display_name(self) -> str:
        return self.name.strip() or self.id

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "code": self.code}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Club":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name") or ""),
            code=str(data.get("code") or data["id"]),
        )


@dataclass(frozen=True)
class Division:
    id: str
    code: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "code": self.code, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Division":
        return cls(
            id=str(data["id"]),
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class SeededEvent:
    """An event line-up slot every club fields once per matchup (e.g. Mixed #3)."""

    event_type: str
    seed: int
    label: str

    @property
    def key(self) -> str:
        return seed_key(self.event_type, self.seed)


SEEDED_EVENTS: List[SeededEvent] = [
    SeededEvent(EVENT_WOMENS_DOUBLES, 1, "Women #1"),
    SeededEvent(EVENT_WOMENS_DOUBLES, 2, "Women #2"),
    SeededEvent(EVENT_MENS_DOUBLES, 1, "Men #1"),
    SeededEvent(EVENT_MENS_DOUBLES, 2, "Men #2"),
    SeededEvent(EVENT_MIXED_DOUBLES, 1, "Mixed #1"),
    SeededEvent(EVENT_MIXED_DOUBLES, 2, "Mixed #2"),
    SeededEvent(EVENT_MIXED_DOUBLES, 3, "Mixed #3"),
    SeededEvent(EVENT_MIXED_DOUBLES, 4, "Mixed #4"),
]


def event_label(event_type: str, seed: int) -> str:
    """Human label of a seeded event, e.g. ``"Men #2"``."""
    for event in SEEDED_EVENTS:
        if event.event_type == event_type and event.seed == seed:
            return event.label
    return f"{event_type} #{seed}"


@dataclass(frozen=True)
class SeedAssignment:
    """Players fielded by one club for one seeded event.

    A slot may be empty while the roster is being filled in; the seed only
    counts as mapped when both slots hold a player id.
    """

    player_ids: Tuple[Optional[str], Optional[str]] = (None, None)

    @property
    def is_complete(self) -> bool:
        return all(self.player_ids) and len(self.player_ids) == 2

    def to_dict(self) -> Dict[str, Any]:
        return {"player_ids": list(self.player_ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeedAssignment":
        ids = list(data.get("player_ids", data.get("playerIds")) or [])
        ids = (ids + [None, None])[:2]
        return cls(player_ids=(ids[0] or None, ids[1] or None))


@dataclass
class DivisionConfig:
    """Per-division seed mappings and club participation flags.

    Attributes
    ----------
    division_id : str
        Division this config applies to.
    seeds_by_club : dict
        club id -> seed key -> :class:`SeedAssignment`.
    club_enabled : dict of str to bool
        Participation toggle; clubs missing from the mapping are enabled.
    """

    division_id: str
    seeds_by_club: Dict[str, Dict[str, SeedAssignment]] = field(default_factory=dict)
    club_enabled: Dict[str, bool] = field(default_factory=dict)

    def is_club_enabled(self, club_id: str) -> bool:
        return self.club_enabled.get(club_id) is not False

    def players_for(
        self, club_id: str, event_type: str, seed: int
    ) -> Optional[Tuple[str, str]]:
        """Return the club's complete pair for a seeded event, or None."""
        entry = self.seeds_by_club.get(club_id, {}).get(seed_key(event_type, seed))
        if entry is None or not entry.is_complete:
            return None
        return entry.player_ids[0], entry.player_ids[1]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "division_id": self.division_id,
            "seeds_by_club": {
                club_id: {key: entry.to_dict() for key, entry in record.items()}
                for club_id, record in self.seeds_by_club.items()
            },
            "club_enabled": dict(self.club_enabled),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DivisionConfig":
        seeds = data.get("seeds_by_club", data.get("seedsByClub")) or {}
        return cls(
            division_id=str(data.get("division_id", data.get("divisionId"))),
            seeds_by_club={
                str(club_id): {
                    str(key): SeedAssignment.from_dict(entry)
                    for key, entry in (record or {}).items()
                }
                for club_id, record in seeds.items()
            },
            club_enabled={
                str(k): bool(v)
                for k, v in (
                    data.get("club_enabled", data.get("clubEnabled")) or {}
                ).items()
            },
        )


@dataclass
class ClubTournament:
    """Everything the club round-robin engine and standings need.

    Attributes
    ----------
    clubs : list of Club
        Competing clubs, in configuration order.
    divisions : list of Division
        Skill divisions; each runs its own round-robin.
    players : list of Player
        Roster across all clubs and divisions.
    division_configs : list of DivisionConfig
        Seed mappings and participation per division.
    matches : list of ClubMatch
        Current schedule, possibly scored.
    seeded_events : list of SeededEvent
        Event slots played in every club matchup.
    """

    clubs: List[Club] = field(default_factory=list)
    divisions: List[Division] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    division_configs: List[DivisionConfig] = field(default_factory=list)
    matches: List[ClubMatch] = field(default_factory=list)
    seeded_events: List[SeededEvent] = field(
        default_factory=lambda: list(SEEDED_EVENTS)
    )

    def division_config(self, division_id: str) -> Optional[DivisionConfig]:
        for config in self.division_configs:
            if config.division_id == division_id:
                return config
        return None

    def participating_clubs(self, division_id: str) -> List[str]:
        """Club ids enabled for a division, in configuration order."""
        config = self.division_config(division_id)
        return [
            club.id
            for club in self.clubs
            if config is None or config.is_club_enabled(club.id)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament state to dictionary."""
        return {
            "clubs": [c.to_dict() for c in self.clubs],
            "divisions": [d.to_dict() for d in self.divisions],
            "players": [p.to_dict() for p in self.players],
            "division_configs": [dc.to_dict() for dc in self.division_configs],
            "matches": [m.to_dict() for m in self.matches],
            "seeded_events": [
                {"event_type": e.event_type, "seed": e.seed, "label": e.label}
                for e in self.seeded_events
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubTournament":
        """Deserialize tournament state from dictionary."""
        events = data.get("seeded_events")
        return cls(
            clubs=[Club.from_dict(c) for c in data.get("clubs", [])],
            divisions=[Division.from_dict(d) for d in data.get("divisions", [])],
            players=[Player.from_dict(p) for p in data.get("players", [])],
            division_configs=[
                DivisionConfig.from_dict(dc)
                for dc in data.get("division_configs", data.get("divisionConfigs", []))
            ],
            matches=[ClubMatch.from_dict(m) for m in data.get("matches", [])],
            seeded_events=(
                [
                    SeededEvent(str(e["event_type"]), int(e["seed"]), str(e["label"]))
                    for e in events
                ]
                if events
                else list(SEEDED_EVENTS)
            ),
        )
