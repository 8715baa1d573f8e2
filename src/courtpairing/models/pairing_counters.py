"""Repeat counters owned by a single schedule generation."""

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
from typing import Any, Dict, Iterable

from courtpairing.type_hints import PairKey


def pair_key(id_a: str, id_b: str) -> PairKey:
    """Canonical key for an unordered pair of ids."""
    return (id_a, id_b) if id_a <= id_b else (id_b, id_a)


@dataclass
class PairingCounters:
    """
    Tallies partnerships, opponent encounters and games played.

    A fresh instance is created for every generation call and threaded
    through the assigners; it is never persisted or shared between calls.
    All counts are derived data.

    Attributes
    ----------
    partner_count : dict of PairKey to int
        Times two players were teamed together.
    opponent_count : dict of PairKey to int
        Times two players (or teams) faced each other.
    games_played : dict of str to int
        Rounds each entity has been active in.
    """

    partner_count: Dict[PairKey, int] = field(default_factory=dict)
    opponent_count: Dict[PairKey, int] = field(default_factory=dict)
    games_played: Dict[str, int] = field(default_factory=dict)

    def partners(self, id_a: str, id_b: str) -> int:
        return self.partner_count.get(pair_key(id_a, id_b), 0)

    def opponents(self, id_a: str, id_b: str) -> int:
        return self.opponent_count.get(pair_key(id_a, id_b), 0)

    def games(self, entity_id: str) -> int:
        return self.games_played.get(entity_id, 0)

    def add_partners(self, id_a: str, id_b: str, by: int = 1) -> None:
        """Record that two players were teamed together."""
        key = pair_key(id_a, id_b)
        self.partner_count[key] = self.partner_count.get(key, 0) + by

    def add_opponents(self, id_a: str, id_b: str, by: int = 1) -> None:
        """Record that two players or teams faced each other."""
        key = pair_key(id_a, id_b)
        self.opponent_count[key] = self.opponent_count.get(key, 0) + by

    def add_games(self, entity_ids: Iterable[str], by: int = 1) -> None:
        """Record one more round of play for each entity."""
        for entity_id in entity_ids:
            self.games_played[entity_id] = self.games_played.get(entity_id, 0) + by

    def seed_games(self, entity_ids: Iterable[str]) -> None:
        """Make sure every entity has an explicit zero entry."""
        for entity_id in entity_ids:
            self.games_played.setdefault(entity_id, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot for debugging and reports."""
        return {
            "partner_count": {"|".join(k): v for k, v in self.partner_count.items()},
            "opponent_count": {
                "|".join(k): v for k, v in self.opponent_count.items()
            },
            "games_played": dict(self.games_played),
        }
