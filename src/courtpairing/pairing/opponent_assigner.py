"""Greedy pairing of sides into matches with minimal repeat encounters."""

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

from typing import List, Optional, Sequence

from courtpairing.models.pairing_counters import PairingCounters
from courtpairing.type_hints import RoundPairings, Side


def opponent_score(side_a: Side, side_b: Side, counters: PairingCounters) -> int:
    """Sum of previous encounters over every cross pair of the two sides."""
    return sum(counters.opponents(p, q) for p in side_a for q in side_b)


def assign_opponents(
    sides: Sequence[Side],
    counters: PairingCounters,
    max_matches: Optional[int] = None,
) -> RoundPairings:
    """Pair sides into matches, least-met opponents first.

    Works for singles (one player per side), doubles pairs, and fixed teams
    (one team id per side, with team-level counters). The first remaining
    side takes the opponent with the lowest score; the earliest candidate
    wins ties. Every cross pair of an emitted match is recorded in
    ``counters``.

    Args:
        sides: Sides to pair, in priority order
        counters: Counters of the current generation, updated in place
        max_matches: Stop once this many matches exist (court limit)

    Returns:
        List of (side_a, side_b) pairings
    """
    remaining = [tuple(side) for side in sides]
    pairings: RoundPairings = []

    while len(remaining) >= 2:
        if max_matches is not None and len(pairings) >= max_matches:
            break
        side_a = remaining.pop(0)
        best_index = 0
        best_score = None
        for index, candidate in enumerate(remaining):
            score = opponent_score(side_a, candidate, counters)
            if best_score is None or score < best_score:
                best_score = score
                best_index = index
        side_b = remaining.pop(best_index)
        for p in side_a:
            for q in side_b:
                counters.add_opponents(p, q)
        pairings.append((side_a, side_b))

    return pairings
