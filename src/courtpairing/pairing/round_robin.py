"""Circle-method round-robin for club-vs-club divisions.

Unlike the greedy session formats this is a covering schedule: for N
entities every unordered pair meets exactly once, in N - 1 rounds (N even)
or N rounds with one bye each (N odd).
"""

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

from typing import Iterable, List, Optional, Sequence, Set, Tuple

from courtpairing.constants import BYE
from courtpairing.models.match import ClubMatch, make_match_id, make_match_key
from courtpairing.models.tournament import SeededEvent
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

ClubPair = Tuple[str, str]


class RoundRobin:
    """Full rotation of a fixed list of entities.

    Position 0 stays fixed; the other positions rotate one step per round
    (the last moves to the front) and position i meets position N - 1 - i.
    Odd fields get a bye placeholder whose pairings are skipped. Every pair
    is returned sorted by id.
    """

    def __init__(self, entity_ids: Sequence[str]):
        self.entity_ids: List[str] = list(entity_ids)
        self.has_bye: bool = len(self.entity_ids) % 2 == 1
        self.rounds: List[List[ClubPair]] = self._build_rounds()

    @property
    def number_of_rounds(self) -> int:
        return len(self.rounds)

    def get_round_pairings(self, round_number: int) -> List[ClubPair]:
        """Pairs of a round (1-indexed); empty past the last round."""
        if 1 <= round_number <= len(self.rounds):
            return list(self.rounds[round_number - 1])
        return []

    def all_pairs(self) -> List[ClubPair]:
        return [pair for pairs in self.rounds for pair in pairs]

    def _build_rounds(self) -> List[List[ClubPair]]:
        if len(self.entity_ids) < 2:
            return []

        positions = list(self.entity_ids)
        if self.has_bye:
            positions.append(BYE)

        n = len(positions)
        rounds: List[List[ClubPair]] = []
        for _ in range(n - 1):
            pairs: List[ClubPair] = []
            for i in range(n // 2):
                a, b = positions[i], positions[n - 1 - i]
                if BYE in (a, b):
                    continue
                first, second = sorted((a, b))
                pairs.append((first, second))
            rounds.append(pairs)

            rest = positions[1:]
            positions = [positions[0], rest[-1]] + rest[:-1]

        return rounds


def create_round_robin(entity_ids: Iterable[str]) -> RoundRobin:
    """Create a round-robin over ``entity_ids`` in the given order."""
    round_robin = RoundRobin(list(entity_ids))
    logger.debug(
        "Round robin for %d entities: %d rounds",
        len(round_robin.entity_ids),
        round_robin.number_of_rounds,
    )
    return round_robin


def _club_match(
    division_id: str,
    event: SeededEvent,
    pair: ClubPair,
    round_number: int,
    matchup_index: int,
) -> ClubMatch:
    club_a, club_b = sorted(pair)
    return ClubMatch(
        id=make_match_id(division_id, event.event_type, event.seed, club_a, club_b),
        division_id=division_id,
        round=round_number,
        matchup_index=matchup_index,
        event_type=event.event_type,
        seed=event.seed,
        club_a=club_a,
        club_b=club_b,
    )


def generate_division_matches(
    division_id: str,
    club_ids: Sequence[str],
    seeded_events: Sequence[SeededEvent],
) -> List[ClubMatch]:
    """Complete round-robin of a division, one match per seeded event per pairing.

    Args:
        division_id: Division being scheduled
        club_ids: Participating clubs in configuration order
        seeded_events: Event slots played in every club matchup

    Returns:
        Matches ordered by round, matchup and event
    """
    round_robin = create_round_robin(club_ids)
    matches: List[ClubMatch] = []
    for round_index, pairs in enumerate(round_robin.rounds):
        for matchup_index, pair in enumerate(pairs):
            for event in seeded_events:
                matches.append(
                    _club_match(division_id, event, pair, round_index + 1, matchup_index)
                )
    return matches


def extend_division_matches(
    division_id: str,
    club_ids: Sequence[str],
    seeded_events: Sequence[SeededEvent],
    covered_keys: Set[str],
    last_round: int = 0,
    round_robin: Optional[RoundRobin] = None,
) -> List[ClubMatch]:
    """Matches still missing from a division, appended after ``last_round``.

    The rotation is replayed; each rotation round that has uncovered keys
    becomes one new round numbered after the existing maximum, with matchup
    indexes counting only the pairs that gained a match. Rotation rounds
    already fully covered consume no round number.

    Args:
        division_id: Division being extended
        club_ids: Participating clubs in configuration order
        seeded_events: Event slots played in every club matchup
        covered_keys: Keys (see :func:`make_match_key`) already scheduled
        last_round: Highest round number already used by the division
        round_robin: Precomputed rotation for ``club_ids``

    Returns:
        The new matches only
    """
    rotation = round_robin or create_round_robin(club_ids)
    seen = set(covered_keys)
    additions: List[ClubMatch] = []
    next_round = last_round + 1

    for pairs in rotation.rounds:
        round_matches: List[ClubMatch] = []
        matchup_index = 0
        for pair in pairs:
            added_for_pair = False
            for event in seeded_events:
                key = make_match_key(
                    division_id, event.event_type, event.seed, pair[0], pair[1]
                )
                if key in seen:
                    continue
                round_matches.append(
                    _club_match(division_id, event, pair, next_round, matchup_index)
                )
                seen.add(key)
                added_for_pair = True
            if added_for_pair:
                matchup_index += 1

        if round_matches:
            additions.extend(round_matches)
            next_round += 1

    return additions
