"""Selection of the entities that play in a round."""

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

from itertools import groupby
from typing import List, Mapping, Sequence

from courtpairing.type_hints import RandomSource
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def select_active(
    candidate_ids: Sequence[str],
    count: int,
    games_played: Mapping[str, int],
    rng: RandomSource,
) -> List[str]:
    """Pick the ``count`` entities that have played the least.

    Candidates are ordered by games played; every run of equal games played
    is shuffled with ``rng`` so insertion order never decides who sits out.
    With a stable pool this keeps the games-played spread at most 1.

    Args:
        candidate_ids: Player or team ids eligible this round
        count: Number of entities wanted
        games_played: Games played so far, missing ids count as zero
        rng: Source used to shuffle ties

    Returns:
        The selected ids, least-played first. The whole (reordered) pool
        when ``count`` is at least its size.
    """
    ordered = sorted(candidate_ids, key=lambda entity: games_played.get(entity, 0))

    selection: List[str] = []
    for _, group in groupby(ordered, key=lambda entity: games_played.get(entity, 0)):
        tied = list(group)
        rng.shuffle(tied)
        selection.extend(tied)

    if count < len(selection):
        logger.debug(
            f"Selected {count} of {len(selection)} candidates, "
            f"sitting out: {selection[count:]}"
        )
    return selection[: max(count, 0)]
