"""Ephemeral doubles partnerships for rotating-partner sessions."""

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

from typing import List, Mapping, Sequence, Tuple

from courtpairing.constants import (
    GENDER_UNKNOWN,
    PARTNER_REPEAT_WEIGHT,
    SAME_GENDER_PENALTY,
)
from courtpairing.models.pairing_counters import PairingCounters
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def mixed_penalty(
    player_a: str, player_b: str, genders: Mapping[str, str], prefer_mixed: bool
) -> int:
    """Penalty for a same-gender pair when mixed pairs are preferred.

    Unknown genders never incur a penalty.
    """
    if not prefer_mixed:
        return 0
    gender_a = genders.get(player_a, GENDER_UNKNOWN)
    gender_b = genders.get(player_b, GENDER_UNKNOWN)
    if GENDER_UNKNOWN in (gender_a, gender_b):
        return 0
    return SAME_GENDER_PENALTY if gender_a == gender_b else 0


def partner_score(
    player_a: str,
    player_b: str,
    counters: PairingCounters,
    genders: Mapping[str, str],
    prefer_mixed: bool,
) -> int:
    return counters.partners(player_a, player_b) * PARTNER_REPEAT_WEIGHT + mixed_penalty(
        player_a, player_b, genders, prefer_mixed
    )


def assign_partners(
    active_ids: Sequence[str],
    counters: PairingCounters,
    genders: Mapping[str, str],
    prefer_mixed: bool = False,
) -> List[Tuple[str, str]]:
    """Greedily form doubles pairs that avoid repeat partnerships.

    The first unassigned player takes the partner with the lowest score;
    one repeat partnership always outweighs the mixed-gender penalty. Each
    emitted pair is recorded in ``counters``. An odd player left over is
    dropped, so callers size ``active_ids`` to an even number.

    Args:
        active_ids: Players active this round, in selection order
        counters: Counters of the current generation, updated in place
        genders: Player id -> gender marker
        prefer_mixed: Penalize same-gender pairs

    Returns:
        List of (player, partner) tuples
    """
    remaining = list(active_ids)
    pairs: List[Tuple[str, str]] = []

    while len(remaining) >= 2:
        first = remaining.pop(0)
        best_index = 0
        best_score = None
        for index, candidate in enumerate(remaining):
            score = partner_score(first, candidate, counters, genders, prefer_mixed)
            if best_score is None or score < best_score:
                best_score = score
                best_index = index
        partner = remaining.pop(best_index)
        counters.add_partners(first, partner)
        pairs.append((first, partner))

    if remaining:
        logger.debug(f"Player {remaining[0]} left without a partner")
    return pairs
