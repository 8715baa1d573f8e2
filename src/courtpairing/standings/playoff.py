"""Playoff override of the head of a club standings table.

Regular-season standings decide who reaches the playoff; playoff matches
then decide the final order of 1st/2nd and, with four or more clubs,
3rd/4th. The statistics shown for each club stay the regular-season ones.
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

from typing import Dict, List, Sequence, Tuple

from courtpairing.models.match import ClubMatch
from courtpairing.models.standing import Standing
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def playoff_ready(matches: Sequence[ClubMatch]) -> bool:
    """True when playoff matches exist and every one of them is scored."""
    playoffs = [m for m in matches if m.is_playoff]
    return bool(playoffs) and all(m.is_scored for m in playoffs)


def playoff_aggregates(matches: Sequence[ClubMatch]) -> Dict[str, Standing]:
    """Per-club results over playoff matches only; ties are ignored."""
    rows: Dict[str, Standing] = {}
    for match in matches:
        if not match.is_playoff or not match.is_decided:
            continue
        rows.setdefault(match.club_a, Standing(id=match.club_a)).record(
            match.score.a, match.score.b
        )
        rows.setdefault(match.club_b, Standing(id=match.club_b)).record(
            match.score.b, match.score.a
        )
    return rows


def _resolve_pair(
    higher: Standing, lower: Standing, playoff_rows: Dict[str, Standing]
) -> Tuple[Standing, Standing]:
    """Winner and loser of a decisive pair; base order breaks a full tie."""

    def playoff_key(row: Standing) -> Tuple[int, int, int]:
        stats = playoff_rows.get(row.id, Standing(id=row.id))
        return (stats.wins, stats.point_diff, stats.points_for)

    if playoff_key(lower) > playoff_key(higher):
        return lower, higher
    return higher, lower


def apply_playoff_override(
    base: Sequence[Standing], matches: Sequence[ClubMatch]
) -> List[Standing]:
    """Reorder the head of ``base`` by playoff results.

    Args:
        base: Standings sorted by the regular tie-break chain
        matches: Matches of the same scope, playoff and regular

    Returns:
        The reordered table; ``base`` itself when playoffs are absent or
        not fully scored
    """
    rows = list(base)
    if len(rows) < 2 or not playoff_ready(matches):
        return rows

    playoff_rows = playoff_aggregates(matches)
    head: List[Standing] = []
    pair_count = 2 if len(rows) >= 4 else 1
    for index in range(pair_count):
        winner, loser = _resolve_pair(
            rows[2 * index], rows[2 * index + 1], playoff_rows
        )
        head.extend([winner, loser])

    logger.debug(f"Playoff order: {[row.id for row in head]}")
    return head + rows[len(head):]
