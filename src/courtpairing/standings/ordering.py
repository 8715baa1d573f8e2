"""Ordering of standings tables."""

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

from typing import Iterable, List, Tuple

from courtpairing.models.standing import Standing


def standings_sort_key(row: Standing) -> Tuple[int, int, int, str, str]:
    """Wins, point diff and points for descending, then name and id ascending.

    A blank name sorts as the row id, so the order is total.
    """
    return (
        -row.wins,
        -row.point_diff,
        -row.points_for,
        (row.name or row.id).casefold(),
        row.id,
    )


def sort_standings(rows: Iterable[Standing]) -> List[Standing]:
    return sorted(rows, key=standings_sort_key)
