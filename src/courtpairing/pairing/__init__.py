"""Pairing building blocks shared by every schedule format."""

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

from courtpairing.pairing.active_selector import select_active
from courtpairing.pairing.opponent_assigner import assign_opponents, opponent_score
from courtpairing.pairing.partner_assigner import assign_partners, mixed_penalty
from courtpairing.pairing.round_robin import (
    RoundRobin,
    create_round_robin,
    extend_division_matches,
    generate_division_matches,
)

__all__ = [
    "RoundRobin",
    "assign_opponents",
    "assign_partners",
    "create_round_robin",
    "extend_division_matches",
    "generate_division_matches",
    "mixed_penalty",
    "opponent_score",
    "select_active",
]
