"""Session schedule generation.

This module turns a roster and a session configuration into the full list
of matches for every round, delegating the per-round steps to the session
format registered under the configured name.
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

import random
from typing import Dict, List, Optional, Sequence, TypeVar

from courtpairing.exceptions import InsufficientPlayersException, ValidationException
from courtpairing.models.match import Match
from courtpairing.models.player import Player
from courtpairing.models.session_config import SessionConfig
from courtpairing.scheduling.formats import GenerationContext, SessionFormat, get_format
from courtpairing.type_hints import RandomSource
from courtpairing.utils import generate_id, setup_logger

logger = setup_logger(__name__)

M = TypeVar("M")


def replace_schedule(existing: Sequence[M], generated: Sequence[M]) -> List[M]:
    """Return the schedule that should replace ``existing``.

    An empty result never wipes out a non-empty schedule; the existing
    matches are kept and a warning is logged instead.
    """
    if not generated and existing:
        logger.warning(
            f"Regeneration produced no matches; keeping the existing "
            f"{len(existing)} matches"
        )
        return list(existing)
    return list(generated)


def unique_players(players: Sequence[Player]) -> List[Player]:
    """Roster with duplicate ids removed, first occurrence wins."""
    seen: Dict[str, Player] = {}
    for player in players:
        seen.setdefault(player.id, player)
    return list(seen.values())


class SchedulingEngine:
    """Generates session schedules for the greedy formats.

    This class is responsible for:
    - Looking up the session format and validating the roster against it
    - Running select/partner/opponent steps for every round
    - Numbering courts and attaching ids to the resulting matches
    """

    def __init__(self, rng: Optional[RandomSource] = None):
        """Initialize the engine.

        Args:
            rng: Tie-break source with a ``shuffle`` method; a fresh
                ``random.Random`` when omitted
        """
        self.rng: RandomSource = rng if rng is not None else random.Random()

    def generate(self, config: SessionConfig, players: Sequence[Player]) -> List[Match]:
        """Generate every round of a session.

        Args:
            config: Session parameters (format, courts, rounds, teams)
            players: Roster available for the session

        Returns:
            Matches ordered by round then court

        Raises:
            UnsupportedFormatException: If the format is not registered
            InsufficientPlayersException: If the roster is too small
            InsufficientTeamsException: If fewer than two fixed teams exist
            InvalidTeamException: If a fixed team is malformed
            ValidationException: If courts or rounds are below 1
        """
        session_format = get_format(config.format)
        roster = unique_players(players)
        if not roster:
            raise InsufficientPlayersException("Add players before generating a schedule.")
        if config.courts < 1 or config.rounds < 1:
            raise ValidationException(
                f"Courts and rounds must be at least 1 "
                f"(got courts={config.courts}, rounds={config.rounds})"
            )

        context = GenerationContext(config=config, players=roster, rng=self.rng)
        session_format.validate(context)
        session_format.seed_counters(context)

        matches: List[Match] = []
        for round_number in range(1, config.rounds + 1):
            matches.extend(self._create_round(session_format, context, round_number))

        logger.info(
            f"Generated {len(matches)} matches over {config.rounds} rounds "
            f"({config.format}, {len(roster)} players, {config.courts} courts)"
        )
        return matches

    def regenerate(
        self,
        config: SessionConfig,
        players: Sequence[Player],
        existing: Sequence[Match],
    ) -> List[Match]:
        """Generate a fresh schedule that replaces ``existing``.

        Scores of the previous schedule are not carried over: greedy
        pairings get new random ids every time.
        """
        return replace_schedule(existing, self.generate(config, players))

    def _create_round(
        self,
        session_format: SessionFormat,
        context: GenerationContext,
        round_number: int,
    ) -> List[Match]:
        active = session_format.select_active(context)
        sides = session_format.form_sides(active, context)
        pairings = session_format.pair_into_matches(sides, context)

        matches: List[Match] = []
        for court, pairing in enumerate(pairings, start=1):
            side_a, side_b = session_format.match_sides(pairing, context)
            session_format.record_played(pairing, context)
            matches.append(
                Match(
                    id=generate_id(),
                    round=round_number,
                    court=court,
                    side_a=tuple(side_a),
                    side_b=tuple(side_b),
                    session_id=context.config.id,
                )
            )

        logger.debug(
            f"Round {round_number}: {len(active)} active, {len(matches)} matches"
        )
        return matches
