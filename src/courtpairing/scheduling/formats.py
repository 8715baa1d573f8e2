"""Session formats.

Each format implements the same three steps per round: choose the active
entities, turn them into sides, pair the sides into matches. Formats are
looked up by name in :data:`FORMAT_REGISTRY`; a new format only needs a
subclass decorated with :func:`register_format`.
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

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Type

from courtpairing.constants import (
    FORMAT_DOUBLES_FIXED_TEAMS,
    FORMAT_DOUBLES_ROTATE,
    FORMAT_SINGLES,
)
from courtpairing.exceptions import (
    InsufficientPlayersException,
    InsufficientTeamsException,
    InvalidTeamException,
    UnsupportedFormatException,
)
from courtpairing.models.pairing_counters import PairingCounters
from courtpairing.models.player import Player, Team
from courtpairing.models.session_config import SessionConfig
from courtpairing.pairing.active_selector import select_active
from courtpairing.pairing.opponent_assigner import assign_opponents
from courtpairing.pairing.partner_assigner import assign_partners
from courtpairing.type_hints import RandomSource, RoundPairings, Side, SidePairing


@dataclass
class GenerationContext:
    """State owned by one schedule generation call.

    Attributes
    ----------
    config : SessionConfig
        Session parameters.
    players : list of Player
        Roster, unique by id, in roster order.
    rng : RandomSource
        Tie-break shuffler.
    counters : PairingCounters
        Player-level partner/opponent/games counters.
    team_counters : PairingCounters
        Team-level counters for the fixed-team format, independent of
        ``counters``.
    """

    config: SessionConfig
    players: List[Player]
    rng: RandomSource
    counters: PairingCounters = field(default_factory=PairingCounters)
    team_counters: PairingCounters = field(default_factory=PairingCounters)

    @property
    def player_ids(self) -> List[str]:
        return [player.id for player in self.players]

    @property
    def genders(self) -> Dict[str, str]:
        return {player.id: player.gender for player in self.players}

    @property
    def teams_by_id(self) -> Dict[str, Team]:
        return {team.id: team for team in self.config.teams}


class SessionFormat(ABC):
    """Contract every session format implements."""

    name: str = ""
    # Entities per side and sides per match, used to size the active set
    entities_per_match: int = 2

    def validate(self, context: GenerationContext) -> None:
        """Raise a ValidationException when the session cannot be scheduled."""

    def seed_counters(self, context: GenerationContext) -> None:
        """Start every rostered player at zero games played."""
        context.counters.seed_games(context.player_ids)

    def pool(self, context: GenerationContext) -> List[str]:
        """Ids the active set is drawn from."""
        return context.player_ids

    def pool_games(self, context: GenerationContext) -> Dict[str, int]:
        return context.counters.games_played

    def active_count(self, context: GenerationContext) -> int:
        """Largest active set that fills whole matches within the court limit."""
        per_match = self.entities_per_match
        pool_size = len(self.pool(context))
        return min(pool_size - pool_size % per_match, context.config.courts * per_match)

    def select_active(self, context: GenerationContext) -> List[str]:
        return select_active(
            self.pool(context),
            self.active_count(context),
            self.pool_games(context),
            context.rng,
        )

    @abstractmethod
    def form_sides(self, active: List[str], context: GenerationContext) -> List[Side]:
        """Group the active entities into sides."""

    def pair_into_matches(
        self, sides: List[Side], context: GenerationContext
    ) -> RoundPairings:
        return assign_opponents(
            sides, context.counters, max_matches=context.config.courts
        )

    def match_sides(
        self, pairing: SidePairing, context: GenerationContext
    ) -> Tuple[Side, Side]:
        """Player ids of both sides of a pairing."""
        return pairing

    def record_played(self, pairing: SidePairing, context: GenerationContext) -> None:
        side_a, side_b = self.match_sides(pairing, context)
        context.counters.add_games(side_a + side_b)


FORMAT_REGISTRY: Dict[str, Type[SessionFormat]] = {}


def register_format(cls: Type[SessionFormat]) -> Type[SessionFormat]:
    """Class decorator adding a format to the registry under ``cls.name``."""
    FORMAT_REGISTRY[cls.name] = cls
    return cls


def get_format(name: str) -> SessionFormat:
    """Instantiate the registered format called ``name``.

    Raises:
        UnsupportedFormatException: If no format has that name
    """
    try:
        return FORMAT_REGISTRY[name]()
    except KeyError:
        raise UnsupportedFormatException(
            f"Unsupported format '{name}'. Expected one of: "
            f"{', '.join(sorted(FORMAT_REGISTRY))}"
        ) from None


@register_format
class RotatingDoubles(SessionFormat):
    """Doubles with fresh partners every round."""

    name = FORMAT_DOUBLES_ROTATE
    entities_per_match = 4

    def validate(self, context: GenerationContext) -> None:
        if len(context.players) < 4:
            raise InsufficientPlayersException(
                f"Need at least 4 players for doubles, got {len(context.players)}."
            )

    def form_sides(self, active: List[str], context: GenerationContext) -> List[Side]:
        return list(
            assign_partners(
                active,
                context.counters,
                context.genders,
                prefer_mixed=context.config.prefer_mixed,
            )
        )


@register_format
class Singles(SessionFormat):
    """One player per side."""

    name = FORMAT_SINGLES
    entities_per_match = 2

    def validate(self, context: GenerationContext) -> None:
        if len(context.players) < 2:
            raise InsufficientPlayersException(
                f"Need at least 2 players for singles, got {len(context.players)}."
            )

    def form_sides(self, active: List[str], context: GenerationContext) -> List[Side]:
        return [(player_id,) for player_id in active]


@register_format
class FixedTeams(SessionFormat):
    """Doubles with user-defined teams that stay together all session.

    Teams are selected and paired by team id against the team-level
    counters; player games played are still tracked for reporting.
    """

    name = FORMAT_DOUBLES_FIXED_TEAMS
    entities_per_match = 2

    def validate(self, context: GenerationContext) -> None:
        teams = context.config.teams
        if len(teams) < 2:
            raise InsufficientTeamsException(
                f"Add at least 2 fixed teams for this session, got {len(teams)}."
            )

        rostered = set(context.player_ids)
        owner: Dict[str, str] = {}
        for team in teams:
            if len(team.players) != 2 or team.players[0] == team.players[1]:
                raise InvalidTeamException(
                    f"Team {team.id} must have exactly two different players."
                )
            for player_id in team.players:
                if player_id not in rostered:
                    raise InvalidTeamException(
                        f"Team {team.id} references unknown player {player_id}."
                    )
                if player_id in owner:
                    raise InvalidTeamException(
                        f"Player {player_id} is in both team {owner[player_id]} "
                        f"and team {team.id}."
                    )
                owner[player_id] = team.id

        if len(context.teams_by_id) != len(teams):
            raise InvalidTeamException("Fixed team ids must be unique.")

    def pool(self, context: GenerationContext) -> List[str]:
        return [team.id for team in context.config.teams]

    def seed_counters(self, context: GenerationContext) -> None:
        super().seed_counters(context)
        context.team_counters.seed_games(self.pool(context))

    def pool_games(self, context: GenerationContext) -> Dict[str, int]:
        return context.team_counters.games_played

    def form_sides(self, active: List[str], context: GenerationContext) -> List[Side]:
        return [(team_id,) for team_id in active]

    def pair_into_matches(
        self, sides: List[Side], context: GenerationContext
    ) -> RoundPairings:
        return assign_opponents(
            sides, context.team_counters, max_matches=context.config.courts
        )

    def match_sides(
        self, pairing: SidePairing, context: GenerationContext
    ) -> Tuple[Side, Side]:
        teams = context.teams_by_id
        (team_a,), (team_b,) = pairing
        return tuple(teams[team_a].players), tuple(teams[team_b].players)

    def record_played(self, pairing: SidePairing, context: GenerationContext) -> None:
        context.team_counters.add_games(pairing[0] + pairing[1])
        super().record_played(pairing, context)
