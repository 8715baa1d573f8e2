"""Club-vs-club round-robin scheduling across divisions."""

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

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

from courtpairing.constants import (
    COURTS_BY_EVENT_AND_SEED,
    EVENT_MENS_DOUBLES,
    EVENT_MIXED_DOUBLES,
    EVENT_WOMENS_DOUBLES,
    GENDER_FEMALE,
    GENDER_MALE,
    UNASSIGNED_COURT,
)
from courtpairing.models.match import ClubMatch
from courtpairing.models.player import Player
from courtpairing.models.tournament import (
    ClubTournament,
    DivisionConfig,
    SeedAssignment,
    seed_key,
)
from courtpairing.pairing.round_robin import (
    extend_division_matches,
    generate_division_matches,
)
from courtpairing.scheduling.engine import replace_schedule
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def court_for(match: ClubMatch) -> int:
    """Court of a match from its event, seed and matchup slot.

    Two matchups are played simultaneously per round; later matchups and
    unmapped seeds stay unassigned.
    """
    courts = COURTS_BY_EVENT_AND_SEED.get(match.event_type, {}).get(match.seed)
    if courts is None or not 0 <= match.matchup_index < len(courts):
        return UNASSIGNED_COURT
    return courts[match.matchup_index]


def assign_courts(matches: Iterable[ClubMatch]) -> List[ClubMatch]:
    """Return the matches with court numbers filled from the court map."""
    return [replace(match, court=court_for(match)) for match in matches]


class ClubScheduler:
    """Builds and maintains the round-robin schedule of a club tournament.

    Each division runs its own round-robin among its participating clubs,
    with one match per seeded event for every club pairing.
    """

    def generate(self, tournament: ClubTournament) -> List[ClubMatch]:
        """Full schedule for every division, without scores."""
        matches: List[ClubMatch] = []
        for division in tournament.divisions:
            club_ids = tournament.participating_clubs(division.id)
            division_matches = generate_division_matches(
                division.id, club_ids, tournament.seeded_events
            )
            logger.info(
                f"Division {division.code or division.id}: {len(club_ids)} clubs, "
                f"{len(division_matches)} matches"
            )
            matches.extend(division_matches)
        return assign_courts(matches)

    def regenerate(self, tournament: ClubTournament) -> List[ClubMatch]:
        """Rebuild the schedule, keeping scores of matches that survive.

        Match ids are deterministic, so a score entered for a pairing is
        re-attached to the same pairing in the new schedule.
        """
        previous: Dict[str, ClubMatch] = {m.id: m for m in tournament.matches}
        merged: List[ClubMatch] = []
        for match in self.generate(tournament):
            prior = previous.get(match.id)
            if prior is not None and prior.score is not None:
                match = replace(
                    match, score=prior.score, completed_at=prior.completed_at
                )
            merged.append(match)
        return replace_schedule(tournament.matches, merged)

    def add_missing(self, tournament: ClubTournament) -> List[ClubMatch]:
        """Append the matches the current schedule lacks.

        Existing matches are returned first and untouched; new matches are
        numbered after each division's last round.
        """
        existing = list(tournament.matches)
        covered = {match.key for match in existing}
        additions: List[ClubMatch] = []

        for division in tournament.divisions:
            last_round = max(
                (m.round for m in existing if m.division_id == division.id), default=0
            )
            additions.extend(
                extend_division_matches(
                    division.id,
                    tournament.participating_clubs(division.id),
                    tournament.seeded_events,
                    covered,
                    last_round=last_round,
                )
            )

        logger.info(f"Added {len(additions)} missing matches")
        return existing + assign_courts(additions)


def _roster_slots(
    players: Sequence[Player], division_id: str, club_id: str, gender: str
) -> List[Optional[str]]:
    ids = [
        p.id
        for p in players
        if p.club_id == club_id and p.gender == gender and p.division_id == division_id
    ]
    return (ids + [None] * 4)[:4]


def auto_seed_division(
    config: DivisionConfig,
    division_id: str,
    players: Sequence[Player],
    club_ids: Optional[Sequence[str]] = None,
) -> DivisionConfig:
    """Fill a division's seed mappings from club roster order.

    Women #1 pairs the first two women of the club, Women #2 the next two;
    men likewise; Mixed #k pairs the k-th woman with the k-th man. Missing
    roster slots are left empty.

    Args:
        config: Division config to start from (not modified)
        division_id: Division being seeded
        players: Roster across clubs
        club_ids: Clubs to seed; every club with players when omitted

    Returns:
        A new DivisionConfig
    """
    if club_ids is None:
        club_ids = list(dict.fromkeys(p.club_id for p in players if p.club_id))

    seeds_by_club = {club: dict(record) for club, record in config.seeds_by_club.items()}
    for club_id in club_ids:
        women = _roster_slots(players, division_id, club_id, GENDER_FEMALE)
        men = _roster_slots(players, division_id, club_id, GENDER_MALE)
        record = seeds_by_club.setdefault(club_id, {})

        record[seed_key(EVENT_WOMENS_DOUBLES, 1)] = SeedAssignment((women[0], women[1]))
        record[seed_key(EVENT_WOMENS_DOUBLES, 2)] = SeedAssignment((women[2], women[3]))
        record[seed_key(EVENT_MENS_DOUBLES, 1)] = SeedAssignment((men[0], men[1]))
        record[seed_key(EVENT_MENS_DOUBLES, 2)] = SeedAssignment((men[2], men[3]))
        for k in range(4):
            record[seed_key(EVENT_MIXED_DOUBLES, k + 1)] = SeedAssignment(
                (women[k], men[k])
            )

    return replace(
        config, seeds_by_club=seeds_by_club, club_enabled=dict(config.club_enabled)
    )
