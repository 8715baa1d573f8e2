"""Standings calculation.

Standings are always derived from the match list; nothing here is stored.
A scored match with equal scores is left out of every aggregate, on both
sides, including the matches played count.
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

from typing import Dict, List, Optional, Sequence, Tuple

from courtpairing.constants import STAGE_REGULAR
from courtpairing.models.match import ClubMatch, Match
from courtpairing.models.player import Player
from courtpairing.models.standing import IndividualCoverage, Standing
from courtpairing.models.tournament import ClubTournament
from courtpairing.standings.ordering import sort_standings
from courtpairing.standings.playoff import apply_playoff_override
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _credit(
    rows: Dict[str, Standing], ids: Sequence[str], scored: int, conceded: int
) -> None:
    for entity_id in ids:
        row = rows.get(entity_id)
        if row is not None:
            row.record(scored, conceded)


def _division_matches(
    matches: Sequence[ClubMatch], division_id: Optional[str]
) -> List[ClubMatch]:
    if division_id is None:
        return list(matches)
    return [m for m in matches if m.division_id == division_id]


def compute_club_standings(
    tournament: ClubTournament,
    division_id: Optional[str] = None,
    apply_playoffs: bool = True,
) -> List[Standing]:
    """Rank clubs by their regular-stage results.

    Every configured club gets a row, even without matches; matches that
    name an unknown club are ignored.

    Args:
        tournament: Clubs and matches to aggregate
        division_id: Restrict to one division; all divisions when None
        apply_playoffs: Reorder the head by playoff results when they are
            complete

    Returns:
        Sorted standings rows
    """
    matches = _division_matches(tournament.matches, division_id)
    rows: Dict[str, Standing] = {
        club.id: Standing(id=club.id, name=club.display_name) for club in tournament.clubs
    }

    for match in matches:
        if match.stage != STAGE_REGULAR or not match.is_decided:
            continue
        if match.club_a not in rows or match.club_b not in rows:
            logger.debug(f"Skipping match {match.id}: unknown club")
            continue
        rows[match.club_a].record(match.score.a, match.score.b)
        rows[match.club_b].record(match.score.b, match.score.a)

    standings = sort_standings(rows.values())
    if apply_playoffs:
        standings = apply_playoff_override(standings, matches)
    return standings


def _mapped_players(
    tournament: ClubTournament, match: ClubMatch
) -> Optional[Tuple[Tuple[str, str], Tuple[str, str]]]:
    """Both clubs' complete player pairs for a match, or None."""
    config = tournament.division_config(match.division_id)
    if config is None:
        return None
    side_a = config.players_for(match.club_a, match.event_type, match.seed)
    side_b = config.players_for(match.club_b, match.event_type, match.seed)
    if side_a is None or side_b is None:
        return None
    return side_a, side_b


def compute_player_standings(tournament: ClubTournament) -> List[Standing]:
    """Rank every roster player by the regular-stage matches they were seeded into.

    A match counts only when both clubs have a complete two-player mapping
    for its seeded event; see :func:`compute_individual_coverage`.
    """
    rows: Dict[str, Standing] = {
        player.id: Standing(
            id=player.id, name=player.display_name, club_id=player.club_id
        )
        for player in tournament.players
    }

    for match in tournament.matches:
        if match.stage != STAGE_REGULAR or not match.is_decided:
            continue
        mapped = _mapped_players(tournament, match)
        if mapped is None:
            continue
        side_a, side_b = mapped
        _credit(rows, side_a, match.score.a, match.score.b)
        _credit(rows, side_b, match.score.b, match.score.a)

    return sort_standings(rows.values())


def compute_individual_coverage(tournament: ClubTournament) -> IndividualCoverage:
    """Count scored matches and how many of them map to individual players.

    Tied matches count as scored here; playoff matches are left out like
    they are in the player table.
    """
    scored = 0
    mapped = 0
    for match in tournament.matches:
        if match.stage != STAGE_REGULAR or not match.is_scored:
            continue
        scored += 1
        if _mapped_players(tournament, match) is not None:
            mapped += 1

    coverage = IndividualCoverage(
        scored_matches=scored, scored_matches_with_player_mapping=mapped
    )
    if not coverage.is_complete:
        logger.warning(
            f"Individual standings only cover {mapped} of {scored} scored matches; "
            "complete the seed mappings to credit the rest"
        )
    return coverage


def top_performers(
    tournament: ClubTournament,
    division_id: str,
    gender: str,
    limit: Optional[int] = 3,
    standings: Optional[Sequence[Standing]] = None,
) -> List[Standing]:
    """Best named players of one gender in a division.

    Players with a blank display name are left out.

    Args:
        tournament: Tournament to rank
        division_id: Division of the players
        gender: Gender marker (``"F"`` or ``"M"``)
        limit: Number of rows to return; None for all
        standings: Precomputed player standings

    Returns:
        Player rows in standings order
    """
    if standings is None:
        standings = compute_player_standings(tournament)
    eligible = {
        p.id
        for p in tournament.players
        if p.division_id == division_id
        and p.gender == gender
        and p.display_name.strip()
    }
    rows = [row for row in standings if row.id in eligible]
    return rows if limit is None else rows[:limit]


def compute_session_standings(
    matches: Sequence[Match], players: Sequence[Player] = ()
) -> List[Standing]:
    """Player table of a play session, credited directly from match sides.

    Only players that appear in a decided match get a row.
    """
    names: Dict[str, Player] = {p.id: p for p in players}
    rows: Dict[str, Standing] = {}

    for match in matches:
        if not match.is_decided:
            continue
        for player_id in match.player_ids:
            if player_id not in rows:
                player = names.get(player_id)
                rows[player_id] = Standing(
                    id=player_id,
                    name=player.display_name if player else "",
                    club_id=player.club_id if player else None,
                )
        _credit(rows, match.side_a, match.score.a, match.score.b)
        _credit(rows, match.side_b, match.score.b, match.score.a)

    return sort_standings(rows.values())


def session_progress(matches: Sequence[Match]) -> Tuple[int, int]:
    """(scored, total) match counts of a session."""
    return sum(1 for m in matches if m.is_scored), len(matches)
