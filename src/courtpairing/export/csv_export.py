"""CSV export of scored matches for rating uploads.

Both exports list one row per scored match with the four player names and
the two scores; session exports add the session name and format, club
exports the division, event and club columns.
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

import csv
import re
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from dateutil.parser import isoparse

from courtpairing.constants import CLUB_CSV_HEADER, SESSION_CSV_HEADER
from courtpairing.exceptions import ResultNotFoundException
from courtpairing.models.match import ClubMatch, Match, match_sort_key
from courtpairing.models.player import Player
from courtpairing.models.session_config import SessionConfig
from courtpairing.models.tournament import ClubTournament
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _player_names(ids: Sequence[Optional[str]], players: Dict[str, Player]) -> List[str]:
    """Names of up to two players, blank for singles or unknown ids."""
    names = []
    for player_id in (list(ids) + [None, None])[:2]:
        player = players.get(player_id) if player_id else None
        names.append(player.name_or("") if player else "")
    return names


def session_csv_rows(
    config: SessionConfig, matches: Sequence[Match], players: Sequence[Player]
) -> List[List[str]]:
    """Rows (without header) for every scored match of a session.

    Raises:
        ResultNotFoundException: If no match has been scored yet
    """
    scored = [m for m in matches if m.is_scored]
    if not scored:
        raise ResultNotFoundException("No scored matches to export yet.")

    by_id = {p.id: p for p in players}
    return [
        [config.date, config.name, config.format]
        + _player_names(match.side_a, by_id)
        + _player_names(match.side_b, by_id)
        + [str(match.score.a), str(match.score.b)]
        for match in scored
    ]


def session_csv_filename(config: SessionConfig, today: Optional[date] = None) -> str:
    """Default file name, e.g. ``dupr_Tuesday_Ladder_2025-03-04.csv``."""
    name = re.sub(r"[^A-Za-z0-9\-_]+", "_", config.name or "session")
    day = config.date or (today or date.today()).isoformat()
    return f"dupr_{name}_{day}.csv"


def _write_rows(path: Path, header: Sequence[str], rows: Sequence[Sequence[str]]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)
    logger.info(f"Wrote {len(rows)} rows to {path}")
    return path


def write_session_csv(
    path: Path,
    config: SessionConfig,
    matches: Sequence[Match],
    players: Sequence[Player],
) -> Path:
    """Write the session export to ``path``; a directory gets the default name."""
    path = Path(path)
    if path.is_dir():
        path = path / session_csv_filename(config)
    return _write_rows(path, SESSION_CSV_HEADER, session_csv_rows(config, matches, players))


def match_date(completed_at: Optional[str]) -> str:
    """Calendar date of a completion timestamp, blank when missing or invalid."""
    if not completed_at:
        return ""
    try:
        return isoparse(completed_at).date().isoformat()
    except ValueError:
        logger.debug(f"Unparseable completion time {completed_at!r}")
        return ""


def club_csv_rows(tournament: ClubTournament) -> List[List[str]]:
    """Rows (without header) for every scored club match, in score-sheet order.

    Player columns stay blank when a club has no complete seed mapping.
    """
    clubs = {c.id: c.display_name for c in tournament.clubs}
    divisions = {d.id: d.name or d.code or d.id for d in tournament.divisions}
    players = {p.id: p for p in tournament.players}

    rows: List[List[str]] = []
    scored: List[ClubMatch] = sorted(
        (m for m in tournament.matches if m.is_scored),
        key=lambda m: (m.division_id,) + match_sort_key(m),
    )
    for match in scored:
        config = tournament.division_config(match.division_id)
        side_a = side_b = None
        if config is not None:
            side_a = config.players_for(match.club_a, match.event_type, match.seed)
            side_b = config.players_for(match.club_b, match.event_type, match.seed)
        rows.append(
            [
                match_date(match.completed_at),
                divisions.get(match.division_id, match.division_id),
                match.event_type,
                str(match.seed),
                str(match.round),
                str(match.court),
                clubs.get(match.club_a, match.club_a),
                clubs.get(match.club_b, match.club_b),
            ]
            + _player_names(side_a or (), players)
            + _player_names(side_b or (), players)
            + [str(match.score.a), str(match.score.b)]
        )
    return rows


def write_club_csv(path: Path, tournament: ClubTournament) -> Path:
    """Write the club export to ``path``; an empty file gets only the header."""
    return _write_rows(Path(path), CLUB_CSV_HEADER, club_csv_rows(tournament))
