"""JSON standings reports for club tournaments."""

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

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from courtpairing import __version__
from courtpairing.constants import GENDER_FEMALE, GENDER_MALE
from courtpairing.models.tournament import ClubTournament
from courtpairing.standings import (
    compute_club_standings,
    compute_individual_coverage,
    compute_player_standings,
    playoff_ready,
    top_performers,
)
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def standings_report(
    tournament: ClubTournament, top_limit: Optional[int] = 3
) -> Dict[str, Any]:
    """Build a standings report.

    Args:
        tournament: Tournament to report on
        top_limit: Top performers listed per division and gender; None for all

    Returns:
        Report dictionary with metadata, club and player tables, per-division
        top performers and individual coverage
    """
    player_rows = compute_player_standings(tournament)
    scored = sum(1 for m in tournament.matches if m.is_scored)

    divisions = []
    for division in tournament.divisions:
        divisions.append(
            {
                "id": division.id,
                "name": division.name or division.code,
                "clubs": [
                    row.to_dict()
                    for row in compute_club_standings(tournament, division.id)
                ],
                "women": [
                    row.to_dict()
                    for row in top_performers(
                        tournament, division.id, GENDER_FEMALE, top_limit, player_rows
                    )
                ],
                "men": [
                    row.to_dict()
                    for row in top_performers(
                        tournament, division.id, GENDER_MALE, top_limit, player_rows
                    )
                ],
            }
        )

    return {
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "matches": len(tournament.matches),
            "scored_matches": scored,
            "playoff_applied": playoff_ready(tournament.matches),
        },
        "clubs": [row.to_dict() for row in compute_club_standings(tournament)],
        "divisions": divisions,
        "players": [row.to_dict() for row in player_rows],
        "coverage": compute_individual_coverage(tournament).to_dict(),
    }


def save_report(report: Dict[str, Any], output_path: Path, pretty: bool = True) -> None:
    """Save report to JSON file.

    Args:
        report: Report dictionary
        output_path: Path to save JSON file
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        if pretty:
            json.dump(report, f, indent=2, ensure_ascii=False)
        else:
            json.dump(report, f, ensure_ascii=False)

    logger.info(f"Report saved to: {output_path}")
