"""Score recording for session and club matches.

Matches are immutable; recording a score returns a new match list with the
affected match replaced.
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

import math
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

from courtpairing.constants import MAX_SCORE, MIN_SCORE
from courtpairing.exceptions import InvalidResultException, ResultNotFoundException
from courtpairing.models.match import MatchScore
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

M = TypeVar("M")

ScoreInput = Union[MatchScore, Tuple[Any, Any], None]


def parse_score_value(value: Any) -> int:
    """Parse one side's score as entered on a score sheet.

    Numeric strings are accepted and fractional values are floored.

    Raises:
        InvalidResultException: If the value is blank, not a number, or
            outside the allowed range
    """
    if isinstance(value, bool):
        raise InvalidResultException(f"Invalid score: {value!r}")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise InvalidResultException("Enter both scores before saving.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidResultException(f"Invalid score: {value!r}") from None
    if not math.isfinite(number):
        raise InvalidResultException(f"Invalid score: {value!r}")

    score = math.floor(number)
    if score < MIN_SCORE or score > MAX_SCORE:
        raise InvalidResultException(
            f"Score {score} is outside the range {MIN_SCORE}-{MAX_SCORE}"
        )
    return score


def parse_score(score: ScoreInput) -> Optional[MatchScore]:
    """Normalize a score given as a MatchScore or an (a, b) pair."""
    if score is None:
        return None
    if isinstance(score, MatchScore):
        a, b = score.a, score.b
    else:
        try:
            a, b = score
        except (TypeError, ValueError):
            raise InvalidResultException(
                f"A score needs exactly two values, got {score!r}"
            ) from None
    return MatchScore(a=parse_score_value(a), b=parse_score_value(b))


def record_score(
    matches: Sequence[M],
    match_id: str,
    score: ScoreInput,
    now: Optional[datetime] = None,
) -> List[M]:
    """Set or clear the score of one match.

    Args:
        matches: Current schedule (session or club matches)
        match_id: Id of the match being scored
        score: New score, or None to clear both score and completion time
        now: Completion timestamp, defaults to the current UTC time

    Returns:
        A new list with the match replaced

    Raises:
        ResultNotFoundException: If no match has ``match_id``
        InvalidResultException: If the score is malformed
    """
    parsed = parse_score(score)
    if not any(match.id == match_id for match in matches):
        raise ResultNotFoundException(f"No match with id {match_id}")

    if parsed is None:
        completed_at = None
    else:
        completed_at = (now or datetime.now(timezone.utc)).isoformat()

    updated: List[M] = []
    for match in matches:
        if match.id == match_id:
            match = replace(match, score=parsed, completed_at=completed_at)
            logger.debug(
                f"Match {match_id}: score "
                f"{'cleared' if parsed is None else f'{parsed.a}-{parsed.b}'}"
            )
        updated.append(match)
    return updated
