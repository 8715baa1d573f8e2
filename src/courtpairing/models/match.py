"""Match and score data classes."""

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

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from courtpairing.constants import (
    EVENT_ORDER,
    STAGE_PLAYOFF,
    STAGE_REGULAR,
    UNASSIGNED_COURT,
)


@dataclass(frozen=True)
class MatchScore:
    """Final score of a match.

    Attributes
    ----------
    a : int
        Points scored by side A (club A).
    b : int
        Points scored by side B (club B).
    """

    a: int
    b: int

    @property
    def is_tie(self) -> bool:
        return self.a == self.b

    def to_dict(self) -> Dict[str, int]:
        return {"a": self.a, "b": self.b}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["MatchScore"]:
        if not data:
            return None
        if data.get("a") is None or data.get("b") is None:
            return None
        return cls(a=int(data["a"]), b=int(data["b"]))


class ScoredMixin:
    """Score helpers shared by session and club matches."""

    score: Optional[MatchScore]

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    @property
    def is_decided(self) -> bool:
        """True when scored with a winner; tied scores never count."""
        return self.score is not None and not self.score.is_tie

    @property
    def side_a_won(self) -> Optional[bool]:
        if not self.is_decided:
            return None
        return self.score.a > self.score.b


def _score_from_legacy(data: Dict[str, Any]) -> Optional[MatchScore]:
    if isinstance(data.get("score"), dict):
        return MatchScore.from_dict(data["score"])
    if data.get("score1") is not None and data.get("score2") is not None:
        return MatchScore(a=int(data["score1"]), b=int(data["score2"]))
    return None


@dataclass(frozen=True)
class Match(ScoredMixin):
    """A single match of a session-scoped schedule.

    Attributes
    ----------
    id : str
        Match identifier (random for the greedy formats).
    round : int
        Round number (1-indexed).
    court : int
        Court number within the round (1-indexed).
    side_a, side_b : tuple of str
        Player ids of each side; one id for singles, two for doubles.
    score : MatchScore or None
        Recorded score, None until entered.
    completed_at : str or None
        ISO timestamp of score entry.
    session_id : str or None
        Owning session.
    """

    id: str
    round: int
    court: int
    side_a: Tuple[str, ...]
    side_b: Tuple[str, ...]
    score: Optional[MatchScore] = None
    completed_at: Optional[str] = None
    session_id: Optional[str] = None

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return self.side_a + self.side_b

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round,
            "court": self.court,
            "side_a": list(self.side_a),
            "side_b": list(self.side_b),
            "score": self.score.to_dict() if self.score else None,
            "completed_at": self.completed_at,
            "session_id": self.session_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary (``team1``/``team2`` accepted)."""
        side_a = data.get("side_a", data.get("sideA", data.get("team1", [])))
        side_b = data.get("side_b", data.get("sideB", data.get("team2", [])))
        return cls(
            id=str(data["id"]),
            round=int(data["round"]),
            court=int(data.get("court", 0)),
            side_a=tuple(str(p) for p in side_a),
            side_b=tuple(str(p) for p in side_b),
            score=_score_from_legacy(data),
            completed_at=data.get("completed_at", data.get("completedAt")),
            session_id=data.get("session_id", data.get("sessionId")),
        )


def _canonical_clubs(club_a: str, club_b: str) -> Tuple[str, str]:
    a, b = sorted((club_a, club_b))
    return a, b


def make_match_id(
    division_id: str, event_type: str, seed: int, club_a: str, club_b: str
) -> str:
    """Deterministic club match id; independent of round and matchup order."""
    a, b = _canonical_clubs(club_a, club_b)
    return f"m:{division_id}:{event_type}:s{seed}:{a}-vs-{b}"


def make_match_key(
    division_id: str, event_type: str, seed: int, club_a: str, club_b: str
) -> str:
    """Coverage key for a (division, event, seed, unordered club pair)."""
    a, b = _canonical_clubs(club_a, club_b)
    return f"{division_id}|{event_type}|{seed}|{a}|{b}"


@dataclass(frozen=True)
class ClubMatch(ScoredMixin):
    """A seeded-event match between two clubs in a division round-robin.

    Attributes
    ----------
    id : str
        Deterministic id built by :func:`make_match_id`.
    division_id : str
        Division the match belongs to.
    round : int
        Round number (1-indexed) within the division.
    matchup_index : int
        Index of the club pairing within the round.
    event_type : str
        Seeded event (women's, men's or mixed doubles).
    seed : int
        Seed number within the event.
    club_a, club_b : str
        Competing clubs, sorted by id.
    court : int
        Assigned court, 0 when unassigned.
    stage : str
        ``"REGULAR"`` or ``"PLAYOFF"``.
    """

    id: str
    division_id: str
    round: int
    matchup_index: int
    event_type: str
    seed: int
    club_a: str
    club_b: str
    court: int = UNASSIGNED_COURT
    stage: str = STAGE_REGULAR
    score: Optional[MatchScore] = None
    completed_at: Optional[str] = None

    @property
    def key(self) -> str:
        return make_match_key(
            self.division_id, self.event_type, self.seed, self.club_a, self.club_b
        )

    @property
    def is_playoff(self) -> bool:
        return self.stage == STAGE_PLAYOFF

    def to_dict(self) -> Dict[str, Any]:
        """Serialize club match to dictionary."""
        return {
            "id": self.id,
            "division_id": self.division_id,
            "round": self.round,
            "matchup_index": self.matchup_index,
            "event_type": self.event_type,
            "seed": self.seed,
            "club_a": self.club_a,
            "club_b": self.club_b,
            "court": self.court,
            "stage": self.stage,
            "score": self.score.to_dict() if self.score else None,
            "completed_at": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClubMatch":
        """Deserialize club match from dictionary (camelCase keys accepted)."""
        return cls(
            id=str(data["id"]),
            division_id=str(data.get("division_id", data.get("divisionId"))),
            round=int(data.get("round") or 0),
            matchup_index=int(data.get("matchup_index", data.get("matchupIndex", 0))),
            event_type=str(data.get("event_type", data.get("eventType"))),
            seed=int(data["seed"]),
            club_a=str(data.get("club_a", data.get("clubA"))),
            club_b=str(data.get("club_b", data.get("clubB"))),
            court=int(data.get("court") or UNASSIGNED_COURT),
            stage=str(data.get("stage") or STAGE_REGULAR).upper(),
            score=_score_from_legacy(data),
            completed_at=data.get("completed_at", data.get("completedAt")),
        )


def match_sort_key(match: ClubMatch) -> Tuple[int, int, int, int, str]:
    """Score-sheet order: round, matchup, women/men/mixed, seed."""
    return (
        match.round,
        match.matchup_index,
        EVENT_ORDER.get(match.event_type, len(EVENT_ORDER)),
        match.seed,
        match.id,
    )
