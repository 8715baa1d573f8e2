"""Schedule checker for generated session and round-robin schedules.

Absolute criteria must hold for every schedule the engines produce (disjoint
sides, one match per player per round, court limit, round-robin coverage);
quality criteria measure fairness and repeat avoidance.
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

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Set

from courtpairing.constants import FORMAT_DOUBLES_FIXED_TEAMS, FORMAT_SINGLES
from courtpairing.models.match import ClubMatch, Match, make_match_id, make_match_key
from courtpairing.models.pairing_counters import pair_key
from courtpairing.models.player import Player
from courtpairing.models.session_config import SessionConfig
from courtpairing.models.tournament import ClubTournament
from courtpairing.pairing.round_robin import create_round_robin
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Severity of a violated criterion."""

    ABSOLUTE = "ABSOLUTE"  # Schedule is unusable
    QUALITY = "QUALITY"  # Schedule is usable but less fair


@dataclass
class CriterionResult:
    """Result of checking a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return self.status != CriterionStatus.VIOLATION


@dataclass
class ValidationReport:
    """Complete validation report for a schedule."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    def result(self, criterion: str) -> Optional[CriterionResult]:
        for result in self.criteria_results:
            if result.criterion == criterion:
                return result
        return None


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion, status=CriterionStatus.COMPLIANT, description=description
    )


def _violation(
    criterion: str,
    violation_type: ViolationType,
    description: str,
    **details: object,
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=dict(details),
    )


def build_report(results: List[CriterionResult]) -> ValidationReport:
    """Summarize criterion results into a report."""
    compliant_count = sum(1 for r in results if r.status == CriterionStatus.COMPLIANT)
    absolute = [
        r
        for r in results
        if r.status == CriterionStatus.VIOLATION
        and r.violation_type == ViolationType.ABSOLUTE
    ]
    quality = [
        r
        for r in results
        if r.status == CriterionStatus.VIOLATION
        and r.violation_type == ViolationType.QUALITY
    ]

    if absolute:
        overall_status = CriterionStatus.VIOLATION
        summary = (
            f"Absolute violations detected - {len(absolute)} criteria failed; "
            f"{len(quality)} quality warnings"
        )
    else:
        overall_status = CriterionStatus.COMPLIANT
        summary = f"Absolute criteria satisfied; {len(quality)} quality criteria flagged"

    return ValidationReport(
        total_criteria=len(results),
        compliant_count=compliant_count,
        violations=absolute,
        quality_warnings=quality,
        overall_status=overall_status,
        summary=summary,
        criteria_results=results,
    )


class ScheduleValidator:
    """Checks generated schedules against the scheduling guarantees."""

    def __init__(self, max_partner_repeats: int = 2):
        """Initialize the validator.

        Args:
            max_partner_repeats: Most times a rotating-doubles pair may
                partner before the schedule is flagged
        """
        self.max_partner_repeats = max_partner_repeats

    # --- Session schedules ---

    def validate_session(
        self,
        matches: Sequence[Match],
        config: SessionConfig,
        players: Sequence[Player] = (),
    ) -> ValidationReport:
        """Validate a session schedule produced by the scheduling engine."""
        logger.info(f"Validating {len(matches)} session matches ({config.format})")
        results = [
            self.check_disjoint_sides(matches),
            self.check_side_sizes(matches, config),
            self.check_one_match_per_round(matches),
            self.check_court_limit(matches, config),
            self.check_games_spread(matches, config, players),
            self.check_partner_repeats(matches, config),
        ]
        report = build_report(results)
        logger.info(f"Session validation complete: {report.summary}")
        return report

    def check_disjoint_sides(self, matches: Sequence[Match]) -> CriterionResult:
        """No player may appear on both sides of a match."""
        for match in matches:
            shared = set(match.side_a) & set(match.side_b)
            if shared or len(set(match.player_ids)) != len(match.player_ids):
                return _violation(
                    "DISJOINT_SIDES",
                    ViolationType.ABSOLUTE,
                    f"Match {match.id} repeats a player",
                    match_id=match.id,
                    players=sorted(shared),
                )
        return _compliant("DISJOINT_SIDES", "Every match has disjoint sides")

    def check_side_sizes(
        self, matches: Sequence[Match], config: SessionConfig
    ) -> CriterionResult:
        expected = 1 if config.format == FORMAT_SINGLES else 2
        for match in matches:
            if len(match.side_a) != expected or len(match.side_b) != expected:
                return _violation(
                    "SIDE_SIZE",
                    ViolationType.ABSOLUTE,
                    f"Match {match.id} does not have {expected} player(s) per side",
                    match_id=match.id,
                )
        return _compliant("SIDE_SIZE", f"Every side has {expected} player(s)")

    def check_one_match_per_round(self, matches: Sequence[Match]) -> CriterionResult:
        """A player plays at most once per round."""
        seen: Dict[int, Set[str]] = defaultdict(set)
        for match in matches:
            for player_id in match.player_ids:
                if player_id in seen[match.round]:
                    return _violation(
                        "ONE_MATCH_PER_ROUND",
                        ViolationType.ABSOLUTE,
                        f"Player {player_id} plays twice in round {match.round}",
                        player_id=player_id,
                        round=match.round,
                    )
                seen[match.round].add(player_id)
        return _compliant("ONE_MATCH_PER_ROUND", "No player is double-booked")

    def check_court_limit(
        self, matches: Sequence[Match], config: SessionConfig
    ) -> CriterionResult:
        per_round = Counter(match.round for match in matches)
        for round_number, count in sorted(per_round.items()):
            if count > config.courts:
                return _violation(
                    "COURT_LIMIT",
                    ViolationType.ABSOLUTE,
                    f"Round {round_number} uses {count} of {config.courts} courts",
                    round=round_number,
                    matches=count,
                )
        return _compliant("COURT_LIMIT", "Every round fits on the available courts")

    def check_games_spread(
        self,
        matches: Sequence[Match],
        config: SessionConfig,
        players: Sequence[Player],
    ) -> CriterionResult:
        """Games played differ by at most one across the selection pool."""
        if config.format == FORMAT_DOUBLES_FIXED_TEAMS:
            pool = [p for team in config.teams for p in team.players]
        else:
            pool = [p.id for p in players]
        if not pool:
            return CriterionResult(
                criterion="GAMES_SPREAD",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No roster to compare",
            )

        games = Counter(p for match in matches for p in match.player_ids)
        counts = [games.get(player_id, 0) for player_id in pool]
        spread = max(counts) - min(counts)
        if spread > 1:
            return _violation(
                "GAMES_SPREAD",
                ViolationType.QUALITY,
                f"Games played range from {min(counts)} to {max(counts)}",
                spread=spread,
            )
        return _compliant("GAMES_SPREAD", f"Games played spread is {spread}")

    def check_partner_repeats(
        self, matches: Sequence[Match], config: SessionConfig
    ) -> CriterionResult:
        if config.format == FORMAT_SINGLES or config.format == FORMAT_DOUBLES_FIXED_TEAMS:
            return CriterionResult(
                criterion="PARTNER_REPEATS",
                status=CriterionStatus.NOT_APPLICABLE,
                description="Partners do not rotate in this format",
            )

        partners = Counter(
            pair_key(*side)
            for match in matches
            for side in (match.side_a, match.side_b)
            if len(side) == 2
        )
        worst = max(partners.values(), default=0)
        if worst > self.max_partner_repeats:
            pair = max(partners, key=partners.get)
            return _violation(
                "PARTNER_REPEATS",
                ViolationType.QUALITY,
                f"Pair {pair[0]}/{pair[1]} partnered {worst} times",
                pair=list(pair),
                count=worst,
            )
        return _compliant(
            "PARTNER_REPEATS", f"No pair partnered more than {worst} time(s)"
        )

    # --- Club round-robin ---

    def validate_round_robin(self, tournament: ClubTournament) -> ValidationReport:
        """Validate a club tournament schedule."""
        matches = tournament.matches
        logger.info(f"Validating {len(matches)} round-robin matches")
        results = [
            self.check_unique_keys(matches),
            self.check_deterministic_ids(matches),
            self.check_club_once_per_round(matches),
            self.check_coverage(tournament),
        ]
        report = build_report(results)
        logger.info(f"Round-robin validation complete: {report.summary}")
        return report

    def check_unique_keys(self, matches: Sequence[ClubMatch]) -> CriterionResult:
        keys = Counter(match.key for match in matches)
        duplicates = sorted(key for key, count in keys.items() if count > 1)
        if duplicates:
            return _violation(
                "UNIQUE_KEYS",
                ViolationType.ABSOLUTE,
                f"{len(duplicates)} pairings are scheduled more than once",
                keys=duplicates,
            )
        return _compliant("UNIQUE_KEYS", "Every pairing is scheduled at most once")

    def check_deterministic_ids(self, matches: Sequence[ClubMatch]) -> CriterionResult:
        for match in matches:
            expected = make_match_id(
                match.division_id, match.event_type, match.seed, match.club_a, match.club_b
            )
            if match.id != expected:
                return _violation(
                    "MATCH_IDS",
                    ViolationType.ABSOLUTE,
                    f"Match {match.id} should have id {expected}",
                    match_id=match.id,
                )
        return _compliant("MATCH_IDS", "Match ids follow the pairing")

    def check_club_once_per_round(
        self, matches: Sequence[ClubMatch]
    ) -> CriterionResult:
        """A club fields each seeded event at most once per round."""
        seen: Set[tuple] = set()
        for match in matches:
            for club_id in (match.club_a, match.club_b):
                slot = (match.division_id, match.round, match.event_type, match.seed, club_id)
                if slot in seen:
                    return _violation(
                        "CLUB_ONCE_PER_ROUND",
                        ViolationType.ABSOLUTE,
                        f"Club {club_id} plays {match.event_type} #{match.seed} twice "
                        f"in round {match.round}",
                        club_id=club_id,
                        round=match.round,
                    )
                seen.add(slot)
        return _compliant("CLUB_ONCE_PER_ROUND", "No club is double-booked")

    def check_coverage(self, tournament: ClubTournament) -> CriterionResult:
        """Every participating club pairing is scheduled for every seeded event."""
        scheduled = {match.key for match in tournament.matches}
        missing: List[str] = []
        for division in tournament.divisions:
            club_ids = tournament.participating_clubs(division.id)
            for club_a, club_b in create_round_robin(club_ids).all_pairs():
                for event in tournament.seeded_events:
                    key = make_match_key(
                        division.id, event.event_type, event.seed, club_a, club_b
                    )
                    if key not in scheduled:
                        missing.append(key)

        if missing:
            return _violation(
                "COVERAGE",
                ViolationType.ABSOLUTE,
                f"{len(missing)} pairings are not scheduled",
                keys=missing,
            )
        return _compliant("COVERAGE", "Every pairing is scheduled")


def validate_session_schedule(
    matches: Sequence[Match], config: SessionConfig, players: Sequence[Player] = ()
) -> ValidationReport:
    """Quick validation of a session schedule."""
    return ScheduleValidator().validate_session(matches, config, players)
