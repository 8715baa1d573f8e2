from courtpairing.models.match import (
    ClubMatch,
    Match,
    MatchScore,
    make_match_id,
    make_match_key,
    match_sort_key,
)
from courtpairing.models.pairing_counters import PairingCounters, pair_key
from courtpairing.models.player import Player, Team, normalize_gender
from courtpairing.models.session_config import SessionConfig, clamp_int
from courtpairing.models.standing import IndividualCoverage, Standing
from courtpairing.models.tournament import (
    SEEDED_EVENTS,
    Club,
    ClubTournament,
    Division,
    DivisionConfig,
    SeedAssignment,
    SeededEvent,
    event_label,
    seed_key,
)

__all__ = [
    "Club",
    "ClubMatch",
    "ClubTournament",
    "Division",
    "DivisionConfig",
    "IndividualCoverage",
    "Match",
    "MatchScore",
    "PairingCounters",
    "Player",
    "SEEDED_EVENTS",
    "SeedAssignment",
    "SeededEvent",
    "SessionConfig",
    "Standing",
    "Team",
    "clamp_int",
    "event_label",
    "make_match_id",
    "make_match_key",
    "match_sort_key",
    "normalize_gender",
    "pair_key",
    "seed_key",
]
