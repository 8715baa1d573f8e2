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

# --- Session formats ---
FORMAT_DOUBLES_ROTATE = "DOUBLES_ROTATE"
FORMAT_DOUBLES_FIXED_TEAMS = "DOUBLES_FIXED_TEAMS"
FORMAT_SINGLES = "SINGLES"

FORMAT_LABELS = {
    FORMAT_DOUBLES_ROTATE: "Doubles - rotate partners",
    FORMAT_DOUBLES_FIXED_TEAMS: "Doubles - fixed teams",
    FORMAT_SINGLES: "Singles",
}

# Session config bounds (value, minimum, maximum)
DEFAULT_COURTS = 4
MIN_COURTS = 1
MAX_COURTS = 50
DEFAULT_ROUNDS = 6
MIN_ROUNDS = 1
MAX_ROUNDS = 200

# Genders
GENDER_MALE = "M"
GENDER_FEMALE = "F"
GENDER_UNKNOWN = "X"

# Partner selection weights. A single repeat partnership must always cost
# more than the mixed-gender penalty.
PARTNER_REPEAT_WEIGHT = 100
SAME_GENDER_PENALTY = 8

# --- Club round-robin ---
EVENT_WOMENS_DOUBLES = "WOMENS_DOUBLES"
EVENT_MENS_DOUBLES = "MENS_DOUBLES"
EVENT_MIXED_DOUBLES = "MIXED_DOUBLES"

EVENT_TYPES = [EVENT_WOMENS_DOUBLES, EVENT_MENS_DOUBLES, EVENT_MIXED_DOUBLES]

# Display ordering of events inside a matchup
EVENT_ORDER = {
    EVENT_WOMENS_DOUBLES: 0,
    EVENT_MENS_DOUBLES: 1,
    EVENT_MIXED_DOUBLES: 2,
}

STAGE_REGULAR = "REGULAR"
STAGE_PLAYOFF = "PLAYOFF"

BYE = "__BYE__"

# Court numbers by event and seed, one per simultaneous matchup in a round
COURTS_BY_EVENT_AND_SEED = {
    EVENT_WOMENS_DOUBLES: {1: (13, 14), 2: (9, 10)},
    EVENT_MENS_DOUBLES: {1: (15, 16), 2: (11, 12)},
    EVENT_MIXED_DOUBLES: {1: (13, 14), 2: (15, 16), 3: (9, 10), 4: (11, 12)},
}
UNASSIGNED_COURT = 0

# --- Export ---
SESSION_CSV_HEADER = [
    "match_date",
    "session_name",
    "format",
    "team1_player1",
    "team1_player2",
    "team2_player1",
    "team2_player2",
    "team1_score",
    "team2_score",
]

CLUB_CSV_HEADER = [
    "match_date",
    "division_name",
    "event_type",
    "seed",
    "round",
    "court",
    "club_a",
    "club_b",
    "team1_player1",
    "team1_player2",
    "team2_player1",
    "team2_player2",
    "team1_score",
    "team2_score",
]

# Scores entered through the score sheet
MIN_SCORE = 0
MAX_SCORE = 99
