"""Type hints used in Court Pairing."""

from typing import List, Literal, MutableSequence, Protocol, Tuple

PlayerId = str
TeamId = str
ClubId = str
DivisionId = str
MatchId = str

# Canonical key for an unordered pair of ids
PairKey = Tuple[str, str]

# One half of a match: a single player, a doubles pair, or a fixed team
Side = Tuple[str, ...]
# Two sides facing each other
SidePairing = Tuple[Side, Side]
# All pairings for one round
RoundPairings = List[SidePairing]

Gender = Literal["M", "F", "X"]
SessionFormatName = Literal["DOUBLES_ROTATE", "DOUBLES_FIXED_TEAMS", "SINGLES"]
EventType = Literal["WOMENS_DOUBLES", "MENS_DOUBLES", "MIXED_DOUBLES"]
Stage = Literal["REGULAR", "PLAYOFF"]


class RandomSource(Protocol):
    """Anything that can shuffle a list in place.

    ``random.Random`` satisfies this; tests substitute scripted sources.
    """

    def shuffle(self, x: MutableSequence) -> None: ...


#  LocalWords:  PairKey SidePairing RoundPairings
