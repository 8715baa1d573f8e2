import pytest

from courtpairing.constants import (
    EVENT_MENS_DOUBLES,
    EVENT_WOMENS_DOUBLES,
    STAGE_PLAYOFF,
    STAGE_REGULAR,
)
from courtpairing.models import (
    Club,
    ClubMatch,
    ClubTournament,
    Division,
    DivisionConfig,
    Match,
    MatchScore,
    Player,
)
from courtpairing.scheduling import auto_seed_division
from courtpairing.standings import (
    apply_playoff_override,
    compute_club_standings,
    compute_individual_coverage,
    compute_player_standings,
    compute_session_standings,
    playoff_ready,
    session_progress,
    sort_standings,
    standings_sort_key,
    top_performers,
)


def cm(index, club_a, club_b, score_a, score_b, stage=STAGE_REGULAR, seed=1,
       event_type=EVENT_WOMENS_DOUBLES, division_id="d1"):
    return ClubMatch(
        id=f"m{index}",
        division_id=division_id,
        round=index,
        matchup_index=0,
        event_type=event_type,
        seed=seed,
        club_a=club_a,
        club_b=club_b,
        stage=stage,
        score=None if score_a is None else MatchScore(score_a, score_b),
    )


def league(matches, club_ids="ABCDE"):
    return ClubTournament(
        clubs=[Club(id=c, name=f"Club {c}") for c in club_ids],
        divisions=[Division(id="d1", code="D1")],
        matches=list(matches),
    )


def regular_season():
    """A 5-1 +20, B 4-2 +15, C 3-3 0, D 2-4 -15, E 0-4 -20."""
    results = [
        ("A", "B", 2),
        ("A", "C", 4),
        ("A", "D", 6),
        ("A", "E", 5),
        ("A", "E", 5),
        ("C", "A", 2),
        ("B", "C", 4),
        ("B", "D", 5),
        ("B", "E", 5),
        ("B", "E", 5),
        ("D", "B", 2),
        ("C", "D", 4),
        ("C", "D", 4),
        ("D", "C", 2),
    ]
    return [
        cm(i, winner, loser, 11, 11 - margin)
        for i, (winner, loser, margin) in enumerate(results, start=1)
    ]


def summary(rows):
    return [(r.id, r.wins, r.losses, r.point_diff) for r in rows]


def test_regular_season_order():
    rows = compute_club_standings(league(regular_season()))
    assert summary(rows) == [
        ("A", 5, 1, 20),
        ("B", 4, 2, 15),
        ("C", 3, 3, 0),
        ("D", 2, 4, -15),
        ("E", 0, 4, -20),
    ]


def test_rows_are_internally_consistent():
    rows = compute_club_standings(league(regular_season()))
    for row in rows:
        assert row.wins + row.losses == row.matches_played
        assert row.points_for - row.points_against == row.point_diff
    keys = [standings_sort_key(row) for row in rows]
    assert keys == sorted(keys)


def test_playoff_reorders_top_pair():
    matches = regular_season() + [cm(99, "A", "B", 2, 11, stage=STAGE_PLAYOFF)]
    rows = compute_club_standings(league(matches))

    assert [r.id for r in rows] == ["B", "A", "C", "D", "E"]
    assert (rows[1].wins, rows[1].point_diff) == (5, 20)


def test_playoff_not_applied_until_fully_scored():
    matches = regular_season() + [
        cm(99, "A", "B", 2, 11, stage=STAGE_PLAYOFF),
        cm(100, "C", "D", None, None, stage=STAGE_PLAYOFF),
    ]
    assert not playoff_ready(matches)
    rows = compute_club_standings(league(matches))
    assert [r.id for r in rows] == ["A", "B", "C", "D", "E"]


def test_playoff_resolves_second_pair():
    matches = regular_season() + [
        cm(99, "A", "B", 11, 8, stage=STAGE_PLAYOFF),
        cm(100, "C", "D", 3, 11, stage=STAGE_PLAYOFF),
    ]
    rows = compute_club_standings(league(matches))
    assert [r.id for r in rows] == ["A", "B", "D", "C", "E"]


def test_playoff_can_be_disabled():
    matches = regular_season() + [cm(99, "A", "B", 2, 11, stage=STAGE_PLAYOFF)]
    rows = compute_club_standings(league(matches), apply_playoffs=False)
    assert [r.id for r in rows] == ["A", "B", "C", "D", "E"]


def test_tied_playoff_keeps_base_order():
    base = compute_club_standings(league(regular_season()))
    playoff = [cm(99, "A", "B", 9, 9, stage=STAGE_PLAYOFF)]
    assert playoff_ready(playoff)
    assert [r.id for r in apply_playoff_override(base, playoff)] == [
        "A",
        "B",
        "C",
        "D",
        "E",
    ]


def test_tie_has_no_effect():
    plain = compute_club_standings(league(regular_season()))
    with_tie = compute_club_standings(
        league(regular_season() + [cm(50, "C", "E", 7, 7)])
    )
    assert [r.to_dict() for r in plain] == [r.to_dict() for r in with_tie]


def test_clubs_without_matches_listed_and_unknown_clubs_ignored():
    matches = [cm(1, "A", "B", 11, 4), cm(2, "A", "ZZ", 11, 0)]
    rows = compute_club_standings(league(matches, club_ids="ABC"))
    assert summary(rows) == [("A", 1, 0, 7), ("C", 0, 0, 0), ("B", 0, 1, -7)]


def test_unscored_matches_ignored():
    rows = compute_club_standings(league([cm(1, "A", "B", None, None)], club_ids="AB"))
    assert all(row.matches_played == 0 for row in rows)


def test_name_then_id_break_full_ties():
    tournament = ClubTournament(
        clubs=[Club(id="z", name="alpha"), Club(id="b", name=""), Club(id="a", name="Alpha")]
    )
    rows = compute_club_standings(tournament)
    assert [r.id for r in rows] == ["a", "z", "b"]


def test_division_filter():
    matches = [
        cm(1, "A", "B", 11, 4, division_id="d1"),
        cm(2, "B", "A", 11, 0, division_id="d2"),
    ]
    tournament = league(matches, club_ids="AB")
    assert compute_club_standings(tournament, "d1")[0].id == "A"
    assert compute_club_standings(tournament, "d2")[0].id == "B"


# --- Individual standings ---


def seeded_tournament():
    players = [
        Player("a1", club_id="A", gender="F", display_name="Ana", division_id="d1"),
        Player("a2", club_id="A", gender="F", display_name="Ada", division_id="d1"),
        Player("b1", club_id="B", gender="F", display_name="Bea", division_id="d1"),
        Player("b2", club_id="B", gender="F", display_name="Bo", division_id="d1"),
        Player("a3", club_id="A", gender="M", display_name="Al", division_id="d1"),
    ]
    config = auto_seed_division(DivisionConfig("d1"), "d1", players)
    return ClubTournament(
        clubs=[Club("A", "Club A"), Club("B", "Club B")],
        divisions=[Division("d1", "D1")],
        players=players,
        division_configs=[config],
    )


def test_player_standings_credit_seeded_players():
    tournament = seeded_tournament()
    tournament.matches = [
        cm(1, "A", "B", 11, 6),
        cm(2, "A", "B", 11, 0, event_type=EVENT_MENS_DOUBLES),
    ]
    rows = {r.id: r for r in compute_player_standings(tournament)}

    assert (rows["a1"].wins, rows["a1"].point_diff) == (1, 5)
    assert (rows["b2"].losses, rows["b2"].points_for) == (1, 6)
    assert rows["a3"].matches_played == 0
    assert rows["a1"].club_id == "A"


def test_coverage_counts_unmapped_and_tied_matches():
    tournament = seeded_tournament()
    tournament.matches = [
        cm(1, "A", "B", 11, 6),
        cm(2, "A", "B", 5, 5, seed=1),
        cm(3, "A", "B", 11, 0, event_type=EVENT_MENS_DOUBLES),
        cm(4, "A", "B", None, None),
    ]
    coverage = compute_individual_coverage(tournament)
    assert coverage.scored_matches == 3
    assert coverage.scored_matches_with_player_mapping == 2
    assert not coverage.is_complete
    assert coverage.ratio == pytest.approx(2 / 3)


def test_full_coverage():
    tournament = seeded_tournament()
    tournament.matches = [cm(1, "A", "B", 11, 6)]
    assert compute_individual_coverage(tournament).is_complete


def test_top_performers_filters_division_and_gender():
    tournament = seeded_tournament()
    tournament.matches = [cm(1, "A", "B", 11, 6)]

    women = top_performers(tournament, "d1", "F", limit=2)
    assert [r.id for r in women] == ["a2", "a1"]
    assert [r.id for r in top_performers(tournament, "d1", "M")] == ["a3"]
    assert top_performers(tournament, "d2", "F") == []
    assert len(top_performers(tournament, "d1", "F", limit=None)) == 4


def test_top_performers_need_a_name_and_the_division():
    players = [
        Player("a1", club_id="A", gender="F", display_name="Ana", division_id="d1"),
        Player("x1", club_id="A", gender="F", display_name="Xena"),
        Player("a2", club_id="A", gender="F", display_name="  ", division_id="d1"),
        Player("b1", club_id="B", gender="F", display_name="Bea", division_id="d1"),
        Player("b2", club_id="B", gender="F", display_name="Bo", division_id="d1"),
    ]
    tournament = ClubTournament(
        clubs=[Club("A", "Club A"), Club("B", "Club B")],
        divisions=[Division("d1", "D1")],
        players=players,
        division_configs=[auto_seed_division(DivisionConfig("d1"), "d1", players)],
        matches=[cm(1, "A", "B", 11, 5)],
    )
    rows = {r.id: r for r in compute_player_standings(tournament)}

    assert rows["a2"].wins == 1
    assert rows["x1"].matches_played == 0
    assert [r.id for r in top_performers(tournament, "d1", "F", limit=None)] == [
        "a1",
        "b1",
        "b2",
    ]


def test_playoff_matches_credit_neither_clubs_nor_players():
    tournament = seeded_tournament()
    tournament.matches = [cm(1, "A", "B", 11, 5, stage=STAGE_PLAYOFF)]

    clubs = compute_club_standings(tournament)
    players = compute_player_standings(tournament)
    coverage = compute_individual_coverage(tournament)

    assert [r.id for r in clubs] == ["A", "B"]
    assert {r.matches_played for r in clubs} == {0}
    assert {r.matches_played for r in players} == {0}
    assert coverage.scored_matches == 0


# --- Session standings ---


def session_match(match_id, side_a, side_b, score):
    return Match(
        id=match_id,
        round=1,
        court=1,
        side_a=side_a,
        side_b=side_b,
        score=None if score is None else MatchScore(*score),
    )


def test_session_standings_credit_each_side():
    players = [Player("p1", display_name="Pat"), Player("p2"), Player("p3"), Player("p4")]
    matches = [
        session_match("m1", ("p1", "p2"), ("p3", "p4"), (11, 4)),
        session_match("m2", ("p1", "p3"), ("p2", "p4"), (6, 11)),
    ]
    rows = {r.id: r for r in compute_session_standings(matches, players)}

    assert (rows["p1"].wins, rows["p1"].losses, rows["p1"].point_diff) == (1, 1, 2)
    assert (rows["p2"].wins, rows["p2"].point_diff) == (2, 12)
    assert (rows["p4"].wins, rows["p4"].point_diff) == (1, -2)
    assert rows["p1"].name == "Pat"


def test_session_standings_skip_ties_and_unscored():
    matches = [
        session_match("m1", ("p1",), ("p2",), (11, 11)),
        session_match("m2", ("p3",), ("p4",), None),
        session_match("m3", ("p1",), ("p3",), (11, 2)),
    ]
    rows = compute_session_standings(matches)
    assert [r.id for r in rows] == ["p1", "p3"]
    assert rows[0].matches_played == 1
    assert session_progress(matches) == (2, 3)


def test_sort_standings_is_stable_across_input_order():
    matches = regular_season()
    rows = compute_club_standings(league(matches))
    assert [r.id for r in sort_standings(reversed(rows))] == [r.id for r in rows]
