from scoretrack.engine import (
    ScoreEngine,
    create_match,
    current_game_score,
    is_completed,
    match_winner,
    record_point,
    set_scores,
)
from scoretrack.exceptions import (
    AlreadyCompletedError,
    InvalidConfigurationError,
    InvalidPlayerError,
    InvalidStateError,
)
from scoretrack.models import PLAYER_ONE, PLAYER_TWO
import pytest


def create_engine(best_of=3, tiebreak_in_final_set=True):
    match = create_match(
        "Player One",
        "Player Two",
        best_of_sets=best_of,
        tiebreak_in_final_set=tiebreak_in_final_set,
    )
    return ScoreEngine(match)


def win_game(engine, player):
    for _ in range(4):
        engine.record_point(player)


def win_set(engine, player, games=6):
    for _ in range(games):
        win_game(engine, player)


def reach_six_all(engine):
    for _ in range(6):
        win_game(engine, PLAYER_ONE)
        win_game(engine, PLAYER_TWO)


# ---------- CREATION ----------

def test_create_match_opens_first_set_and_game():
    match = create_match("Ann", "Bea")

    assert len(match.sets) == 1
    assert len(match.sets[0].games) == 1
    assert match.best_of_sets == 3
    assert match.advantage_set is True
    assert match.tiebreak_in_final_set is True
    assert match.date is not None
    assert not is_completed(match)
    assert current_game_score(match) == "0-0"


@pytest.mark.parametrize("best_of", [0, -1, 2, 4, "3", 3.0, True])
def test_invalid_best_of_rejected(best_of):
    with pytest.raises(InvalidConfigurationError):
        create_match("Ann", "Bea", best_of_sets=best_of)


@pytest.mark.parametrize("one, two", [("", "Bea"), ("Ann", "   "), (None, "Bea")])
def test_empty_player_names_rejected(one, two):
    with pytest.raises(InvalidConfigurationError):
        create_match(one, two)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        create_match("Ann", "Bea", best_of_sets=4)


# ---------- SCENARIO A: 6-0 SET ----------

def test_six_love_set():
    engine = create_engine()

    win_set(engine, PLAYER_ONE)

    first = engine.match.sets[0]
    assert (first.player_one_games, first.player_two_games) == (6, 0)
    assert first.is_completed
    assert first.winner == PLAYER_ONE
    assert len(engine.match.sets) == 2
    assert not engine.match.is_completed


# ---------- SCENARIO B: DEUCE / ADVANTAGE ----------

def test_deuce_advantage_through_controller():
    engine = create_engine()
    match = engine.match
    path = []

    for player in [PLAYER_ONE] * 3 + [PLAYER_TWO] * 3 + [PLAYER_ONE]:
        engine.record_point(player)
        path.append(current_game_score(match))

    assert path == [
        "15-0", "30-0", "40-0", "40-15", "40-30",
        "Deuce", "Advantage Player One",
    ]

    engine.record_point(PLAYER_ONE)

    assert match.sets[0].player_one_games == 1
    assert len(match.sets[0].games) == 2
    assert current_game_score(match) == "0-0"


# ---------- SCENARIO C: TIEBREAK ----------

def test_tiebreak_at_six_all():
    engine = create_engine()
    reach_six_all(engine)

    current = engine.match.current_game
    assert current.is_tiebreak
    assert not engine.match.sets[0].is_completed

    for _ in range(7):
        engine.record_point(PLAYER_ONE)

    first = engine.match.sets[0]
    assert (current.player_one_points, current.player_two_points) == (7, 0)
    assert first.is_completed
    assert first.winner == PLAYER_ONE
    assert (first.player_one_games, first.player_two_games) == (7, 6)
    assert not engine.match.current_game.is_tiebreak


def test_tiebreak_display_uses_raw_points():
    engine = create_engine()
    reach_six_all(engine)

    engine.record_point(PLAYER_ONE)
    engine.record_point(PLAYER_ONE)
    engine.record_point(PLAYER_TWO)

    assert current_game_score(engine.match) == "2-1"


def test_games_before_six_all_are_regular():
    engine = create_engine()

    for _ in range(5):
        win_game(engine, PLAYER_ONE)
        win_game(engine, PLAYER_TWO)
    win_game(engine, PLAYER_ONE)

    assert not any(g.is_tiebreak for g in engine.match.sets[0].games)


# ---------- SCENARIO D: ADVANTAGE FINAL SET ----------

def test_advantage_final_set():
    engine = create_engine(best_of=3, tiebreak_in_final_set=False)

    win_set(engine, PLAYER_ONE)
    win_set(engine, PLAYER_TWO)

    assert len(engine.match.sets) == 3

    for _ in range(7):
        win_game(engine, PLAYER_ONE)
        win_game(engine, PLAYER_TWO)
    win_game(engine, PLAYER_ONE)

    final = engine.match.sets[2]
    assert (final.player_one_games, final.player_two_games) == (8, 7)
    assert not final.is_completed
    assert not any(g.is_tiebreak for g in final.games)

    win_game(engine, PLAYER_ONE)

    assert final.is_completed
    assert (final.player_one_games, final.player_two_games) == (9, 7)
    assert engine.match.is_completed
    assert match_winner(engine.match) == PLAYER_ONE


def test_final_set_tiebreak_when_enabled():
    engine = create_engine(best_of=3, tiebreak_in_final_set=True)

    win_set(engine, PLAYER_ONE)
    win_set(engine, PLAYER_TWO)
    reach_six_all(engine)

    assert engine.match.current_game.is_tiebreak

    for _ in range(7):
        engine.record_point(PLAYER_TWO)

    assert engine.match.is_completed
    assert match_winner(engine.match) == PLAYER_TWO


def test_non_final_set_uses_tiebreak_even_without_final_tiebreak():
    engine = create_engine(best_of=3, tiebreak_in_final_set=False)
    reach_six_all(engine)

    assert engine.match.current_game.is_tiebreak


# ---------- MATCH RESULTS ----------

@pytest.mark.parametrize("best_of, sequence, expected_winner", [
    (1, ["A"], PLAYER_ONE),
    (3, ["A", "A"], PLAYER_ONE),
    (3, ["A", "B", "B"], PLAYER_TWO),
    (5, ["A", "A", "A"], PLAYER_ONE),
    (5, ["A", "B", "A", "B", "A"], PLAYER_ONE),
    (5, ["B", "A", "B", "A", "B"], PLAYER_TWO),
])
def test_match_outcomes(best_of, sequence, expected_winner):
    engine = create_engine(best_of=best_of)

    for winner in sequence:
        win_set(engine, PLAYER_ONE if winner == "A" else PLAYER_TWO)

    assert engine.match.is_completed is True
    assert match_winner(engine.match) == expected_winner
    assert len(engine.match.sets) == len(sequence)


def test_set_scores_accessor():
    engine = create_engine()

    win_set(engine, PLAYER_ONE)
    win_game(engine, PLAYER_TWO)

    assert set_scores(engine.match) == [
        (6, 0, True, PLAYER_ONE),
        (0, 1, False, None),
    ]


# ---------- LOCK AFTER FINISH ----------

def test_lock_after_finish():
    engine = create_engine(best_of=3)

    win_set(engine, PLAYER_ONE)
    win_set(engine, PLAYER_ONE)

    assert engine.match.is_completed is True
    assert current_game_score(engine.match) == ""

    with pytest.raises(AlreadyCompletedError):
        engine.record_point(PLAYER_TWO)

    assert len(engine.match.sets) == 2


def test_invalid_player_rejected():
    engine = create_engine()

    with pytest.raises(InvalidPlayerError):
        engine.record_point("player_a")


def test_completed_current_game_is_invalid_state():
    engine = create_engine()
    engine.match.current_game.is_completed = True

    with pytest.raises(InvalidStateError):
        engine.record_point(PLAYER_ONE)


def test_module_level_record_point_mutates_match():
    match = create_match("Ann", "Bea")

    returned = record_point(match, PLAYER_TWO)

    assert returned is match
    assert match.current_game.player_two_points == 1
