from scoretrack.engine import ScoreEngine, create_match, current_game_score
from scoretrack.models import PLAYER_ONE, PLAYER_TWO


def build_match_timeline(
    winner_sequence: list[str],
    best_of_sets: int = 3,
    advantage_set: bool = True,
    tiebreak_in_final_set: bool = True,
) -> list[dict]:
    """
    Replays a match from scratch using winner_sequence.
    Returns a flattened timeline after each point.
    Stops at the point that completes the match.
    """

    match = create_match(
        "Player 1",
        "Player 2",
        best_of_sets=best_of_sets,
        advantage_set=advantage_set,
        tiebreak_in_final_set=tiebreak_in_final_set,
    )

    engine = ScoreEngine(match)

    timeline: list[dict] = []

    for index, winner in enumerate(winner_sequence):

        engine.record_point(winner)

        current_set = match.sets[-1]

        snapshot = {
            "point_index": index + 1,
            "set_number": len(match.sets),
            "games_one": current_set.player_one_games,
            "games_two": current_set.player_two_games,
            "game_score": current_game_score(match),
            "sets_one": match.sets_won(PLAYER_ONE),
            "sets_two": match.sets_won(PLAYER_TWO),
            "is_completed": match.is_completed,
            "winner": match.winner,
        }

        timeline.append(snapshot)

        if match.is_completed:
            break

    return timeline
