import logging

from scoretrack.engine import ScoreEngine, create_match, set_scores
from scoretrack.exceptions import AlreadyCompletedError
from scoretrack.models import PLAYER_ONE, PLAYER_TWO

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

match = create_match("Alcaraz", "Sinner", best_of_sets=3, tiebreak_in_final_set=False)

engine = ScoreEngine(match)


def win_games(player, count):
    for _ in range(count):
        for _ in range(4):
            engine.record_point(player)


# Set 1: Alcaraz 6-3
win_games(PLAYER_ONE, 3)
win_games(PLAYER_TWO, 3)
win_games(PLAYER_ONE, 3)

# Set 2: Sinner 7-6 through the tiebreak
win_games(PLAYER_ONE, 5)
win_games(PLAYER_TWO, 6)
win_games(PLAYER_ONE, 1)
for _ in range(7):
    engine.record_point(PLAYER_TWO)

# Set 3: advantage set, Alcaraz 10-8
for _ in range(8):
    win_games(PLAYER_ONE, 1)
    win_games(PLAYER_TWO, 1)
win_games(PLAYER_ONE, 2)

for number, (one, two, _, winner) in enumerate(set_scores(match), 1):
    print(f"Set {number}: {one} - {two} (Winner: {match.player_name(winner)})")

print("Match winner:", match.winner_name)

print("\nTrying to add illegal point...")

try:
    engine.record_point(PLAYER_TWO)
except AlreadyCompletedError as e:
    print("Rejected:", e)
