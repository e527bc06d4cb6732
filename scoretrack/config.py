DEFAULT_BEST_OF = 3
RECOMMENDED_BEST_OF = (1, 3, 5)

POINTS_TO_WIN_GAME = 4
TIEBREAK_POINTS = 7
GAMES_TO_WIN_SET = 6
TIEBREAK_AT_GAMES = 6
MIN_LEAD = 2

POINT_LABELS = {0: "0", 1: "15", 2: "30", 3: "40"}
ADVANTAGE_LABEL = "A"
