# scripts/replay_points.py
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from scoretrack.config import DEFAULT_BEST_OF
from scoretrack.engine import current_game_score, set_scores
from scoretrack.exceptions import ScoreTrackError
from scoretrack.match_session import MatchSession
from scoretrack.models import MatchConfig, PLAYER_ONE, PLAYER_TWO

POINT_CODES = {"1": PLAYER_ONE, "2": PLAYER_TWO}


def parse_points(points: str) -> List[str]:
    sequence = []
    for ch in points:
        if ch.isspace() or ch in ",-":
            continue
        if ch not in POINT_CODES:
            raise ValueError(f"Invalid point code {ch!r}, expected 1 or 2")
        sequence.append(POINT_CODES[ch])
    return sequence


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Replay a tennis match from a sequence of point winners (1/2)."
    )
    p.add_argument("points", help="Point winners, e.g. 1111 2222 1121")
    p.add_argument("--best-of", type=int, default=DEFAULT_BEST_OF)
    p.add_argument("--no-final-tiebreak", action="store_true",
                   help="Play the final set as an advantage set")
    p.add_argument("--player-one", default="Player 1")
    p.add_argument("--player-two", default="Player 2")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        session = MatchSession(
            args.player_one,
            args.player_two,
            MatchConfig(
                best_of_sets=args.best_of,
                tiebreak_in_final_set=not args.no_final_tiebreak,
            ),
        )
        session.load_events([{"winner": w} for w in parse_points(args.points)])
    except (ScoreTrackError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    match = session.match

    for number, (one, two, completed, _) in enumerate(set_scores(match), 1):
        state = "" if completed else " (in progress)"
        print(f"Set {number}: {one} - {two}{state}")

    if match.is_completed:
        print(f"Winner: {match.winner_name}")
    else:
        print(f"Current game: {current_game_score(match)}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
