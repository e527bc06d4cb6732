import logging
from typing import List, Optional, Tuple

from scoretrack.config import RECOMMENDED_BEST_OF
from scoretrack.exceptions import (
    AlreadyCompletedError,
    InvalidConfigurationError,
    InvalidStateError,
)
from scoretrack.models import (
    MatchConfig,
    MatchSnapshot,
    MatchState,
    PLAYER_ONE,
    PLAYER_TWO,
    PointEvent,
    validate_player,
)

logger = logging.getLogger(__name__)


class ScoreEngine:
    """
    Match controller.

    Responsibilities:
    - Apply a point to the current game
    - Cascade game -> set -> match completion
    - Open the next game (tiebreak at 6-6) or the next set
    - Produce consistent MatchSnapshot
    """

    def __init__(self, match: MatchState):
        self.match = match
        self._validate_initial_state()
        self._last_timestamp = None
        self._points_played = 0

    # =========================================================
    # PUBLIC API
    # =========================================================

    def record_point(self, player: str) -> MatchState:
        """
        Score one point for `player` and run every transition it triggers.
        """
        validate_player(player)

        if self.match.is_completed:
            raise AlreadyCompletedError("Match is already completed")

        current_set = self.match.current_set
        current_game = self.match.current_game

        if current_set is None or current_set.is_completed:
            raise InvalidStateError("No set in progress")

        if current_game is None or current_game.is_completed:
            raise InvalidStateError("No game in progress")

        current_game.score_point(player)
        self._points_played += 1

        if current_game.is_completed:
            self._on_game_completed()

        return self.match

    def process_event(self, event: PointEvent) -> MatchSnapshot:
        """
        Replay-friendly variant of record_point: points after the match
        ends are ignored and the final snapshot is returned unchanged.
        """
        validate_player(event.winner)

        if event.timestamp is not None:
            if self._last_timestamp is not None and event.timestamp < self._last_timestamp:
                raise ValueError("Event timestamp must be non-decreasing")
            self._last_timestamp = event.timestamp

        if not self.match.is_completed:
            self.record_point(event.winner)

        return self.snapshot(timestamp=event.timestamp)

    def snapshot(self, timestamp: Optional[float] = None) -> MatchSnapshot:
        current_set = self.match.current_set
        current_game = self.match.current_game

        return MatchSnapshot(
            point_number=self._points_played,
            set_number=len(self.match.sets),
            games_one=current_set.player_one_games if current_set else 0,
            games_two=current_set.player_two_games if current_set else 0,
            game_score=current_game_score(self.match),
            is_tiebreak=bool(current_game and current_game.is_tiebreak),
            sets_one=self.match.sets_won(PLAYER_ONE),
            sets_two=self.match.sets_won(PLAYER_TWO),
            is_completed=self.match.is_completed,
            winner=self.match.winner,
            timestamp=timestamp,
        )

    # =========================================================
    # VALIDATION
    # =========================================================

    def _validate_initial_state(self):
        self.match.config.validate()

        if not self.match.sets:
            self.match.add_set().add_game()

    # =========================================================
    # TRANSITIONS
    # =========================================================

    def _on_game_completed(self):
        match = self.match
        current_set = match.current_set
        game = current_set.current_game
        is_final_set = match.is_final_set

        logger.debug(
            "Game won by %s in set %d (%s)",
            game.winner,
            len(match.sets),
            "tiebreak" if game.is_tiebreak else "regular",
        )

        current_set.evaluate_completion(is_final_set, match.tiebreak_in_final_set)

        if current_set.is_completed:
            logger.info(
                "Set %d won by %s %d-%d",
                len(match.sets),
                current_set.winner,
                current_set.player_one_games,
                current_set.player_two_games,
            )

            if match.evaluate_completion():
                logger.info("Match won by %s", match.winner_name)
                return

            match.add_set().add_game(is_tiebreak=False)
            return

        tiebreak = current_set.is_tiebreak_due(is_final_set, match.tiebreak_in_final_set)
        current_set.add_game(is_tiebreak=tiebreak)

        if tiebreak:
            logger.debug("Tiebreak in set %d", len(match.sets))


# =========================================================
# MODULE API
# =========================================================

def create_match(
    player_one_name: str,
    player_two_name: str,
    best_of_sets: int = 3,
    advantage_set: bool = True,
    tiebreak_in_final_set: bool = True,
) -> MatchState:
    """
    Validate the configuration and return a match ready for its first
    point (first set and first game already open).
    """
    for name in (player_one_name, player_two_name):
        if not isinstance(name, str) or not name.strip():
            raise InvalidConfigurationError("Player names must not be empty")

    config = MatchConfig(
        best_of_sets=best_of_sets,
        advantage_set=advantage_set,
        tiebreak_in_final_set=tiebreak_in_final_set,
    )
    config.validate()

    if best_of_sets not in RECOMMENDED_BEST_OF:
        logger.warning("Unusual match length: best of %d sets", best_of_sets)

    match = MatchState(
        player_one_name=player_one_name.strip(),
        player_two_name=player_two_name.strip(),
        best_of_sets=config.best_of_sets,
        advantage_set=config.advantage_set,
        tiebreak_in_final_set=config.tiebreak_in_final_set,
    )
    match.add_set().add_game()
    return match


def record_point(match: MatchState, player: str) -> MatchState:
    return ScoreEngine(match).record_point(player)


def current_game_score(match: MatchState) -> str:
    game = match.current_game

    if match.is_completed or game is None:
        return ""

    return game.display_score(match.player_one_name, match.player_two_name)


def set_scores(match: MatchState) -> List[Tuple[int, int, bool, Optional[str]]]:
    return [
        (s.player_one_games, s.player_two_games, s.is_completed, s.winner)
        for s in match.sets
    ]


def match_winner(match: MatchState) -> Optional[str]:
    return match.winner


def is_completed(match: MatchState) -> bool:
    return match.is_completed
