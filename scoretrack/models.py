from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

from scoretrack.config import (
    ADVANTAGE_LABEL,
    DEFAULT_BEST_OF,
    GAMES_TO_WIN_SET,
    MIN_LEAD,
    POINT_LABELS,
    POINTS_TO_WIN_GAME,
    TIEBREAK_AT_GAMES,
    TIEBREAK_POINTS,
)
from scoretrack.exceptions import (
    InvalidConfigurationError,
    InvalidPlayerError,
    StructuralInvariantError,
)


PLAYER_ONE = "player_one"
PLAYER_TWO = "player_two"
PLAYERS = (PLAYER_ONE, PLAYER_TWO)


def validate_player(player: str) -> str:
    if player not in PLAYERS:
        raise InvalidPlayerError(f"Invalid player: {player!r}")
    return player


def opponent_of(player: str) -> str:
    return PLAYER_TWO if validate_player(player) == PLAYER_ONE else PLAYER_ONE


def _leader(score_one: int, score_two: int, minimum: int) -> Optional[str]:
    """
    Player who has reached `minimum` with a winning margin, if any.
    """
    if score_one >= minimum and score_one - score_two >= MIN_LEAD:
        return PLAYER_ONE
    if score_two >= minimum and score_two - score_one >= MIN_LEAD:
        return PLAYER_TWO
    return None


# =========================================================
# GAME
# =========================================================

@dataclass
class GameScore:
    is_tiebreak: bool = False
    player_one_points: int = 0
    player_two_points: int = 0
    is_completed: bool = False
    winner: Optional[str] = None

    def points(self, player: str) -> int:
        if validate_player(player) == PLAYER_ONE:
            return self.player_one_points
        return self.player_two_points

    def score_point(self, player: str) -> bool:
        """
        Award one point. Returns False (and changes nothing) once the game
        is over.

        Outside a tiebreak, a point against a player holding advantage
        sends the game back to deuce (3-3) instead of levelling at 4-4.
        """
        opponent = opponent_of(player)

        if self.is_completed:
            return False

        if (
            not self.is_tiebreak
            and self.points(opponent) == POINTS_TO_WIN_GAME
            and self.points(player) == POINTS_TO_WIN_GAME - 1
        ):
            self.player_one_points = POINTS_TO_WIN_GAME - 1
            self.player_two_points = POINTS_TO_WIN_GAME - 1
        elif player == PLAYER_ONE:
            self.player_one_points += 1
        else:
            self.player_two_points += 1

        self._evaluate_completion()
        return True

    def _evaluate_completion(self):
        target = TIEBREAK_POINTS if self.is_tiebreak else POINTS_TO_WIN_GAME
        winner = _leader(self.player_one_points, self.player_two_points, target)

        if winner is not None:
            self.is_completed = True
            self.winner = winner

    def display_score(
        self,
        player_one_name: str = "Player 1",
        player_two_name: str = "Player 2",
    ) -> str:
        names = {PLAYER_ONE: player_one_name, PLAYER_TWO: player_two_name}
        one = self.player_one_points
        two = self.player_two_points

        if self.is_completed:
            return f"Game {names[self.winner]}"

        if self.is_tiebreak:
            return f"{one}-{two}"

        if one >= 3 and two >= 3:
            if one == two:
                return "Deuce"
            ahead = PLAYER_ONE if one > two else PLAYER_TWO
            return f"Advantage {names[ahead]}"

        return (
            f"{POINT_LABELS.get(one, ADVANTAGE_LABEL)}-"
            f"{POINT_LABELS.get(two, ADVANTAGE_LABEL)}"
        )


# =========================================================
# SET
# =========================================================

@dataclass
class SetScore:
    games: List[GameScore] = field(default_factory=list)
    is_completed: bool = False
    winner: Optional[str] = None

    def games_won(self, player: str) -> int:
        validate_player(player)
        return sum(
            1 for g in self.games
            if g.is_completed and g.winner == player
        )

    @property
    def player_one_games(self) -> int:
        return self.games_won(PLAYER_ONE)

    @property
    def player_two_games(self) -> int:
        return self.games_won(PLAYER_TWO)

    @property
    def current_game(self) -> Optional[GameScore]:
        return self.games[-1] if self.games else None

    def add_game(self, is_tiebreak: bool = False) -> Optional[GameScore]:
        if self.is_completed:
            return None

        if self.games and not self.games[-1].is_completed:
            raise StructuralInvariantError(
                "Cannot start a new game while the current game is in progress"
            )

        game = GameScore(is_tiebreak=is_tiebreak)
        self.games.append(game)
        return game

    @staticmethod
    def plays_tiebreak(is_final_set: bool, tiebreak_in_final_set: bool) -> bool:
        return not is_final_set or tiebreak_in_final_set

    def evaluate_completion(
        self,
        is_final_set: bool,
        tiebreak_in_final_set: bool,
    ) -> bool:
        """
        Tiebreak sets: first to 6 games with a 2-game lead, or 7-6 (the
        controller reaches 7-6 only through the tiebreak game at 6-6).

        Advantage sets (final set without tiebreak): first to 6 games with
        a 2-game lead, however long that takes.
        """
        if self.is_completed:
            return True

        one = self.player_one_games
        two = self.player_two_games

        winner = _leader(one, two, GAMES_TO_WIN_SET)

        if winner is None and self.plays_tiebreak(is_final_set, tiebreak_in_final_set):
            if min(one, two) == TIEBREAK_AT_GAMES and max(one, two) == TIEBREAK_AT_GAMES + 1:
                winner = PLAYER_ONE if one > two else PLAYER_TWO

        if winner is not None:
            self.is_completed = True
            self.winner = winner

        return self.is_completed

    def is_tiebreak_due(self, is_final_set: bool, tiebreak_in_final_set: bool) -> bool:
        return (
            not self.is_completed
            and self.plays_tiebreak(is_final_set, tiebreak_in_final_set)
            and self.player_one_games == TIEBREAK_AT_GAMES
            and self.player_two_games == TIEBREAK_AT_GAMES
        )


# =========================================================
# MATCH
# =========================================================

@dataclass
class MatchConfig:
    best_of_sets: int = DEFAULT_BEST_OF
    advantage_set: bool = True
    tiebreak_in_final_set: bool = True

    def validate(self):
        # bool is an int subclass; True must not pass as best of 1
        if isinstance(self.best_of_sets, bool) or not isinstance(self.best_of_sets, int):
            raise InvalidConfigurationError("best_of_sets must be an integer")

        if self.best_of_sets <= 0:
            raise InvalidConfigurationError("best_of_sets must be positive")

        if self.best_of_sets % 2 == 0:
            raise InvalidConfigurationError("best_of_sets must be odd")


@dataclass
class MatchState:
    player_one_name: str
    player_two_name: str
    best_of_sets: int = DEFAULT_BEST_OF
    advantage_set: bool = True
    tiebreak_in_final_set: bool = True
    date: datetime = field(default_factory=datetime.now)
    is_completed: bool = False
    sets: List[SetScore] = field(default_factory=list)

    @property
    def config(self) -> MatchConfig:
        return MatchConfig(
            best_of_sets=self.best_of_sets,
            advantage_set=self.advantage_set,
            tiebreak_in_final_set=self.tiebreak_in_final_set,
        )

    @property
    def sets_to_win(self) -> int:
        return (self.best_of_sets // 2) + 1

    def sets_won(self, player: str) -> int:
        validate_player(player)
        return sum(
            1 for s in self.sets
            if s.is_completed and s.winner == player
        )

    @property
    def winner(self) -> Optional[str]:
        if not self.is_completed:
            return None

        one = self.sets_won(PLAYER_ONE)
        two = self.sets_won(PLAYER_TWO)
        return PLAYER_ONE if one > two else PLAYER_TWO

    @property
    def winner_name(self) -> Optional[str]:
        winner = self.winner
        return self.player_name(winner) if winner else None

    def player_name(self, player: str) -> str:
        if validate_player(player) == PLAYER_ONE:
            return self.player_one_name
        return self.player_two_name

    @property
    def current_set(self) -> Optional[SetScore]:
        return self.sets[-1] if self.sets else None

    @property
    def current_game(self) -> Optional[GameScore]:
        current_set = self.current_set
        return current_set.current_game if current_set else None

    @property
    def is_final_set(self) -> bool:
        return len(self.sets) == self.best_of_sets

    def add_set(self) -> Optional[SetScore]:
        if self.is_completed:
            return None

        if self.sets and not self.sets[-1].is_completed:
            raise StructuralInvariantError(
                "Cannot start a new set while the current set is in progress"
            )

        set_score = SetScore()
        self.sets.append(set_score)
        return set_score

    def evaluate_completion(self) -> bool:
        required = self.sets_to_win

        if (
            self.sets_won(PLAYER_ONE) >= required
            or self.sets_won(PLAYER_TWO) >= required
        ):
            self.is_completed = True

        return self.is_completed


# =========================================================
# EVENTS & SNAPSHOTS
# =========================================================

@dataclass
class PointEvent:
    winner: str
    timestamp: Optional[float] = None


@dataclass(frozen=True)
class MatchSnapshot:
    point_number: int
    set_number: int
    games_one: int
    games_two: int
    game_score: str
    is_tiebreak: bool
    sets_one: int
    sets_two: int
    is_completed: bool
    winner: Optional[str]
    timestamp: Optional[float] = None
