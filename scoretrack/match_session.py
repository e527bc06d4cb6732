import logging
import threading
from typing import List, Dict, Optional
from copy import deepcopy

from scoretrack.engine import ScoreEngine, create_match
from scoretrack.exceptions import AlreadyCompletedError
from scoretrack.models import MatchConfig, MatchState, PointEvent, MatchSnapshot

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Single live match session.

    Responsibilities:
    - Manage one ScoreEngine instance
    - Serialize point recording for the match
    - Bulk replay point events (atomic)
    - Store timeline snapshots, undo the last point
    - Export recorded point events
    """

    def __init__(
        self,
        player_one_name: str,
        player_two_name: str,
        config: Optional[MatchConfig] = None,
    ):
        self._names = (player_one_name, player_two_name)
        self._config = config or MatchConfig()
        self._lock = threading.Lock()
        self._engine = self._new_engine()
        self._timeline: List[MatchSnapshot] = []
        self._events: List[PointEvent] = []

    # ---------------------------------------------------------
    # Core API
    # ---------------------------------------------------------

    @property
    def match(self) -> MatchState:
        return self._engine.match

    def record_point(self, player: str, timestamp: Optional[float] = None) -> MatchSnapshot:
        event = PointEvent(winner=player, timestamp=timestamp)

        with self._lock:
            if self.match.is_completed:
                raise AlreadyCompletedError("Match is already completed")

            # Same ordering rules as replay, so undo and reload rebuild this match
            snapshot = self._engine.process_event(event)
            self._events.append(event)
            self._timeline.append(snapshot)

        return snapshot

    def load_events(self, events: List[Dict]) -> List[MatchSnapshot]:
        """
        Bulk load point events from list of dicts.
        Atomic: if any event fails -> no state mutation.
        """
        if not isinstance(events, list):
            raise ValueError("events must be a list")

        # Convert first (validation stage)
        point_events = []
        for e in events:
            if not isinstance(e, dict) or "winner" not in e:
                raise ValueError("invalid event format")

            timestamp = e.get("timestamp")
            point_events.append(
                PointEvent(
                    winner=e["winner"],
                    timestamp=float(timestamp) if timestamp is not None else None,
                )
            )

        if all(e.timestamp is not None for e in point_events):
            point_events.sort(key=lambda x: x.timestamp)

        with self._lock:
            engine, timeline = self._replay(point_events)

            self._engine = engine
            self._timeline = timeline
            self._events = point_events

        logger.info("Replayed %d points", len(point_events))
        return deepcopy(self._timeline)

    def undo_last_point(self) -> Optional[MatchSnapshot]:
        """
        Rebuild the match without its last recorded point. Returns the
        snapshot now current, or None when no points remain.
        """
        with self._lock:
            if not self._events:
                raise RuntimeError("No points to undo")

            remaining = self._events[:-1]
            engine, timeline = self._replay(remaining)

            self._engine = engine
            self._timeline = timeline
            self._events = remaining

        logger.info("Undid last point, %d points remain", len(remaining))
        return self._timeline[-1] if self._timeline else None

    def get_snapshot(self) -> MatchSnapshot:
        if not self._timeline:
            raise RuntimeError("No points recorded")

        return self._timeline[-1]

    def get_timeline(self) -> List[MatchSnapshot]:
        return deepcopy(self._timeline)

    def export_events(self) -> List[Dict]:
        exported = []
        for e in self._events:
            item = {"winner": e.winner}
            if e.timestamp is not None:
                item["timestamp"] = e.timestamp
            exported.append(item)
        return exported

    def reset(self):
        with self._lock:
            self._engine = self._new_engine()
            self._timeline = []
            self._events = []

    # ---------------------------------------------------------
    # Internals
    # ---------------------------------------------------------

    def _new_engine(self) -> ScoreEngine:
        match = create_match(
            self._names[0],
            self._names[1],
            best_of_sets=self._config.best_of_sets,
            advantage_set=self._config.advantage_set,
            tiebreak_in_final_set=self._config.tiebreak_in_final_set,
        )
        return ScoreEngine(match)

    def _replay(self, events: List[PointEvent]):
        # Temp engine so a failing event leaves the session untouched
        engine = self._new_engine()
        timeline: List[MatchSnapshot] = []

        for event in events:
            timeline.append(engine.process_event(event))

        return engine, timeline
