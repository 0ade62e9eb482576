"""
Pass the Pigs - Game Session

Owns the single live snapshot for a match. Every change goes through the
engine, one action at a time; listeners are told what happened and the
result is optionally saved to a snapshot store.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from pass_the_pigs.config.settings import Settings, get_settings
from pass_the_pigs.engine.base import Pose
from pass_the_pigs.engine.game import GameEngine
from pass_the_pigs.engine.sampler import RandomSource
from pass_the_pigs.engine.state import GameSnapshot
from pass_the_pigs.events import EventPayload, classify_transition
from pass_the_pigs.persistence.store import SnapshotStore

logger = logging.getLogger(__name__)

Listener = Callable[[EventPayload], None]


class GameSession:
    """Serializes actions against one match and fans out the resulting events.

    Actions run under a lock so two callers can never interleave a roll with
    a hold. Listeners are called after the lock is released, in the order
    they subscribed; a failing listener is logged and skipped. When the store
    cannot save, the ``OSError`` propagates and the session keeps its previous
    snapshot.
    """

    def __init__(
        self,
        snapshot: GameSnapshot | None = None,
        *,
        store: SnapshotStore | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._snapshot = snapshot or GameEngine.new_game()
        self._store = store
        self._rng = rng
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        rng: RandomSource | None = None,
    ) -> GameSession:
        """Resume the stored match, or start a new one from the defaults.

        With autosave disabled nothing is read or written.
        """
        settings = settings or get_settings()
        if not settings.autosave:
            return cls(GameEngine.new_game(settings.game_config()), rng=rng)

        store = SnapshotStore(settings.snapshot_path, config=settings.game_config())
        return cls(store.load(), store=store, rng=rng)

    @property
    def snapshot(self) -> GameSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Commands --------------------------------------------------------

    def start(self) -> GameSnapshot:
        return self._apply(GameEngine.start)

    def roll(self, pigs: tuple[Pose, Pose] | None = None) -> GameSnapshot:
        return self._apply(GameEngine.roll, rng=self._rng, pigs=pigs)

    def pass_pigs(self) -> GameSnapshot:
        return self._apply(GameEngine.pass_pigs)

    def hold(self) -> GameSnapshot:
        return self._apply(GameEngine.hold)

    # -- Setup helpers ---------------------------------------------------

    def add_player(self, name: str | None = None) -> GameSnapshot:
        return self._apply(GameEngine.add_player, name)

    def remove_player(self, player_id: str) -> GameSnapshot:
        return self._apply(GameEngine.remove_player, player_id)

    def rename_player(self, player_id: str, name: str) -> GameSnapshot:
        return self._apply(GameEngine.rename_player, player_id, name)

    def set_target_score(self, target: int) -> GameSnapshot:
        return self._apply(GameEngine.set_target_score, target)

    def set_weight(self, pose: Pose, value: float) -> GameSnapshot:
        return self._apply(GameEngine.set_weight, pose, value)

    def set_weights(self, weights: Mapping[Pose, float]) -> GameSnapshot:
        return self._apply(GameEngine.set_weights, weights)

    def reset_weights(self) -> GameSnapshot:
        return self._apply(GameEngine.reset_weights)

    def reset(self, hard: bool = False) -> GameSnapshot:
        return self._apply(GameEngine.reset, hard=hard)

    # -- Internals -------------------------------------------------------

    def _apply(self, action: Callable[..., GameSnapshot], *args: Any, **kwargs: Any) -> GameSnapshot:
        with self._lock:
            before = self._snapshot
            after = action(before, *args, **kwargs)
            if after is before:
                return before
            # Only advance once the new snapshot is safely stored
            if self._store is not None:
                self._store.save(after)
            self._snapshot = after

        for payload in classify_transition(before, after):
            self._notify(payload)
        return after

    def _notify(self, payload: EventPayload) -> None:
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener failed handling %s", payload.event.name)
