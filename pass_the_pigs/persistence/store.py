"""
Pass the Pigs - Snapshot Store

Keeps the latest snapshot in a JSON file. Loading never fails: a missing,
unreadable or invalid file yields a fresh match.
"""

import logging
import os
from pathlib import Path

from pass_the_pigs.engine.base import GameConfig
from pass_the_pigs.engine.game import GameEngine
from pass_the_pigs.engine.state import GameSnapshot
from pass_the_pigs.persistence.serializer import dumps, loads

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes a single snapshot file."""

    def __init__(self, path: str | Path, config: GameConfig | None = None) -> None:
        self.path = Path(path)
        self.config = config or GameConfig()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> GameSnapshot:
        """Load the stored snapshot, or a new match if there is none usable."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.debug("No snapshot at %s; starting a new match", self.path)
            return GameEngine.new_game(self.config)
        except OSError:
            logger.exception("Could not read snapshot at %s", self.path)
            return GameEngine.new_game(self.config)

        try:
            return loads(raw.decode("utf-8"))
        except ValueError as exc:
            logger.warning("Discarding unusable snapshot at %s: %s", self.path, exc)
            return GameEngine.new_game(self.config)

    def save(self, snapshot: GameSnapshot) -> None:
        """Write the snapshot atomically (temp file, then replace).

        Raises:
            OSError: If the file cannot be written
        """
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(dumps(snapshot), encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError:
            logger.exception("Failed to save snapshot to %s", self.path)
            raise

    def clear(self) -> None:
        """Forget the stored snapshot."""
        self.path.unlink(missing_ok=True)
