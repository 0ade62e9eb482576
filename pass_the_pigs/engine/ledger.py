"""
Pass the Pigs - Turn Ledger and Score History

Append-only records. Appending returns a new instance; past entries are
never edited. The turn ledger is emptied whenever a turn ends, the score
history only by a full reset.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime

from pass_the_pigs.engine.base import Roll, ScoreHistoryEntry


@dataclass(frozen=True)
class TurnLedger:
    """
    Rolls made during the turn in progress.

    Attributes:
        rolls: Rolls in the order they were thrown
    """
    rolls: tuple[Roll, ...] = ()

    def __len__(self) -> int:
        return len(self.rolls)

    def __iter__(self) -> Iterator[Roll]:
        return iter(self.rolls)

    def append(self, roll: Roll) -> "TurnLedger":
        return TurnLedger(rolls=self.rolls + (roll,))

    def clear(self) -> "TurnLedger":
        return TurnLedger()

    @property
    def total_points(self) -> int:
        """Unbanked points for the turn (a Pig Out roll contributes 0)."""
        return sum(roll.points for roll in self.rolls)

    @property
    def last_roll(self) -> Roll | None:
        return self.rolls[-1] if self.rolls else None

    @property
    def has_pigged_out(self) -> bool:
        return any(roll.is_pig_out for roll in self.rolls)


@dataclass(frozen=True)
class ScoreHistory:
    """
    Every turn-ending event of the match.

    Grouping by turn relies only on each entry's ``turn_number``, never on
    its position in ``entries``.
    """
    entries: tuple[ScoreHistoryEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ScoreHistoryEntry]:
        return iter(self.entries)

    def append(self, entry: ScoreHistoryEntry) -> "ScoreHistory":
        return ScoreHistory(entries=self.entries + (entry,))

    @property
    def latest(self) -> ScoreHistoryEntry | None:
        return self.entries[-1] if self.entries else None

    def by_turn(self) -> dict[int, tuple[ScoreHistoryEntry, ...]]:
        """Entries grouped by turn number, most recent turn first.

        Within a turn, entries are ordered by timestamp.
        """
        grouped: dict[int, list[ScoreHistoryEntry]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.turn_number, []).append(entry)

        return {
            turn: tuple(sorted(grouped[turn], key=lambda e: e.timestamp))
            for turn in sorted(grouped, reverse=True)
        }

    def turn_numbers(self) -> tuple[int, ...]:
        """Distinct turn numbers, most recent first."""
        return tuple(sorted({e.turn_number for e in self.entries}, reverse=True))

    def for_turn(self, turn_number: int) -> tuple[ScoreHistoryEntry, ...]:
        return self.by_turn().get(turn_number, ())

    def for_player(self, player_id: str) -> tuple[ScoreHistoryEntry, ...]:
        return tuple(e for e in self.entries if e.player_id == player_id)

    def turn_span(self, turn_number: int) -> tuple[datetime, datetime] | None:
        """Earliest and latest timestamps recorded for a turn."""
        entries = self.for_turn(turn_number)
        if not entries:
            return None
        return entries[0].timestamp, entries[-1].timestamp
