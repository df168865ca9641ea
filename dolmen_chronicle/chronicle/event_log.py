"""
Event Log for chronicle entities.

An ordered record of the interesting things that happened during a delve,
stamped with both the game time and the real time they were recorded at.
Rewinding the game clock rewinds the log with it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional
import logging

from dolmen_chronicle.chronicle.observable import Observable
from dolmen_chronicle.date_time import GameDateTime, from_timestamp, to_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventLogEntry:
    """A single logged event."""

    description: str
    game_time: GameDateTime  # When the event happened in the game world
    real_time: datetime  # When the event was recorded

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "game_time": to_timestamp(self.game_time),
            "real_time": self.real_time.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EventLogEntry":
        game_time = data.get("game_time")
        if not isinstance(game_time, int) or game_time < 0:
            raise ValueError(f"Invalid event game_time: {game_time!r}")

        real_time = data.get("real_time")
        if real_time is not None and not isinstance(real_time, str):
            raise ValueError(f"Invalid event real_time: {real_time!r}")
        return cls(
            description=str(data.get("description", "")),
            game_time=from_timestamp(game_time),
            real_time=datetime.fromisoformat(real_time) if real_time else datetime.now(),
        )


class EventLog(Observable):
    """A log of interesting events which have happened during a chronicle."""

    def __init__(self):
        super().__init__()
        self._events: list[EventLogEntry] = []

    @property
    def events(self) -> tuple[EventLogEntry, ...]:
        """All events, in the order they were added."""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[EventLogEntry]:
        return iter(tuple(self._events))

    def add_event(
        self,
        description: str,
        game_time: GameDateTime,
        real_time: Optional[datetime] = None,
    ) -> EventLogEntry:
        """Append an event to the log."""
        entry = EventLogEntry(
            description=description,
            game_time=game_time,
            real_time=real_time or datetime.now(),
        )
        with self._mutation():
            self._events.append(entry)
        logger.debug(f"Event logged at {game_time}: {description}")
        return entry

    def events_at(self, game_time: GameDateTime) -> list[EventLogEntry]:
        """Get the events logged at exactly the given game time."""
        target = to_timestamp(game_time)
        return [e for e in self._events if to_timestamp(e.game_time) == target]

    def rewind_to(self, game_time: GameDateTime) -> int:
        """
        Rewind the log to a game time, removing every event after it.

        Events at exactly `game_time` are kept.

        Returns:
            Number of events removed
        """
        target = to_timestamp(game_time)
        kept = [e for e in self._events if to_timestamp(e.game_time) <= target]
        removed = len(self._events) - len(kept)

        if removed:
            with self._mutation():
                self._events = kept
            logger.debug(f"Rewound event log to {game_time}, removed {removed} event(s)")
        return removed

    def clear(self) -> None:
        """Remove every event."""
        with self._mutation():
            self._events = []

    def to_dict(self) -> list[dict[str, Any]]:
        """Serialize the events, with game times as timestamps."""
        return [event.to_dict() for event in self._events]

    def load_dict(self, state: list[dict[str, Any]]) -> None:
        """Replace the events from a serialized state."""
        events = [EventLogEntry.from_dict(event) for event in state]
        with self._mutation():
            self._events = events
