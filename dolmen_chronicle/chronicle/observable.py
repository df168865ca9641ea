"""
Change notification for chronicle aggregates.

Every mutator of a Delve, Encounter, EventLog or IidGenerator runs inside
_mutation(), and subscribers are told once the outermost mutation finishes.
A mutator that calls other mutators (an encounter shortcut, a multi-turn
advance) still produces a single notification. Accessors never notify.
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator
import logging

logger = logging.getLogger(__name__)


ChangeCallback = Callable[[Any], None]


class Observable:
    """Base class for entities that announce changes to their state."""

    def __init__(self):
        self._subscribers: list[ChangeCallback] = []
        self._mutation_depth: int = 0
        self._changed: bool = False

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Subscribe to change notifications.

        Args:
            callback: Called with this entity after each completed mutation

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Unsubscribe from change notifications."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        """
        Wrap a state change.

        Notifies subscribers once when the outermost mutation completes
        without raising. Call _mark_unchanged() inside a mutation that turns
        out to be a no-op.
        """
        if self._mutation_depth == 0:
            self._changed = True
        self._mutation_depth += 1
        try:
            yield
        finally:
            self._mutation_depth -= 1

        if self._mutation_depth == 0 and self._changed:
            self._changed = False
            self._notify_subscribers()

    def _mark_unchanged(self) -> None:
        """Suppress the notification for the current (outermost) mutation."""
        if self._mutation_depth == 1:
            self._changed = False

    def _notify_subscribers(self) -> None:
        for subscriber in list(self._subscribers):
            try:
                subscriber(self)
            except Exception as e:
                logger.warning(f"Subscriber error: {e}")
