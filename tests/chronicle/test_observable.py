"""
Tests for change notification (dolmen_chronicle/chronicle/observable.py).
"""

import logging
from unittest.mock import MagicMock

from dolmen_chronicle.chronicle.observable import Observable


class Counter(Observable):
    """Minimal observable used to exercise the base class."""

    def __init__(self):
        super().__init__()
        self.value = 0

    def increment(self):
        with self._mutation():
            self.value += 1

    def increment_twice(self):
        with self._mutation():
            self.increment()
            self.increment()

    def set(self, value):
        with self._mutation():
            if value == self.value:
                self._mark_unchanged()
                return
            self.value = value

    def fail(self):
        with self._mutation():
            self.value += 100
            raise RuntimeError("boom")


class TestObservable:
    """Tests for Observable."""

    def test_notifies_after_mutation(self):
        counter = Counter()
        callback = MagicMock()
        counter.subscribe(callback)

        counter.increment()

        callback.assert_called_once_with(counter)

    def test_nested_mutations_notify_once(self):
        """A mutator calling other mutators produces a single notification."""
        counter = Counter()
        callback = MagicMock()
        counter.subscribe(callback)

        counter.increment_twice()

        assert counter.value == 2
        assert callback.call_count == 1

    def test_notification_sees_final_state(self):
        counter = Counter()
        seen = []
        counter.subscribe(lambda c: seen.append(c.value))

        counter.increment_twice()

        assert seen == [2]

    def test_unchanged_mutation_does_not_notify(self):
        counter = Counter()
        callback = MagicMock()
        counter.subscribe(callback)

        counter.set(0)

        callback.assert_not_called()

    def test_failed_mutation_does_not_notify(self):
        counter = Counter()
        callback = MagicMock()
        counter.subscribe(callback)

        try:
            counter.fail()
        except RuntimeError:
            pass

        callback.assert_not_called()
        counter.increment()
        assert callback.call_count == 1

    def test_unsubscribe_function(self):
        counter = Counter()
        callback = MagicMock()
        unsubscribe = counter.subscribe(callback)

        unsubscribe()
        unsubscribe()
        counter.increment()

        callback.assert_not_called()

    def test_unsubscribe_unknown_callback(self):
        """Unsubscribing a callback that was never subscribed is harmless."""
        Counter().unsubscribe(MagicMock())

    def test_failing_subscriber_is_logged(self, caplog):
        """A subscriber that raises does not stop the others."""
        counter = Counter()
        other = MagicMock()
        counter.subscribe(MagicMock(side_effect=ValueError("bad subscriber")))
        counter.subscribe(other)

        with caplog.at_level(logging.WARNING):
            counter.increment()

        other.assert_called_once_with(counter)
        assert "Subscriber error: bad subscriber" in caplog.text
