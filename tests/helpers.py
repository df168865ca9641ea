"""
Test helpers for the Dolmen Chronicle test suite.

Provides deterministic dice:
- ScriptedDiceRoller returns queued die faces in order
- RecordingSubscriber counts change notifications
"""

from typing import Any, Iterable, Optional

from dolmen_chronicle.data_models import DiceRoller


# =============================================================================
# DETERMINISTIC DICE
# =============================================================================


class ScriptedDiceRoller(DiceRoller):
    """
    A DiceRoller that returns queued die faces instead of random ones.

    Each face is used for one die, so "2d6*10" consumes two faces. Once the
    queue is empty, the fallback face is used (or an error is raised if
    there is none).

    Usage:
        dice = ScriptedDiceRoller([1, 4, 3])
        dice.roll("1d6").total  # 1
        dice.roll("2d6*10").total  # 70
    """

    def __init__(self, faces: Optional[Iterable[int]] = None, fallback: Optional[int] = None):
        super().__init__(seed=0)
        self._faces: list[int] = list(faces or [])
        self.fallback = fallback

    def queue(self, *faces: int) -> "ScriptedDiceRoller":
        """Queue more die faces."""
        self._faces.extend(faces)
        return self

    @property
    def remaining(self) -> list[int]:
        return list(self._faces)

    def _roll_die(self, sides: int) -> int:
        if self._faces:
            face = self._faces.pop(0)
        elif self.fallback is not None:
            face = self.fallback
        else:
            raise AssertionError(f"No scripted face left for a d{sides}")

        if not 1 <= face <= sides:
            raise AssertionError(f"Scripted face {face} is not possible on a d{sides}")
        return face


# =============================================================================
# CHANGE NOTIFICATION
# =============================================================================


class RecordingSubscriber:
    """Callable subscriber that records every entity it is notified with."""

    def __init__(self):
        self.calls: list[Any] = []

    def __call__(self, entity: Any) -> None:
        self.calls.append(entity)

    @property
    def count(self) -> int:
        return len(self.calls)
