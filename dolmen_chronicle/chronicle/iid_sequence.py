"""
Generator for internal IDs (IIDs): small incrementing integers that identify
things such as light sources within one chronicle entity.
"""

from typing import Any

from dolmen_chronicle.chronicle.observable import Observable


class IidGenerator(Observable):
    """One or more independent IID sequences, keyed by category."""

    def __init__(self):
        super().__init__()
        self._last_iids: dict[str, int] = {}

    def next(self, category: str) -> int:
        """Issue the next IID for a category. The first IID issued is 1."""
        with self._mutation():
            iid = self._last_iids.get(category, 0) + 1
            self._last_iids[category] = iid
            return iid

    def peek(self, category: str) -> int:
        """Get the last IID issued for a category, or 0 if none has been."""
        return self._last_iids.get(category, 0)

    def to_dict(self) -> dict[str, int]:
        """Serialize as a mapping of category to last-issued IID."""
        return dict(self._last_iids)

    def load_dict(self, state: dict[str, Any]) -> None:
        """
        Replace every sequence from a serialized state.

        Raises:
            ValueError: If a value is not a non-negative integer
        """
        last_iids = {}
        for category, last_iid in state.items():
            if not isinstance(last_iid, int) or isinstance(last_iid, bool) or last_iid < 0:
                raise ValueError(f"Invalid IID for sequence '{category}': {last_iid!r}")
            last_iids[str(category)] = last_iid

        with self._mutation():
            self._last_iids = last_iids
