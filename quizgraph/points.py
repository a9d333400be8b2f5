from __future__ import annotations

import logging
from typing import Callable, Iterable

from quizgraph.spec import DataPoint


LOGGER = logging.getLogger(__name__)

PointsObserver = Callable[[tuple[DataPoint, ...]], None]


class PlacedPointStore:
    """Insertion-ordered user-placed points.

    Every mutation that changes the contents calls the observer synchronously
    with the full updated list. Matching is by exact coordinate equality.
    """

    def __init__(self, observer: PointsObserver | None = None) -> None:
        self._points: list[DataPoint] = []
        self._observer = observer

    def set_observer(self, observer: PointsObserver | None) -> None:
        self._observer = observer

    def __len__(self) -> int:
        return len(self._points)

    def list(self) -> tuple[DataPoint, ...]:
        return tuple(self._points)

    def contains(self, point: DataPoint) -> bool:
        return point in self._points

    def add(self, point: DataPoint) -> None:
        self._points.append(point)
        self._notify()

    def remove_exact(self, point: DataPoint) -> bool:
        try:
            self._points.remove(point)
        except ValueError:
            return False
        self._notify()
        return True

    def remove_last(self) -> DataPoint | None:
        if not self._points:
            return None
        removed = self._points.pop()
        self._notify()
        return removed

    def toggle(self, point: DataPoint) -> bool:
        """Remove `point` if present, otherwise append it. Returns True when added."""
        if self.contains(point):
            self.remove_exact(point)
            return False
        self.add(point)
        return True

    def clear(self) -> None:
        self._points.clear()
        self._notify()

    def restore(self, points: Iterable[DataPoint]) -> None:
        """Replace the contents without notifying (used when resuming a saved answer)."""
        self._points = list(points)
        LOGGER.debug("restored %d placed point(s)", len(self._points))

    def _notify(self) -> None:
        if self._observer is None:
            return
        snapshot = tuple(self._points)
        try:
            self._observer(snapshot)
        except Exception:
            LOGGER.exception("placed-points observer failed")
            raise
