"""Point-buy allocator for SPECIAL during character creation."""
from __future__ import annotations

from typing import List, Tuple

from wasteland.core.validation import MAX_SPECIAL_POINTS, MAX_STAT_VALUE, MIN_STAT_VALUE
from wasteland.domain.entities.special import STAT_NAMES, Special

StatIndex = int | str


class StatAllocator:
    """Tracks seven stat values and the points spent on them.

    ``points_spent`` always equals ``sum(stats)`` and stays within 7..40. The
    allocator can be reused: ``reset`` returns it to all 1s.
    """

    def __init__(self) -> None:
        self._stats: List[int] = [MIN_STAT_VALUE] * len(STAT_NAMES)
        self._points_spent = MIN_STAT_VALUE * len(STAT_NAMES)
        self._selected = 0

    @property
    def stats(self) -> Tuple[int, ...]:
        return tuple(self._stats)

    @property
    def points_spent(self) -> int:
        return self._points_spent

    @property
    def points_remaining(self) -> int:
        return MAX_SPECIAL_POINTS - self._points_spent

    @property
    def is_complete(self) -> bool:
        return self._points_spent == MAX_SPECIAL_POINTS

    @property
    def selected(self) -> int:
        return self._selected

    def increase(self, index: StatIndex) -> bool:
        """Raise one stat by a point if both the stat cap and budget allow it."""
        slot = self._resolve(index)
        if self._stats[slot] >= MAX_STAT_VALUE or self._points_spent >= MAX_SPECIAL_POINTS:
            return False
        self._stats[slot] += 1
        self._points_spent += 1
        return True

    def decrease(self, index: StatIndex) -> bool:
        """Lower one stat by a point unless it is already at the minimum."""
        slot = self._resolve(index)
        if self._stats[slot] <= MIN_STAT_VALUE:
            return False
        self._stats[slot] -= 1
        self._points_spent -= 1
        return True

    def reset(self) -> None:
        self._stats = [MIN_STAT_VALUE] * len(STAT_NAMES)
        self._points_spent = MIN_STAT_VALUE * len(STAT_NAMES)
        self._selected = 0

    # ---- Interactive selection ----

    def select_next(self) -> int:
        self._selected = (self._selected + 1) % len(STAT_NAMES)
        return self._selected

    def select_previous(self) -> int:
        self._selected = (self._selected - 1) % len(STAT_NAMES)
        return self._selected

    def increase_selected(self) -> bool:
        return self.increase(self._selected)

    def decrease_selected(self) -> bool:
        return self.decrease(self._selected)

    def to_special(self) -> Special:
        return Special.from_values(self._stats)

    @staticmethod
    def _resolve(index: StatIndex) -> int:
        if isinstance(index, str):
            try:
                return STAT_NAMES.index(index)
            except ValueError as exc:
                raise KeyError(index) from exc
        if not 0 <= index < len(STAT_NAMES):
            raise IndexError(f"Stat index must be between 0 and {len(STAT_NAMES) - 1}.")
        return index
