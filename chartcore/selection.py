from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Literal, Sequence, Tuple

from chartcore.errors import EmptySelectionInvariantViolation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionSet:
    """Immutable snapshot of the active categories. Never empty."""

    universe: Tuple[str, ...]
    members: FrozenSet[str]

    def __post_init__(self) -> None:
        if not self.members:
            raise EmptySelectionInvariantViolation("Selection set must never be empty")
        unknown = self.members - set(self.universe)
        if unknown:
            raise ValueError(f"Unknown categories in selection: {sorted(unknown)}")

    @classmethod
    def all(cls, universe: Sequence[str]) -> "SelectionSet":
        universe = tuple(dict.fromkeys(universe))
        return cls(universe=universe, members=frozenset(universe))

    @property
    def is_all(self) -> bool:
        return len(self.members) == len(self.universe)

    @property
    def state(self) -> Literal["all", "partial"]:
        return "all" if self.is_all else "partial"

    def __contains__(self, category: object) -> bool:
        return category in self.members

    def __len__(self) -> int:
        return len(self.members)

    def ordered(self) -> List[str]:
        return [c for c in self.universe if c in self.members]


def toggle(selection: SelectionSet, category: str) -> SelectionSet:
    """Remove a selected category or add an unselected one; emptying resets to all."""
    if category in selection.members:
        remaining = selection.members - {category}
        if not remaining:
            return SelectionSet.all(selection.universe)
        return SelectionSet(universe=selection.universe, members=remaining)
    return SelectionSet(universe=selection.universe, members=selection.members | {category})


class SelectionSetController:
    """Legend toggle state shared by the legend, the marks and the tooltip."""

    def __init__(self, universe: Iterable[str]):
        universe = tuple(dict.fromkeys(universe))
        if not universe:
            raise ValueError("Selection universe must not be empty")
        self._selection = SelectionSet.all(universe)

    @classmethod
    def from_selection(cls, selection: SelectionSet) -> "SelectionSetController":
        ctl = cls(selection.universe)
        ctl._selection = selection
        return ctl

    @property
    def selection(self) -> SelectionSet:
        return self._selection

    @property
    def universe(self) -> Tuple[str, ...]:
        return self._selection.universe

    @property
    def state(self) -> Literal["all", "partial"]:
        return self._selection.state

    def toggle(self, category: str) -> SelectionSet:
        if category not in self.universe:
            logger.warning("Ignoring toggle of unknown category %r", category)
            return self._selection
        self._selection = toggle(self._selection, category)
        return self._selection

    def replace(self, members: Iterable[str]) -> SelectionSet:
        """Replay a recorded selection; an empty one resets to all."""
        try:
            self._selection = SelectionSet(universe=self.universe, members=frozenset(members))
        except EmptySelectionInvariantViolation:
            logger.exception("Empty selection replayed, resetting to all categories")
            self._selection = SelectionSet.all(self.universe)
        return self._selection

    def is_selected(self, category: str) -> bool:
        return category in self._selection

    def is_muted(self, category: str) -> bool:
        return not self.is_selected(category)

    def selected(self) -> List[str]:
        return self._selection.ordered()
