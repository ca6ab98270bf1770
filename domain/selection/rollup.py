"""Roll-up counts of selected descendants, for badge display."""

import logging
from enum import Enum

from domain.selection.state import SelectionState
from domain.taxonomy.catalog import Catalog
from domain.taxonomy.levels import Level

logger = logging.getLogger(__name__)


class RollupMode(str, Enum):
    """What a badge counts."""

    DESCENDANTS = "descendants"  # every selected id strictly below the node
    IMMEDIATE = "immediate"  # selected direct children only


class RollupCounter:
    """
    Derives badge counts from a SelectionState.

    Counts are pure functions of (catalog, state); results are memoized for the
    most recent state only, keyed structurally since SelectionState is hashable.
    """

    def __init__(self, catalog: Catalog, mode: RollupMode = RollupMode.DESCENDANTS) -> None:
        self.catalog = catalog
        self.mode = mode
        self._memo_state: SelectionState | None = None
        self._memo: dict[tuple[Level, str], int] = {}

    def count(self, state: SelectionState, level: Level, node_id: str | None) -> int:
        """
        Number of distinct selected ids below `node_id`, not counting the node itself.

        Sub-subcategories are leaves and always count 0, as do unknown ids.
        """
        if node_id is None or level is Level.SUBSUB or not self.catalog.contains(level, node_id):
            return 0

        if state != self._memo_state:
            self._memo_state = state
            self._memo = {}

        key = (level, node_id)
        cached = self._memo.get(key)
        if cached is not None:
            return cached

        if self.mode is RollupMode.IMMEDIATE:
            value = len(self.catalog.child_ids(level, node_id) & state.ids(level.child))
        else:
            below = self.catalog.descendant_ids(level, node_id)
            value = sum(len(ids & state.ids(lvl)) for lvl, ids in below.items())

        self._memo[key] = value
        return value

    def counts(self, state: SelectionState) -> dict[Level, dict[str, int]]:
        """Non-zero counts for every selectable node, grouped by level."""
        out: dict[Level, dict[str, int]] = {level: {} for level in (Level.IDENTITY, Level.CATEGORY, Level.SUBCATEGORY)}
        for level in out:
            for node_id in sorted(self.catalog.ids(level)):
                n = self.count(state, level, node_id)
                if n:
                    out[level][node_id] = n
        return out
