"""Accordion expand/collapse state with single-open-per-scope exclusivity."""

import logging

from pydantic import BaseModel, ConfigDict, Field

from domain.taxonomy.levels import EXPANDABLE_LEVELS, Level

logger = logging.getLogger(__name__)

# Levels whose expansion is exclusive among siblings of one parent scope
_SCOPED_LEVELS: tuple[Level, ...] = (Level.CATEGORY, Level.SUBCATEGORY)


class ExpansionState(BaseModel):
    """
    Snapshot of what is expanded.

    Identities are expanded independently; categories are keyed by their
    identity scope and subcategories by their category scope, one open child
    per scope.
    """

    model_config = ConfigDict(frozen=True)

    identity_ids: frozenset[str] = Field(default_factory=frozenset)
    categories: dict[str, str] = Field(default_factory=dict)  # identity id -> open category id
    subcategories: dict[str, str] = Field(default_factory=dict)  # category id -> open subcategory id

    def expanded(self, level: Level) -> frozenset[str]:
        if level is Level.IDENTITY:
            return self.identity_ids
        if level is Level.CATEGORY:
            return frozenset(self.categories.values())
        if level is Level.SUBCATEGORY:
            return frozenset(self.subcategories.values())
        return frozenset()

    def open_in(self, level: Level, parent_scope_key: str) -> str | None:
        """The expanded child of one scope, if any."""
        if level is Level.CATEGORY:
            return self.categories.get(parent_scope_key)
        if level is Level.SUBCATEGORY:
            return self.subcategories.get(parent_scope_key)
        return None


class ExpansionStore:
    """
    Expand/collapse bookkeeping, independent of the selection.

    `parent_scope_key` is the owning identity id for categories and the owning
    category id for subcategories; it is ignored for identities.
    """

    def __init__(self) -> None:
        self._identities: set[str] = set()
        self._open: dict[Level, dict[str, str]] = {level: {} for level in _SCOPED_LEVELS}

    def snapshot(self) -> ExpansionState:
        return ExpansionState(
            identity_ids=frozenset(self._identities),
            categories=dict(self._open[Level.CATEGORY]),
            subcategories=dict(self._open[Level.SUBCATEGORY]),
        )

    def is_expanded(self, level: Level, node_id: str | None, parent_scope_key: str | None = None) -> bool:
        """Expanded at all, or within `parent_scope_key` when one is given."""
        _check_level(level)
        if node_id is None:
            return False
        if level is Level.IDENTITY:
            return node_id in self._identities
        scopes = self._open[level]
        if parent_scope_key is not None:
            return scopes.get(parent_scope_key) == node_id
        return node_id in scopes.values()

    def toggle_expand(self, level: Level, parent_scope_key: str | None, node_id: str | None) -> bool:
        """
        Collapse `node_id` if it is the open member of its scope, otherwise open
        it in place of whatever sibling was open. Returns True if now expanded.
        """
        _check_level(level)
        if node_id is None:
            return False

        if level is Level.IDENTITY:
            if node_id in self._identities:
                self._collapse_identity(node_id)
                return False
            self._identities.add(node_id)
            return True

        if parent_scope_key is None:
            logger.debug("toggle_expand(%s, %r) without a parent scope; ignored", level.value, node_id)
            return False

        if self._open[level].get(parent_scope_key) == node_id:
            self.collapse(level, parent_scope_key, node_id)
            return False
        self._open_in_scope(level, parent_scope_key, node_id)
        return True

    def expand_only(self, level: Level, parent_scope_key: str | None, node_id: str | None) -> None:
        """Make `node_id` the open member of its scope; never collapses it."""
        _check_level(level)
        if node_id is None:
            return
        if level is Level.IDENTITY:
            self._identities.add(node_id)
            return
        if parent_scope_key is None:
            logger.debug("expand_only(%s, %r) without a parent scope; ignored", level.value, node_id)
            return
        if self._open[level].get(parent_scope_key) != node_id:
            self._open_in_scope(level, parent_scope_key, node_id)

    def collapse(self, level: Level, parent_scope_key: str | None, node_id: str | None) -> None:
        """Collapse `node_id` within one scope, cascading to scopes rooted under it."""
        _check_level(level)
        if node_id is None:
            return
        if level is Level.IDENTITY:
            self._collapse_identity(node_id)
            return
        scopes = self._open[level]
        if parent_scope_key is not None and scopes.get(parent_scope_key) == node_id:
            del scopes[parent_scope_key]
            self._release(level, node_id)

    def collapse_node(self, level: Level, node_id: str | None) -> None:
        """Collapse `node_id` in every scope where it is open."""
        _check_level(level)
        if node_id is None:
            return
        if level is Level.IDENTITY:
            self._collapse_identity(node_id)
            return
        for scope in [s for s, open_id in self._open[level].items() if open_id == node_id]:
            self.collapse(level, scope, node_id)

    def collapse_all(self) -> None:
        self._identities.clear()
        for scopes in self._open.values():
            scopes.clear()

    # ---- internals ----

    def _open_in_scope(self, level: Level, parent_scope_key: str, node_id: str) -> None:
        scopes = self._open[level]
        previous = scopes.get(parent_scope_key)
        scopes[parent_scope_key] = node_id
        if previous is not None:
            self._release(level, previous)

    def _collapse_identity(self, identity_id: str) -> None:
        self._identities.discard(identity_id)
        category_id = self._open[Level.CATEGORY].pop(identity_id, None)
        if category_id is not None:
            self._release(Level.CATEGORY, category_id)

    def _release(self, level: Level, node_id: str) -> None:
        """Drop the child scope of a node that was just collapsed, unless it is still open elsewhere."""
        if level is not Level.CATEGORY:
            return
        if node_id in self._open[Level.CATEGORY].values():
            return
        self._open[Level.SUBCATEGORY].pop(node_id, None)


def _check_level(level: Level) -> None:
    if level not in EXPANDABLE_LEVELS:
        raise ValueError(f"{level.value} nodes cannot be expanded")
