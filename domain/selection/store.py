"""Mutable selection store enforcing the hierarchy invariants."""

import logging
from collections.abc import Callable

from domain.selection.policy import SelectionPolicy
from domain.selection.state import SelectionState
from domain.taxonomy.catalog import Catalog
from domain.taxonomy.levels import OWNED_LEVELS, Level

logger = logging.getLogger(__name__)

SelectionListener = Callable[[SelectionState], None]


class SelectionStore:
    """
    Four sets of selected ids plus the only operations allowed to change them.

    Invariant (checked after every mutation): a selected sub-subcategory has
    its subcategory selected, and a selected subcategory has its category
    selected. Every operation is total: unknown or id-less nodes are ignored.

    Each toggle builds the complete next state and commits it in one step, so
    observers never see a half-applied change. Not thread-safe; a
    multi-threaded host must serialize calls.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        policy: SelectionPolicy | None = None,
        initial: SelectionState | None = None,
    ) -> None:
        self._catalog = catalog
        self._policy = policy or SelectionPolicy()
        self._state = SelectionState()
        self._listeners: list[SelectionListener] = []
        if initial is not None:
            self.hydrate(initial)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def policy(self) -> SelectionPolicy:
        return self._policy

    def snapshot(self) -> SelectionState:
        """Current selection (immutable)."""
        return self._state

    def is_selected(self, level: Level, node_id: str | None) -> bool:
        return self._state.has(level, node_id)

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Call `listener` with the new state after each change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- mutations ----

    def toggle(self, level: Level, node_id: str | None, *, via_identity: str | None = None) -> SelectionState:
        """Dispatch to the toggle for `level`."""
        if level is Level.IDENTITY:
            return self.toggle_identity(node_id)
        if level is Level.CATEGORY:
            return self.toggle_category(node_id, via_identity=via_identity)
        if level is Level.SUBCATEGORY:
            return self.toggle_subcategory(node_id, via_identity=via_identity)
        return self.toggle_subsub(node_id, via_identity=via_identity)

    def toggle_identity(self, identity_id: str | None) -> SelectionState:
        """
        Flip an identity, then prune every selected node no selected identity
        can reach any more.
        """
        if not self._catalog.contains(Level.IDENTITY, identity_id):
            return self._ignore(Level.IDENTITY, identity_id)

        state = self._state
        identities = set(state.identity_ids)
        if identity_id in identities:
            identities.discard(identity_id)
        else:
            if self._at_limit(self._policy.max_identities, len(identities)):
                return self._reject(Level.IDENTITY, identity_id, "identity limit reached")
            identities.add(identity_id)

        ownership = self._catalog.ownership
        updates: dict[Level, frozenset[str]] = {Level.IDENTITY: frozenset(identities)}
        for level in OWNED_LEVELS:
            kept = frozenset(i for i in state.ids(level) if ownership.owner_identities(level, i) & identities)
            pruned = state.ids(level) - kept
            if pruned:
                logger.debug("Pruned %d %s id(s) no longer owned: %s", len(pruned), level.value, sorted(pruned))
            updates[level] = kept

        return self._commit(self._close_downward(state.replace(updates)))

    def toggle_category(self, category_id: str | None, *, via_identity: str | None = None) -> SelectionState:
        """Select a category, or deselect it together with everything beneath it."""
        if not self._catalog.is_selectable(Level.CATEGORY, category_id):
            return self._ignore(Level.CATEGORY, category_id)

        state = self._state
        if state.has(Level.CATEGORY, category_id):
            below = self._catalog.descendant_ids(Level.CATEGORY, category_id)
            return self._commit(
                state.replace(
                    {
                        Level.CATEGORY: state.category_ids - {category_id},
                        Level.SUBCATEGORY: state.subcategory_ids - below[Level.SUBCATEGORY],
                        Level.SUBSUB: state.subsub_ids - below[Level.SUBSUB],
                    }
                )
            )

        return self._select(Level.CATEGORY, category_id, {}, via_identity)

    def toggle_subcategory(self, subcategory_id: str | None, *, via_identity: str | None = None) -> SelectionState:
        """Select a subcategory (and its category), or deselect it with its sub-subcategories."""
        path = self._catalog.ancestor_path(Level.SUBCATEGORY, subcategory_id)
        if path is None:
            return self._ignore(Level.SUBCATEGORY, subcategory_id)

        state = self._state
        if state.has(Level.SUBCATEGORY, subcategory_id):
            children = self._catalog.child_ids(Level.SUBCATEGORY, subcategory_id)
            return self._commit(
                state.replace(
                    {
                        Level.SUBCATEGORY: state.subcategory_ids - {subcategory_id},
                        Level.SUBSUB: state.subsub_ids - children,
                    }
                )
            )

        return self._select(Level.SUBCATEGORY, subcategory_id, path, via_identity)

    def toggle_subsub(self, subsub_id: str | None, *, via_identity: str | None = None) -> SelectionState:
        """Select a sub-subcategory (and its ancestors), or deselect only it."""
        path = self._catalog.ancestor_path(Level.SUBSUB, subsub_id)
        if path is None:
            return self._ignore(Level.SUBSUB, subsub_id)

        state = self._state
        if state.has(Level.SUBSUB, subsub_id):
            return self._commit(state.replace({Level.SUBSUB: state.subsub_ids - {subsub_id}}))

        return self._select(Level.SUBSUB, subsub_id, path, via_identity)

    def clear_all(self) -> SelectionState:
        return self._commit(SelectionState())

    def hydrate(self, initial: SelectionState) -> SelectionState:
        """
        Replace the selection with a previously saved one.

        Ids the catalog no longer knows are dropped; missing ancestors are
        added back so the invariant holds from the start.
        """
        updates: dict[Level, set[str]] = {level: set() for level in Level}
        for level in Level:
            for node_id in initial.ids(level):
                path = self._catalog.ancestor_path(level, node_id)
                if path is None:
                    logger.warning("Hydration: dropping unknown or unselectable %s id %r", level.value, node_id)
                    continue
                updates[level].add(node_id)
                for ancestor_level, ancestor_id in path.items():
                    if ancestor_id not in initial.ids(ancestor_level):
                        logger.warning(
                            "Hydration: %s %r selected without its %s %r; selecting it",
                            level.value,
                            node_id,
                            ancestor_level.value,
                            ancestor_id,
                        )
                    updates[ancestor_level].add(ancestor_id)
        return self._commit(SelectionState().replace(updates))

    # ---- internals ----

    def _select(
        self,
        level: Level,
        node_id: str,
        path: dict[Level, str],
        via_identity: str | None,
    ) -> SelectionState:
        state = self._state
        updates: dict[Level, set[str]] = {level: set(state.ids(level)) | {node_id}}
        for ancestor_level, ancestor_id in path.items():
            updates[ancestor_level] = set(state.ids(ancestor_level)) | {ancestor_id}

        # Category limit applies whether the category is picked directly or pulled in by a descendant
        category_id = node_id if level is Level.CATEGORY else path.get(Level.CATEGORY)
        if category_id is not None and not state.has(Level.CATEGORY, category_id):
            if self._at_limit(self._policy.max_categories, len(state.category_ids)):
                return self._reject(level, node_id, "category limit reached")

        if self._policy.auto_select_identity:
            owner = self._owning_identity(level, node_id, via_identity)
            if owner is not None and not state.has(Level.IDENTITY, owner):
                if self._at_limit(self._policy.max_identities, len(state.identity_ids)):
                    return self._reject(level, node_id, "identity limit reached")
                updates[Level.IDENTITY] = set(state.identity_ids) | {owner}

        return self._commit(state.replace(updates))

    def _owning_identity(self, level: Level, node_id: str, via_identity: str | None) -> str | None:
        owners = self._catalog.ownership.owner_identities(level, node_id)
        if via_identity is not None and via_identity in owners:
            return via_identity
        if len(owners) == 1:
            return next(iter(owners))
        logger.debug("No unambiguous owner for %s %r (owners=%s)", level.value, node_id, sorted(owners))
        return None

    def _close_downward(self, state: SelectionState) -> SelectionState:
        """Drop selected nodes whose required parent is no longer selected."""
        subs = frozenset(
            s for s in state.subcategory_ids if self._catalog.parent_id(Level.SUBCATEGORY, s) in state.category_ids
        )
        subsubs = frozenset(x for x in state.subsub_ids if self._catalog.parent_id(Level.SUBSUB, x) in subs)
        if subs == state.subcategory_ids and subsubs == state.subsub_ids:
            return state
        return state.replace({Level.SUBCATEGORY: subs, Level.SUBSUB: subsubs})

    @staticmethod
    def _at_limit(limit: int | None, current: int) -> bool:
        return limit is not None and current >= limit

    def _ignore(self, level: Level, node_id: str | None) -> SelectionState:
        logger.debug("Ignoring toggle of unknown or unselectable %s id %r", level.value, node_id)
        return self._state

    def _reject(self, level: Level, node_id: str, reason: str) -> SelectionState:
        logger.debug("Rejected selecting %s %r: %s", level.value, node_id, reason)
        return self._state

    def _commit(self, state: SelectionState) -> SelectionState:
        if state == self._state:
            return state
        self._state = state
        logger.debug(
            "Selection now: identities=%d categories=%d subcategories=%d subsubs=%d",
            len(state.identity_ids),
            len(state.category_ids),
            len(state.subcategory_ids),
            len(state.subsub_ids),
        )
        for listener in list(self._listeners):
            listener(state)
        return state
