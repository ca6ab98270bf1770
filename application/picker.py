"""One audience picker widget: selection, expansion and badges over a catalog."""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from domain.expansion import ExpansionState, ExpansionStore
from domain.selection import RollupCounter, RollupMode, SelectionPolicy, SelectionState, SelectionStore
from domain.taxonomy import Catalog, Level, TaxonomyNode
from infrastructure.config.models import ViewConfig

logger = logging.getLogger(__name__)

# Call site that pre-selects the restricted identity on mount
PEOPLE_DIRECTORY = "people"


class PickerSnapshot(BaseModel):
    """What a renderer needs: the selection and the expansion state."""

    model_config = ConfigDict(frozen=True)

    selection: SelectionState
    expansion: ExpansionState


class AudiencePicker:
    """
    Host-side coordinator of one picker.

    Owns a SelectionStore, an ExpansionStore and a RollupCounter over a single
    catalog. The two stores stay independent; the behaviour that links them
    (collapsing what gets deselected, expanding the path to a new selection,
    restricted-view mount) lives here.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        policy: SelectionPolicy | None = None,
        view: ViewConfig | None = None,
        rollup_mode: RollupMode = RollupMode.DESCENDANTS,
        initial: SelectionState | None = None,
    ) -> None:
        self.catalog = catalog
        self.view = view or ViewConfig()
        self.selection = SelectionStore(catalog, policy=policy, initial=initial)
        self.expansion = ExpansionStore()
        self.counter = RollupCounter(catalog, mode=rollup_mode)

    # ---- restricted view ----

    def visible_identities(self) -> list[TaxonomyNode]:
        """Identities to render; all of them unless `view.shown` filters by name."""
        if not self.view.shown:
            return list(self.catalog.identities)
        wanted = {s.lower() for s in self.view.shown}
        return [i for i in self.catalog.identities if i.name.lower() in wanted]

    def mount(self) -> PickerSnapshot:
        """
        Apply restricted-view behaviour once, right after the picker appears.

        Expands the shown identities; from the people directory, also selects
        the shown identity when exactly one matches.
        """
        if not self.view.shown:
            return self.snapshot()

        shown = [i for i in self.visible_identities() if i.id is not None]
        if not shown:
            logger.warning("Restricted view matches no selectable identity: %s", self.view.shown)
            return self.snapshot()

        for identity in shown:
            self.expansion.expand_only(Level.IDENTITY, None, identity.id)

        if self.view.invoked_from == PEOPLE_DIRECTORY:
            if len(shown) == 1 and not self.selection.is_selected(Level.IDENTITY, shown[0].id):
                self.selection.toggle_identity(shown[0].id)
            elif len(shown) > 1:
                logger.debug("Restricted view matches %d identities; not auto-selecting", len(shown))

        logger.debug("Mounted restricted view for %s", [i.name for i in shown])
        return self.snapshot()

    # ---- selection ----

    def toggle(self, level: Level, node_id: str | None, *, via_identity: str | None = None) -> SelectionState:
        """
        Toggle a node, collapsing whatever the toggle deselected and (with
        `jump_to_selection`) expanding the path to a newly selected node.
        """
        before = self.selection.snapshot()
        after = self.selection.toggle(level, node_id, via_identity=via_identity)
        if after == before:
            return after

        if self.view.collapse_on_deselect:
            for lvl in (Level.IDENTITY, Level.CATEGORY, Level.SUBCATEGORY):
                for removed in before.ids(lvl) - after.ids(lvl):
                    self.expansion.collapse_node(lvl, removed)

        if self.view.jump_to_selection and after.has(level, node_id) and not before.has(level, node_id):
            self._expand_path(level, node_id, via_identity)

        return after

    def clear_all(self) -> SelectionState:
        state = self.selection.clear_all()
        if self.view.collapse_on_deselect:
            self.expansion.collapse_all()
        return state

    def subscribe(self, listener: Callable[[SelectionState], None]) -> Callable[[], None]:
        return self.selection.subscribe(listener)

    # ---- expansion ----

    def toggle_expand(self, level: Level, parent_scope_key: str | None, node_id: str | None) -> bool:
        """Accordion toggle; ids unknown to the catalog are ignored."""
        if not self.catalog.contains(level, node_id):
            logger.debug("Ignoring expand of unknown %s id %r", level.value, node_id)
            return False
        return self.expansion.toggle_expand(level, parent_scope_key, node_id)

    def expand_only(self, level: Level, parent_scope_key: str | None, node_id: str | None) -> None:
        if not self.catalog.contains(level, node_id):
            logger.debug("Ignoring expand of unknown %s id %r", level.value, node_id)
            return
        self.expansion.expand_only(level, parent_scope_key, node_id)

    def subsubs_visible(self, subcategory_id: str, parent_scope_key: str | None = None) -> bool:
        """A sub-subcategory list shows when its subcategory is expanded or selected."""
        return self.selection.is_selected(Level.SUBCATEGORY, subcategory_id) or self.expansion.is_expanded(
            Level.SUBCATEGORY, subcategory_id, parent_scope_key
        )

    def _expand_path(self, level: Level, node_id: str, via_identity: str | None) -> None:
        path = self.catalog.ancestor_path(level, node_id) or {}
        category_id = node_id if level is Level.CATEGORY else path.get(Level.CATEGORY)
        subcategory_id = node_id if level is Level.SUBCATEGORY else path.get(Level.SUBCATEGORY)

        if level is Level.IDENTITY:
            self.expansion.expand_only(Level.IDENTITY, None, node_id)
            return

        owners = self.catalog.ownership.owner_identities(Level.CATEGORY, category_id)
        if via_identity in owners:
            identity_id = via_identity
        else:
            visible = [i.id for i in self.visible_identities() if i.id in owners]
            identity_id = visible[0] if visible else None
        if identity_id is None:
            return

        self.expansion.expand_only(Level.IDENTITY, None, identity_id)
        if level in (Level.SUBCATEGORY, Level.SUBSUB):
            self.expansion.expand_only(Level.CATEGORY, identity_id, category_id)
        if level is Level.SUBSUB:
            self.expansion.expand_only(Level.SUBCATEGORY, category_id, subcategory_id)

    # ---- read side ----

    def count(self, level: Level, node_id: str | None) -> int:
        return self.counter.count(self.selection.snapshot(), level, node_id)

    def badges(self) -> dict[Level, dict[str, int]]:
        return self.counter.counts(self.selection.snapshot())

    def snapshot(self) -> PickerSnapshot:
        return PickerSnapshot(selection=self.selection.snapshot(), expansion=self.expansion.snapshot())
