import pytest

from domain.selection import RollupCounter, SelectionPolicy, SelectionState, SelectionStore
from domain.taxonomy import Level


def _ids(state: SelectionState) -> tuple[set[str], set[str], set[str], set[str]]:
    return (set(state.identity_ids), set(state.category_ids), set(state.subcategory_ids), set(state.subsub_ids))


# ---- the Entrepreneur / Investor walkthrough ----


def test_selecting_a_subsub_selects_its_chain_but_no_identity(scenario_catalog) -> None:
    store = SelectionStore(scenario_catalog)
    counter = RollupCounter(scenario_catalog)

    state = store.toggle_subsub("X1")

    assert _ids(state) == (set(), {"C1"}, {"S1"}, {"X1"})
    assert counter.count(state, Level.SUBCATEGORY, "S1") == 1
    assert counter.count(state, Level.CATEGORY, "C1") == 2
    assert counter.count(state, Level.IDENTITY, "I1") == 3


def test_selecting_an_owner_keeps_the_chain(scenario_catalog) -> None:
    store = SelectionStore(scenario_catalog)
    store.toggle_subsub("X1")

    state = store.toggle_identity("I1")

    assert _ids(state) == ({"I1"}, {"C1"}, {"S1"}, {"X1"})


def test_deselecting_the_last_owner_prunes_everything(scenario_catalog) -> None:
    store = SelectionStore(scenario_catalog)
    store.toggle_subsub("X1")
    store.toggle_identity("I1")

    state = store.toggle_identity("I1")

    assert state.is_empty


def test_another_selected_owner_keeps_shared_nodes(scenario_catalog) -> None:
    store = SelectionStore(scenario_catalog)
    store.toggle_identity("I2")
    store.toggle_subsub("X1")
    store.toggle_identity("I1")

    state = store.toggle_identity("I1")

    assert _ids(state) == ({"I2"}, {"C1"}, {"S1"}, {"X1"})


# ---- cascades ----


def test_category_deselect_cascades_down(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X111")
    store.toggle_subsub("X121")
    store.toggle_subcategory("S13")
    store.toggle_subsub("X211")

    state = store.toggle_category("C1")

    assert _ids(state) == (set(), {"C2"}, {"S21"}, {"X211"})


def test_subcategory_deselect_keeps_category(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X111")
    store.toggle_subsub("X112")

    state = store.toggle_subcategory("S11")

    assert _ids(state) == (set(), {"C1"}, set(), set())


def test_subsub_deselect_touches_nothing_else(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X111")

    state = store.toggle_subsub("X111")

    assert _ids(state) == (set(), {"C1"}, {"S11"}, set())


def test_identity_toggle_prunes_nodes_no_selected_identity_reaches(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_identity("I1")
    store.toggle_identity("I2")
    store.toggle_subsub("X111")  # C1: I1 only
    store.toggle_subsub("X211")  # C2: I1 and I2
    store.toggle_subcategory("S31")  # C3: I2 and I3

    state = store.toggle_identity("I1")

    assert _ids(state) == ({"I2"}, {"C2", "C3"}, {"S21", "S31"}, {"X211"})


def test_selecting_an_identity_prunes_orphans_left_from_earlier(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_category("C4")  # selected with no identity at all

    state = store.toggle_identity("I1")

    assert _ids(state) == ({"I1"}, set(), set(), set())


def test_exclusive_identity_deselect_removes_its_subtree(exclusive_catalog) -> None:
    store = SelectionStore(exclusive_catalog)
    store.toggle_identity("I1")
    store.toggle_identity("I2")
    store.toggle_subsub("X111")
    store.toggle_subsub("X311")

    state = store.toggle_identity("I1")
    assert _ids(state) == ({"I2"}, {"C3"}, {"S31"}, {"X311"})

    state = store.toggle_identity("I2")
    assert state.is_empty


def test_nodes_under_idless_identity_are_pruned_on_identity_toggle(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X511")
    assert store.is_selected(Level.CATEGORY, "C5")

    state = store.toggle_identity("I3")

    assert _ids(state) == ({"I3"}, set(), set(), set())


# ---- totality ----


@pytest.mark.parametrize(
    "level, node_id",
    [
        (Level.IDENTITY, "nope"),
        (Level.CATEGORY, "nope"),
        (Level.SUBCATEGORY, "nope"),
        (Level.SUBSUB, "nope"),
        (Level.CATEGORY, None),
        (Level.SUBSUB, None),
        (Level.CATEGORY, "S11"),  # wrong level
    ],
)
def test_unknown_ids_are_ignored(shared_catalog, level: Level, node_id) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X111")
    before = store.snapshot()
    calls: list[SelectionState] = []
    store.subscribe(calls.append)

    assert store.toggle(level, node_id) == before
    assert calls == []


def test_clear_all(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_identity("I1")
    store.toggle_subsub("X111")

    assert store.clear_all().is_empty


# ---- idempotence ----


@pytest.mark.parametrize(
    "level, node_id",
    [
        (Level.IDENTITY, "I3"),
        (Level.CATEGORY, "C4"),
        (Level.SUBCATEGORY, "S12"),
        (Level.SUBSUB, "X112"),
    ],
)
def test_toggle_twice_restores_state(shared_catalog, level: Level, node_id: str) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_identity("I1")
    store.toggle_subsub("X111")
    before = store.snapshot()

    store.toggle(level, node_id)
    assert store.toggle(level, node_id) == before


def test_subcategory_toggle_twice_drops_its_subsubs(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    store.toggle_subsub("X111")

    store.toggle_subcategory("S11")
    state = store.toggle_subcategory("S11")

    assert state.has(Level.SUBCATEGORY, "S11")
    assert not state.has(Level.SUBSUB, "X111")


# ---- observers ----


def test_listeners_see_only_real_changes(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    seen: list[SelectionState] = []
    unsubscribe = store.subscribe(seen.append)

    store.toggle_category("C1")
    store.toggle_category("nope")
    store.clear_all()
    store.clear_all()
    unsubscribe()
    store.toggle_category("C2")

    assert [sorted(s.category_ids) for s in seen] == [["C1"], []]


def test_listener_receives_complete_state(shared_catalog) -> None:
    store = SelectionStore(shared_catalog)
    seen: list[SelectionState] = []
    store.subscribe(seen.append)

    store.toggle_subsub("X111")

    assert len(seen) == 1
    assert _ids(seen[0]) == (set(), {"C1"}, {"S11"}, {"X111"})


# ---- policy ----


def test_auto_select_identity_with_single_owner(exclusive_catalog) -> None:
    store = SelectionStore(exclusive_catalog, policy=SelectionPolicy(auto_select_identity=True))

    state = store.toggle_subcategory("S31")

    assert _ids(state) == ({"I2"}, {"C3"}, {"S31"}, set())


def test_auto_select_identity_needs_an_unambiguous_owner(shared_catalog) -> None:
    store = SelectionStore(shared_catalog, policy=SelectionPolicy(auto_select_identity=True))

    state = store.toggle_category("C2")
    assert state.identity_ids == frozenset()

    store.toggle_category("C2")
    state = store.toggle_category("C2", via_identity="I2")
    assert state.identity_ids == {"I2"}


def test_category_limit_rejects_extra_categories(shared_catalog) -> None:
    store = SelectionStore(shared_catalog, policy=SelectionPolicy(max_categories=2))
    store.toggle_category("C1")
    store.toggle_category("C2")

    assert store.toggle_category("C3").category_ids == {"C1", "C2"}
    # A descendant of a new category would add a third one
    assert not store.toggle_subsub("X311").has(Level.SUBSUB, "X311")
    # Descendants of a selected category are still fine
    assert store.toggle_subsub("X111").has(Level.SUBSUB, "X111")


def test_identity_limit(shared_catalog) -> None:
    store = SelectionStore(shared_catalog, policy=SelectionPolicy(max_identities=1))
    store.toggle_identity("I1")

    assert store.toggle_identity("I2").identity_ids == {"I1"}
    assert store.toggle_identity("I1").identity_ids == frozenset()


@pytest.mark.parametrize("field", ["max_identities", "max_categories"])
def test_policy_rejects_non_positive_limits(field: str) -> None:
    with pytest.raises(ValueError):
        SelectionPolicy(**{field: 0})


# ---- hydration ----


def test_hydrate_drops_unknown_ids_and_adds_missing_ancestors(shared_catalog) -> None:
    initial = SelectionState(
        identity_ids=frozenset({"I1", "ghost"}),
        subsub_ids=frozenset({"X121", "X999"}),
    )

    store = SelectionStore(shared_catalog, initial=initial)

    assert _ids(store.snapshot()) == ({"I1"}, {"C1"}, {"S12"}, {"X121"})
