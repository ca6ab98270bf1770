from domain.taxonomy import Level, OwnershipIndex


def test_shared_category_has_every_owner(shared_catalog) -> None:
    ownership = shared_catalog.ownership

    assert ownership.owner_identities(Level.CATEGORY, "C1") == {"I1"}
    assert ownership.owner_identities(Level.CATEGORY, "C2") == {"I1", "I2"}
    assert ownership.owner_identities(Level.SUBCATEGORY, "S31") == {"I2", "I3"}
    assert ownership.owner_identities(Level.SUBSUB, "X221") == {"I1", "I2"}
    assert ownership.is_shared()


def test_identity_owns_itself_only_when_known(shared_catalog) -> None:
    ownership = shared_catalog.ownership

    assert ownership.owner_identities(Level.IDENTITY, "I2") == {"I2"}
    assert ownership.owner_identities(Level.IDENTITY, "nope") == frozenset()
    assert ownership.owner_identities(Level.CATEGORY, None) == frozenset()


def test_nodes_under_idless_identity_have_no_owner(shared_catalog) -> None:
    ownership = shared_catalog.ownership

    assert shared_catalog.contains(Level.CATEGORY, "C5")
    assert ownership.owner_identities(Level.CATEGORY, "C5") == frozenset()
    assert ownership.owner_identities(Level.SUBSUB, "X511") == frozenset()
    assert ownership.identity_ids == {"I1", "I2", "I3"}


def test_exclusive_catalog_has_single_owners(exclusive_catalog) -> None:
    ownership = exclusive_catalog.ownership

    assert not ownership.is_shared()
    for level in (Level.CATEGORY, Level.SUBCATEGORY, Level.SUBSUB):
        for node_id in exclusive_catalog.ids(level):
            assert len(ownership.owner_identities(level, node_id)) == 1


def test_is_reachable(shared_catalog) -> None:
    ownership = shared_catalog.ownership

    assert ownership.is_reachable(Level.CATEGORY, "C3", ["I3"])
    assert not ownership.is_reachable(Level.CATEGORY, "C3", ["I1"])
    assert not ownership.is_reachable(Level.CATEGORY, "C3", [])


def test_ownership_is_memoized_per_catalog(shared_catalog) -> None:
    assert shared_catalog.ownership is shared_catalog.ownership


def test_empty_index() -> None:
    ownership = OwnershipIndex.build([])

    assert ownership.identity_ids == frozenset()
    assert not ownership.is_shared()
    assert ownership.owner_identities(Level.SUBCATEGORY, "S1") == frozenset()
