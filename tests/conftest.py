"""
Shared catalog fixtures.

- scenario: Entrepreneur/Investor sharing "Technology" (the documented walkthrough)
- shared: a larger DAG with categories reachable from several identities
- exclusive: a tree where every node has one path
"""

from typing import Any

import pytest

from domain.taxonomy import Catalog, NodeMode, parse_catalog


def scenario_payload() -> dict[str, Any]:
    technology = {
        "id": "C1",
        "name": "Technology",
        "subcategories": [
            {"id": "S1", "name": "Fintech", "subsubs": [{"id": "X1", "name": "Payments"}]},
        ],
    }
    return {
        "identities": [
            {"id": "I1", "name": "Entrepreneur", "categories": [technology]},
            {"id": "I2", "name": "Investor", "categories": [technology]},
        ]
    }


def _category(k: int) -> dict[str, Any]:
    subs = []
    for j in range(1, 4):
        subsubs = [] if j == 3 else [{"id": f"X{k}{j}{n}", "name": f"Leaf {k}.{j}.{n}"} for n in (1, 2)]
        subs.append({"id": f"S{k}{j}", "name": f"Sub {k}.{j}", "subsubs": subsubs})
    return {"id": f"C{k}", "name": f"Category {k}", "subcategories": subs}


def shared_payload() -> dict[str, Any]:
    return {
        "identities": [
            {"id": "I1", "name": "Entrepreneur", "categories": [_category(1), _category(2)]},
            {"id": "I2", "name": "Investor", "categories": [_category(2), _category(3)]},
            {
                "id": "I3",
                "name": "Job Seeker",
                "categories": [_category(3), _category(4), {"name": "Broken", "subcategories": []}],
            },
            {"name": "Unmapped identity", "categories": [_category(5)]},
        ]
    }


def exclusive_payload() -> dict[str, Any]:
    return {
        "identities": [
            {"id": "I1", "name": "Entrepreneur", "categories": [_category(1), _category(2)]},
            {"id": "I2", "name": "Investor", "categories": [_category(3)]},
        ]
    }


@pytest.fixture
def scenario_catalog() -> Catalog:
    return parse_catalog(scenario_payload())


@pytest.fixture
def shared_catalog() -> Catalog:
    return parse_catalog(shared_payload())


@pytest.fixture
def exclusive_catalog() -> Catalog:
    return parse_catalog(exclusive_payload(), mode=NodeMode.EXCLUSIVE)


@pytest.fixture
def scenario_data() -> dict[str, Any]:
    return scenario_payload()


@pytest.fixture
def shared_data() -> dict[str, Any]:
    return shared_payload()
