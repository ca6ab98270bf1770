"""Expansion: accordion expand/collapse state."""

from domain.expansion.store import ExpansionState, ExpansionStore

__all__ = [
    "ExpansionState",
    "ExpansionStore",
]
