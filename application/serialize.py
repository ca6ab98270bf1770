"""Selection serialization for the host's persistence payload."""

import logging
from pathlib import Path
from typing import Any

from application.constants import BADGES_KEY, CONTEXT_KEY, EXPANSION_KEY, SELECTION_KEY
from application.picker import AudiencePicker
from infrastructure.io import write_json
from infrastructure.observability import get_log_context

logger = logging.getLogger(__name__)


def build_selection_document(picker: AudiencePicker) -> dict[str, Any]:
    """
    Selection payload plus badge counts and expansion, keyed for the host.

    Only the ``selection`` block is meant to be persisted; the rest is for inspection.
    """
    snap = picker.snapshot()
    return {
        SELECTION_KEY: snap.selection.to_payload(),
        BADGES_KEY: {level.value: counts for level, counts in picker.badges().items()},
        EXPANSION_KEY: {
            "identities": sorted(snap.expansion.identity_ids),
            "categories": dict(sorted(snap.expansion.categories.items())),
            "subcategories": dict(sorted(snap.expansion.subcategories.items())),
        },
        CONTEXT_KEY: get_log_context(),
    }


def serialize_selection(picker: AudiencePicker, path: Path) -> Path:
    """Write the selection document to `path` as JSON."""
    write_json(path, build_selection_document(picker))
    logger.info("Saved selection JSON: %s", path)
    return path
