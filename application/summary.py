"""Human-readable summary of a picker's state, written to the log."""

import logging

from application.picker import AudiencePicker
from domain.taxonomy import Level

logger = logging.getLogger(__name__)


def log_selection_summary(picker: AudiencePicker) -> None:
    """Log selected nodes per level, with names and badge counts."""
    state = picker.selection.snapshot()

    logger.info("--- Selection ---")
    if state.is_empty:
        logger.info("Nothing selected.")
    for level in Level:
        ids = sorted(state.ids(level))
        if not ids:
            continue
        labels = []
        for node_id in ids:
            node = picker.catalog.node(level, node_id)
            name = node.name if node is not None else "?"
            n = picker.count(level, node_id)
            labels.append(f"{name} [{node_id}]" + (f" ({n})" if n else ""))
        logger.info("%s (%d): %s", level.value, len(ids), ", ".join(labels))

    expansion = picker.expansion.snapshot()
    logger.info("--- Expansion ---")
    logger.info(
        "identities=%s categories=%s subcategories=%s",
        sorted(expansion.identity_ids),
        dict(sorted(expansion.categories.items())),
        dict(sorted(expansion.subcategories.items())),
    )
