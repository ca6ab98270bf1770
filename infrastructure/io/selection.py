"""Reading saved selections (hydration input)."""

import json
import logging
from pathlib import Path

from domain.selection.state import SelectionState
from infrastructure.io.fs import ensure_exists

logger = logging.getLogger(__name__)


def read_selection(path: Path, prefix: str = "") -> SelectionState:
    """
    Read a selection payload JSON (``identityIds``, ``categoryIds``, ...).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a JSON object or holds malformed id lists
    """
    ensure_exists(path, "selection file")
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")
    state = SelectionState.from_payload(data, prefix=prefix)
    logger.info("Loaded saved selection from %s (%d ids)", path, state.total())
    return state
