"""Scripted picker actions, as given on the command line."""

import logging

from pydantic import BaseModel

from application.picker import AudiencePicker
from domain.taxonomy import Level

logger = logging.getLogger(__name__)

# Moves an onboarding flow to its next step
NEXT_ACTION = "next"


class PickerAction(BaseModel):
    """A toggle (``level:id``), an expand (``expand:level:scope:id``) or an onboarding ``next``."""

    expand: bool = False
    advance: bool = False
    level: Level | None = None
    node_id: str | None = None
    scope: str | None = None


def parse_action(text: str) -> PickerAction:
    """
    Parse one action string.

    Examples:
        >>> parse_action("subsub:X1").level.value
        'subsub'
        >>> parse_action("expand:category:I1:C1").scope
        'I1'
        >>> parse_action("expand:identity:I1").node_id
        'I1'
        >>> parse_action("next").advance
        True

    Raises:
        ValueError: If the string is not a known action
    """
    parts = [p.strip() for p in str(text).split(":")]
    if len(parts) == 1 and parts[0].lower() == NEXT_ACTION:
        return PickerAction(advance=True)
    if parts and parts[0].lower() == "expand":
        rest = parts[1:]
        if len(rest) == 2 and rest[0].lower() == Level.IDENTITY.value:
            return PickerAction(expand=True, level=Level.IDENTITY, node_id=rest[1])
        if len(rest) == 3:
            return PickerAction(expand=True, level=_level(rest[0], text), scope=rest[1], node_id=rest[2])
        raise ValueError(f"Bad expand action {text!r}; use expand:identity:ID or expand:LEVEL:SCOPE:ID")

    if len(parts) != 2 or not parts[1]:
        raise ValueError(f"Bad toggle action {text!r}; use LEVEL:ID")
    return PickerAction(level=_level(parts[0], text), node_id=parts[1])


def _level(raw: str, text: str) -> Level:
    try:
        return Level(raw.lower())
    except ValueError as e:
        raise ValueError(f"Unknown level {raw!r} in action {text!r}; expected one of {[lv.value for lv in Level]}") from e


def apply_actions(picker: AudiencePicker, actions: list[PickerAction]) -> None:
    """Apply actions in order."""
    for i, action in enumerate(actions, start=1):
        if action.advance:
            logger.warning("Action %d: %r only applies to onboarding; ignored", i, NEXT_ACTION)
            continue
        if action.expand:
            expanded = picker.toggle_expand(action.level, action.scope, action.node_id)
            logger.info(
                "Action %d: %s %s %r", i, "expand" if expanded else "collapse", action.level.value, action.node_id
            )
        else:
            picker.toggle(action.level, action.node_id)
            selected = picker.selection.is_selected(action.level, action.node_id)
            logger.info(
                "Action %d: %s %s %r", i, "select" if selected else "deselect", action.level.value, action.node_id
            )
