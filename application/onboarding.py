"""Four-step onboarding: what the user does and what they are looking for."""

import logging
from enum import Enum, IntEnum
from typing import Any

from application.actions import PickerAction
from application.picker import AudiencePicker
from domain.selection import SelectionPolicy
from domain.taxonomy import Catalog, Level, TaxonomyNode
from infrastructure.config.models import OnboardingConfig
from infrastructure.observability import clear_track_context, set_log_context

logger = logging.getLogger(__name__)

# Prefix of the "wants" track keys in the one-shot payload
INTEREST_PREFIX = "interest"


class Track(str, Enum):
    DOES = "does"
    WANTS = "wants"


class OnboardingStep(IntEnum):
    IDENTITIES_DOES = 1
    CATEGORIES_DOES = 2
    IDENTITIES_WANTS = 3
    CATEGORIES_WANTS = 4


_STEP_TRACK: dict[OnboardingStep, Track] = {
    OnboardingStep.IDENTITIES_DOES: Track.DOES,
    OnboardingStep.CATEGORIES_DOES: Track.DOES,
    OnboardingStep.IDENTITIES_WANTS: Track.WANTS,
    OnboardingStep.CATEGORIES_WANTS: Track.WANTS,
}


class OnboardingFlow:
    """
    Two selection tracks over one catalog, walked in four steps.

    - Step 1: identities the user DOES (at least one)
    - Step 2: categories under those identities (at least one category)
    - Step 3: identities the user WANTS (1..max_want_identities)
    - Step 4: categories the user WANTS (1..max_want_categories)

    Sub- and sub-subcategories are optional in both tracks. Category steps only
    list the identities picked in the same track.
    """

    def __init__(self, catalog: Catalog, *, cfg: OnboardingConfig | None = None) -> None:
        self.cfg = cfg or OnboardingConfig()
        self.catalog = catalog
        self.step = OnboardingStep.IDENTITIES_DOES
        self.tracks: dict[Track, AudiencePicker] = {
            Track.DOES: AudiencePicker(catalog),
            Track.WANTS: AudiencePicker(
                catalog,
                policy=SelectionPolicy(
                    max_identities=self.cfg.max_want_identities,
                    max_categories=self.cfg.max_want_categories,
                ),
            ),
        }

    @property
    def track(self) -> Track:
        return _STEP_TRACK[self.step]

    @property
    def picker(self) -> AudiencePicker:
        """Picker of the current step's track."""
        return self.tracks[self.track]

    def toggle(self, level: Level, node_id: str | None) -> None:
        """Toggle in the current track; identity steps only take identities."""
        is_identity_step = self.step in (OnboardingStep.IDENTITIES_DOES, OnboardingStep.IDENTITIES_WANTS)
        if is_identity_step != (level is Level.IDENTITY):
            logger.debug("Step %d does not take %s toggles; ignored", self.step, level.value)
            return
        if not is_identity_step:
            picked = self.picker.selection.snapshot().identity_ids
            if not self.catalog.ownership.is_reachable(level, node_id, picked):
                logger.debug("%s %r is not under an identity picked in this track; ignored", level.value, node_id)
                return
        set_log_context(track=self.track.value)
        self.picker.toggle(level, node_id)

    def selected_identities(self, track: Track) -> list[TaxonomyNode]:
        """Identities picked in `track`, in catalog order."""
        picked = self.tracks[track].selection.snapshot().identity_ids
        return [i for i in self.catalog.identities if i.id in picked]

    def can_continue(self, step: OnboardingStep | None = None) -> bool:
        step = self.step if step is None else step
        does = self.tracks[Track.DOES].selection.snapshot()
        wants = self.tracks[Track.WANTS].selection.snapshot()
        if step is OnboardingStep.IDENTITIES_DOES:
            return len(does.identity_ids) >= 1
        if step is OnboardingStep.CATEGORIES_DOES:
            return len(does.category_ids) >= 1
        if step is OnboardingStep.IDENTITIES_WANTS:
            return 1 <= len(wants.identity_ids) <= self.cfg.max_want_identities
        return 1 <= len(wants.category_ids) <= self.cfg.max_want_categories

    def advance(self) -> OnboardingStep:
        """
        Move to the next step.

        Raises:
            ValueError: If the current step is incomplete or already the last one
        """
        if not self.can_continue():
            raise ValueError(f"Step {int(self.step)} is incomplete")
        if self.step is OnboardingStep.CATEGORIES_WANTS:
            raise ValueError("Already at the last step; call build_payload()")
        self.step = OnboardingStep(self.step + 1)
        logger.info("Onboarding advanced to step %d (%s)", self.step, self.step.name)
        return self.step

    def back(self) -> OnboardingStep:
        if self.step is not OnboardingStep.IDENTITIES_DOES:
            self.step = OnboardingStep(self.step - 1)
        return self.step

    def build_payload(self) -> dict[str, Any]:
        """
        One-shot payload with both tracks (``identityIds`` ... and ``interestIdentityIds`` ...).

        Raises:
            ValueError: If the final step's requirements are not met
        """
        if not self.can_continue(OnboardingStep.CATEGORIES_WANTS):
            raise ValueError(
                f"Pick between 1 and {self.cfg.max_want_categories} categories you are looking for before finishing"
            )
        payload: dict[str, Any] = {}
        payload.update(self.tracks[Track.DOES].selection.snapshot().to_payload())
        payload.update(self.tracks[Track.WANTS].selection.snapshot().to_payload(prefix=INTEREST_PREFIX))
        logger.info("Onboarding finished with %d ids selected", sum(len(v) for v in payload.values()))
        clear_track_context()
        return payload


def apply_onboarding_actions(flow: OnboardingFlow, actions: list[PickerAction]) -> None:
    """
    Apply actions to the flow in order: ``next`` advances, the rest act on the current step.

    Raises:
        ValueError: If ``next`` is given while the current step is incomplete
    """
    for i, action in enumerate(actions, start=1):
        if action.advance:
            flow.advance()
        elif action.expand:
            flow.picker.toggle_expand(action.level, action.scope, action.node_id)
            logger.info("Action %d: expand %s %r (step %d)", i, action.level.value, action.node_id, flow.step)
        else:
            flow.toggle(action.level, action.node_id)
            logger.info("Action %d: toggle %s %r (step %d)", i, action.level.value, action.node_id, flow.step)
