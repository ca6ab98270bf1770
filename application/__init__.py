"""
Application layer: Use cases and workflow orchestration.

This layer coordinates the selection engine with host-level behaviour
(restricted views, onboarding steps, scripted actions, output).
"""

from application.actions import PickerAction, apply_actions, parse_action
from application.onboarding import OnboardingFlow, OnboardingStep, Track, apply_onboarding_actions
from application.picker import AudiencePicker, PickerSnapshot
from application.serialize import build_selection_document, serialize_selection
from application.summary import log_selection_summary

__all__ = [
    # Main use cases
    "AudiencePicker",
    "PickerSnapshot",
    "OnboardingFlow",
    "OnboardingStep",
    "Track",
    "apply_onboarding_actions",
    # Scripted actions
    "PickerAction",
    "parse_action",
    "apply_actions",
    # Output
    "build_selection_document",
    "serialize_selection",
    "log_selection_summary",
]
