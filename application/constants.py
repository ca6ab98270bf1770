"""Application-level constants."""

# Keys of the selection output document
SELECTION_KEY = "selection"
BADGES_KEY = "badges"
EXPANSION_KEY = "expansion"
CONTEXT_KEY = "context"

# Output filenames
SELECTION_FILENAME = "selection.json"
LOG_FILENAME = "session.log"
ONBOARDING_FILENAME = "onboarding.json"
