"""
Configuration management: models, loading, and validation.

Handles:
- PickerConfig: Main picker configuration
- Catalog source configs: file, HTTP, mock
- YAML/JSON document loading
- Environment variable overrides

The loader module performs file I/O; models are pure Pydantic classes.
"""

from infrastructure.config.loader import (
    load_document,
    load_picker_config,
)
from infrastructure.config.models import (
    # Source configs
    FileSourceConfig,
    HttpSourceConfig,
    MockSourceConfig,
    # Host options
    OnboardingConfig,
    # Main config
    PickerConfig,
    # Enums
    SourceKind,
    ViewConfig,
)

__all__ = [
    # Main config (most commonly used)
    "PickerConfig",
    "load_picker_config",
    # Enums
    "SourceKind",
    # Source configs
    "FileSourceConfig",
    "HttpSourceConfig",
    "MockSourceConfig",
    # Host options
    "ViewConfig",
    "OnboardingConfig",
    # Loaders
    "load_document",
]
