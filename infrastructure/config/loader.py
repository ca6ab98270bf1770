"""Configuration loading from YAML files."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from infrastructure.config.models import (
    HttpSourceConfig,
    OnboardingConfig,
    PickerConfig,
    SourceKind,
    ViewConfig,
)
from infrastructure.constants import ENV_API_BASE_URL, ENV_API_TOKEN

from .registry import SOURCE_CONFIG_BY_KIND

logger = logging.getLogger(__name__)


def load_document(path: Path) -> Any:
    """Load a YAML (or JSON, which YAML accepts) file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file and return as dict."""
    data = load_document(path)

    if not isinstance(data, dict):
        raise ValueError(f"Expected YAML dict in {path}, got {type(data)}")

    return data


def _apply_env_overrides(block: dict[str, Any]) -> dict[str, Any]:
    """Environment wins over YAML for the HTTP endpoint and its token."""
    out = dict(block)
    base_url = os.environ.get(ENV_API_BASE_URL)
    token = os.environ.get(ENV_API_TOKEN)
    if base_url:
        out["base_url"] = base_url
    if token:
        out["token"] = token
    return out


def load_picker_config(config_path: Path) -> PickerConfig:
    """
    Load picker.yaml and construct a fully-resolved PickerConfig.

    Conventions (required for adding catalog sources):
    - The SourceKind enum value must match the PickerConfig field name holding that source's block.
      Example: SourceKind.HTTP.value == "http" -> PickerConfig.http
    - This naming convention lets source config models be bound from the registry.
    """
    raw = _load_yaml(config_path)

    source = SourceKind(str(raw.get("source", SourceKind.FILE.value)).strip().lower())

    block_cls = SOURCE_CONFIG_BY_KIND.get(source)
    if block_cls is None:
        raise ValueError(f"No config model registered for source: {source.value}")
    if source.value not in PickerConfig.model_fields:
        raise ValueError(
            f"PickerConfig has no field '{source.value}'. "
            f"Add `{source.value}: <YourSourceConfig> | None = None` to PickerConfig "
            f"(field name must match SourceKind.value)."
        )

    block = raw.get(source.value) or {}
    if not isinstance(block, dict):
        raise ValueError(f"'{source.value}' block in {config_path} must be a mapping")
    if block_cls is HttpSourceConfig:
        block = _apply_env_overrides(block)

    source_kwargs = {source.value: block_cls(**block)}

    selection_file = raw.get("selection_file")
    cfg = PickerConfig(
        source=source,
        node_mode=str(raw.get("node_mode", "shared")).strip().lower(),
        rollup_mode=str(raw.get("rollup_mode", "descendants")).strip().lower(),
        selection=raw.get("selection") or {},
        view=ViewConfig(**(raw.get("view") or {})),
        onboarding=OnboardingConfig(**(raw.get("onboarding") or {})),
        selection_file=Path(selection_file) if selection_file else None,
        output_dir=Path(raw.get("output_dir", "outputs")),
        **source_kwargs,
    )

    logger.debug("Loaded picker config from %s (source=%s)", config_path, cfg.source.value)
    return cfg
