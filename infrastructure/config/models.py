"""Configuration models (Pydantic classes)."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from domain.selection.policy import SelectionPolicy
from domain.selection.rollup import RollupMode
from domain.taxonomy.catalog import NodeMode
from infrastructure.constants import CATALOG_FILE, DEFAULT_CATALOG_ENDPOINT


class SourceKind(str, Enum):
    """Supported catalog sources."""

    FILE = "file"
    HTTP = "http"
    MOCK = "mock"


class FileSourceConfig(BaseModel):
    """Catalog read from a YAML or JSON file."""

    path: Path = Field(default_factory=lambda: CATALOG_FILE)


class HttpSourceConfig(BaseModel):
    """Catalog fetched from the host application's REST API."""

    base_url: str
    endpoint: str = DEFAULT_CATALOG_ENDPOINT
    timeout_s: float = 10.0
    token: str | None = None


class MockSourceConfig(BaseModel):
    """In-memory catalog, for demos and tests."""

    fixture: str = "demo"


class ViewConfig(BaseModel):
    """Host-level presentation options of one picker."""

    shown: list[str] = Field(
        default_factory=list,
        description="Identity names to show (case-insensitive). Empty shows every identity.",
    )
    invoked_from: str | None = Field(
        default=None,
        description="Call site of the picker. 'people' auto-selects the single shown identity on mount.",
    )
    jump_to_selection: bool = Field(
        default=False,
        description="Expand the path to a node when it gets selected.",
    )
    collapse_on_deselect: bool = Field(
        default=True,
        description="Collapse nodes (and their open descendants) when they get deselected.",
    )

    @model_validator(mode="after")
    def _validate(self) -> "ViewConfig":
        self.shown = [s.strip() for s in self.shown if s and s.strip()]
        if self.invoked_from is not None and not self.invoked_from.strip():
            self.invoked_from = None
        return self


class OnboardingConfig(BaseModel):
    """Limits of the 'what you are looking for' onboarding track."""

    max_want_identities: int = 3
    max_want_categories: int = 3

    @model_validator(mode="after")
    def _validate(self) -> "OnboardingConfig":
        if self.max_want_identities < 1 or self.max_want_categories < 1:
            raise ValueError("onboarding limits must be >= 1")
        return self


class PickerConfig(BaseModel):
    """
    Runtime configuration.
    - Loaded from picker.yaml
    - Source block bound by the configuration loader
    - Consumed by catalog sources and the picker/onboarding use cases
    """

    source: SourceKind = Field(default=SourceKind.FILE, description="Where the catalog comes from.")

    # Source config (resolved by loader); field name == SourceKind value
    file: FileSourceConfig | None = None
    http: HttpSourceConfig | None = None
    mock: MockSourceConfig | None = None

    node_mode: NodeMode = Field(
        default=NodeMode.SHARED,
        description="'exclusive' rejects catalogs where a node sits under more than one parent.",
    )
    rollup_mode: RollupMode = Field(default=RollupMode.DESCENDANTS, description="What badge counts count.")

    selection: SelectionPolicy = Field(default_factory=SelectionPolicy)
    view: ViewConfig = Field(default_factory=ViewConfig)
    onboarding: OnboardingConfig = Field(default_factory=OnboardingConfig)

    selection_file: Path | None = Field(
        default=None,
        description="Previously saved selection payload (JSON) to hydrate from.",
    )
    output_dir: Path = Field(default_factory=lambda: Path("outputs"))

    @model_validator(mode="after")
    def _validate(self) -> "PickerConfig":
        if self.source is SourceKind.FILE and self.file is None:
            self.file = FileSourceConfig()
        if self.source is SourceKind.MOCK and self.mock is None:
            self.mock = MockSourceConfig()
        if self.source is SourceKind.HTTP and self.http is None:
            raise ValueError("source=http requires an 'http' block with base_url")
        return self

    def source_config(self) -> BaseModel:
        """The config block of the selected source."""
        return getattr(self, self.source.value)
