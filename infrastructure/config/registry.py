from typing import Any

from .models import FileSourceConfig, HttpSourceConfig, MockSourceConfig, SourceKind

# Source kind -> config block model
# Add future catalog sources here
SOURCE_CONFIG_BY_KIND: dict[SourceKind, type[Any]] = {
    SourceKind.FILE: FileSourceConfig,
    SourceKind.HTTP: HttpSourceConfig,
    SourceKind.MOCK: MockSourceConfig,
}
