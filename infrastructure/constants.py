from pathlib import Path

# Repo-root conventional directories/files (overrideable via picker.yaml)
CONFIG_DIR = Path("configs")
PICKER_CONFIG_FILE = CONFIG_DIR / "picker.yaml"
CATALOG_FILE = CONFIG_DIR / "catalog.sample.yaml"

# Catalog endpoint of the host application
DEFAULT_CATALOG_ENDPOINT = "/public/identities"

# Environment overrides (read after .env is loaded)
ENV_API_BASE_URL = "AUDIENCE_API_BASE_URL"
ENV_API_TOKEN = "AUDIENCE_API_TOKEN"
