import os
from pathlib import Path

# =============================================================================
#   Project-level path constants
# =============================================================================
# __file__ is src/uni_research/config/constants.py
# parents[3] → project root (uni-research/)
PROJECT_ROOT: Path = Path(__file__).parents[3]
CONFIG_DIR:   Path = PROJECT_ROOT / "config"
LOGS_DIR:     Path = PROJECT_ROOT / "logs"

# Overrides CONFIG_DIR / "config.yml" when set (plain env var or .env entry)
CONFIG_FILE_ENV_VAR: str = "UNI_RESEARCH_CONFIG"


def resolve_config_file() -> Path:
    """Return the config file path, honouring the UNI_RESEARCH_CONFIG override."""
    override = os.environ.get(CONFIG_FILE_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_DIR / "config.yml"
