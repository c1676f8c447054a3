from dotenv import load_dotenv

from uni_research.config.config import Config
from uni_research.config.constants import CONFIG_DIR, LOGS_DIR, PROJECT_ROOT, resolve_config_file

# .env may carry UNI_RESEARCH_CONFIG, so it has to be read before resolving the path.
load_dotenv()

# Load once at import time.
configuration: Config = Config.load_from_file(file_path=resolve_config_file())

__all__ = [
    "Config",
    "configuration",
    "PROJECT_ROOT",
    "CONFIG_DIR",
    "LOGS_DIR",
]
