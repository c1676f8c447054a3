import logging
from pathlib import Path

import uvicorn

import uni_research  # triggers logging setup
from uni_research.app import create_app
from uni_research.config import configuration

# ======================================================================================================================
#   Global Variables
# ======================================================================================================================
# setup logging
logger = logging.getLogger(Path(__file__).stem)


# =============================================================================
#   REST API app - Uni Research backend
# =============================================================================
app = create_app(configuration)


# =============================================================================
#   Entry point
# =============================================================================
def main() -> None:
    logger.info(
        "Starting %s on %s:%d",
        configuration.app.project_name, configuration.server.host, configuration.server.port,
    )
    uvicorn.run(
        "main:app",
        host=configuration.server.host,
        port=configuration.server.port,
        reload=False,
        log_config=None,  # keep the handlers installed by setup_logging
    )


if __name__ == "__main__":
    main()
