import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from uni_research.config import Config, configuration
from uni_research.data_models import ResponseEnvelope
from uni_research.routers.demo_router import router as demo_router
from uni_research.utils.error_handlers import register_exception_handlers
from uni_research.utils.executor import BoundedTaskExecutor

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)


# =============================================================================
#   Lifespan – create and drain the task executor around the app's lifetime
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the task executor on startup; wait for its tasks on shutdown."""
    config: Config = app.state.config

    app.state.task_executor = BoundedTaskExecutor.from_config(config.executor)

    logger.info("Application startup complete.")
    yield

    # Teardown
    logger.info("Shutting down – draining task executor.")
    app.state.task_executor.shutdown(wait_for_tasks=True)
    logger.info("Application shutdown complete.")


# =============================================================================
#   REST API app
# =============================================================================
def create_app(config: Optional[Config] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration to use; defaults to the one loaded from config.yml.

    Returns:
        Application with CORS, exception handlers and routers wired up.
    """
    config = config or configuration

    app = FastAPI(
        debug=False,
        title=config.app.project_name,
        description="Backend skeleton with a uniform response envelope and global error handling.",
        version=config.app.version,
        lifespan=lifespan,
    )
    app.state.config = config

    register_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=config.cors.allow_origin_regex,
        allow_credentials=config.cors.allow_credentials,
        allow_methods=config.cors.allow_methods,
        allow_headers=config.cors.allow_headers,
        max_age=config.cors.max_age,
    )

    app.include_router(demo_router)

    @app.get("/", tags=["health"], response_model=ResponseEnvelope[dict])
    async def root() -> ResponseEnvelope[dict]:
        """Health-check root endpoint."""
        return ResponseEnvelope[dict].success({"status": "UP", "service": config.app.project_name})

    return app
