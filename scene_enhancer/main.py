"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import health, generate
from .providers import OpenAIClient
from .core import SceneAnalyzer, ImageGenerator, Orchestrator
from .utils.config import Config, load_config
from .utils.logger import get_logger

logger = get_logger(__name__)


def build_orchestrator(config: Config, client) -> Orchestrator:
    """Wire both pipeline stages around one provider client."""
    analyzer = SceneAnalyzer(
        client=client,
        model=config.analysis.model,
        user_instruction=config.analysis.user_instruction,
    )

    generator = ImageGenerator(
        client=client,
        model=config.generation.model,
        size=config.generation.size,
        fallback_prompt=config.generation.fallback_prompt,
        response_format=config.generation.response_format,
    )

    return Orchestrator(
        analyzer=analyzer,
        generator=generator,
        rejection_reason=config.analysis.rejection_reason,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown.

    Creates the single provider client shared by every request and
    closes it on shutdown.
    """
    logger.info("Application starting up...")

    try:
        config = load_config()

        openai = OpenAIClient(
            api_key=config.openai_api_key,
            base_url=config.openai_base_url,
            timeout=config.timeout_openai_seconds,
        )
        await openai.initialize()

        app.state.config = config
        app.state.openai = openai
        app.state.orchestrator = build_orchestrator(config, openai)
        app.state.max_body_bytes = config.max_body_bytes

        logger.info("Application startup complete")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("Application shutting down...")
    await openai.close()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Product Scene Enhancer",
    description="Stages product photos with a vision plan and an image model",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(generate.router, tags=["generate"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "scene-enhancer",
        "version": __version__,
        "status": "running",
    }


def run():
    """Console entry point: serve the app on the configured host and port."""
    import uvicorn

    config = load_config()

    uvicorn.run(
        "scene_enhancer.main:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    run()
