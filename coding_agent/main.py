import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from coding_agent import __version__
from coding_agent.api.router import api_router
from coding_agent.config.settings import REQUIRED_SETTINGS, Settings, get_settings
from coding_agent.core.exceptions import register_exception_handlers
from coding_agent.core.security import apply_security_headers
from coding_agent.services.batch_writer import BatchFileWriter
from coding_agent.services.github import GitHubService, create_github_client


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    settings: Settings = app.state.settings

    # Startup
    setup_logging(settings.log_level)
    logger.info(f"Agent writing to {settings.repo_full_name} (default branch {settings.target_branch})")
    yield
    # Shutdown
    await app.state.github_client.aclose()
    logger.info("Agent shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application around an already-loaded configuration.

    Args:
        settings: Configuration to use; read from the environment when omitted

    Raises:
        ValidationError: If required settings are missing
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Internal Coding Agent",
        description="Writes batches of generated files into a GitHub repository",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.github_client = create_github_client(settings)
    app.state.batch_writer = BatchFileWriter.from_settings(
        settings, GitHubService(app.state.github_client)
    )

    # Trust X-Forwarded-For / X-Forwarded-Proto from the reverse proxy so the
    # origin check sees the real client address
    app.add_middleware(
        ProxyHeadersMiddleware,
        trusted_hosts=[host.strip() for host in settings.forwarded_allow_ips.split(",")],
    )

    # CORS for browser callers, mirroring the origin allow-list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list or ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Add security headers; log task calls and failed requests."""
        response = await call_next(request)
        apply_security_headers(response)

        # Skip OPTIONS (CORS preflight) and health checks
        if request.method == "OPTIONS" or request.url.path == "/health":
            return response

        if response.status_code >= 400 or request.url.path == "/tasks":
            logger.info(f"{request.method} {request.url.path} → {response.status_code}")

        return response

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


def run() -> None:
    """Console entrypoint: load configuration, then serve on the configured port."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        if any(error["type"] in ("missing", "string_too_short") for error in e.errors()):
            logger.error(
                f"Missing configuration. Set {', '.join(REQUIRED_SETTINGS[:-1])} "
                f"and {REQUIRED_SETTINGS[-1]}."
            )
        else:
            logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info(f"Agent listening on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
