"""
Liveness web server for Timezone Bot.

FastAPI app answering uptime monitors:
- ``GET /``        plain-text alive confirmation
- ``GET /health``  JSON status including the bot's lifecycle state

Run standalone:
    python -m web.server

Or integrate with the bot:
    from web.server import start_web_server
    server, task = await start_web_server()
"""
import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import Callable, Optional, Tuple

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

import config
from core.logging import get_logger

logger = get_logger(__name__)

ALIVE_MESSAGE = "Timezone Bot is alive!"


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app):
    """Application startup and shutdown."""
    logger.info("Web server starting up...")
    yield
    logger.info("Web server shutting down...")


# =============================================================================
# Create Application
# =============================================================================

def create_app(state_provider: Optional[Callable[[], str]] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        state_provider: Returns the current lifecycle state for /health
    """
    app = FastAPI(
        title="Timezone Bot",
        description="Keeps members' local time in their nicknames",
        version="1.0.0",
        lifespan=lifespan
    )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Static alive confirmation for uptime monitoring."""
        return ALIVE_MESSAGE

    @app.get("/health")
    async def health_check():
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "service": "timezone-bot",
            "state": state_provider() if state_provider else "unknown"
        }

    return app


# =============================================================================
# Server Runner
# =============================================================================

class LivenessServer(uvicorn.Server):
    """uvicorn server that leaves SIGINT/SIGTERM to the bot's own handlers."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self):
        yield


async def start_web_server(
    app: Optional[FastAPI] = None,
    host: str = None,
    port: int = None,
    log_level: str = "warning"
) -> Tuple[LivenessServer, asyncio.Task]:
    """
    Start the web server as an async task.

    Args:
        app: Application to serve (default: a fresh ``create_app()``)
        host: Host to bind to (default from config)
        port: Port to bind to (default from config)
        log_level: Uvicorn log level

    Returns:
        The server and the task running it. Set ``server.should_exit`` and
        await the task to stop accepting connections.
    """
    host = host or config.WEB_HOST
    port = port or config.WEB_PORT

    config_obj = uvicorn.Config(
        app or create_app(),
        host=host,
        port=port,
        log_level=log_level,
        access_log=False
    )
    server = LivenessServer(config_obj)

    logger.info(f"Web server running on {host}:{port}")

    task = asyncio.create_task(server.serve(), name="web-server")
    return server, task


async def stop_web_server(server: LivenessServer, task: asyncio.Task) -> None:
    server.should_exit = True
    if not task.done():
        await task


def run_server():
    """Run the web server standalone."""
    uvicorn.run(
        create_app(),
        host=config.WEB_HOST,
        port=config.WEB_PORT,
        log_level="info"
    )


if __name__ == "__main__":
    run_server()
