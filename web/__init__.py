"""
Web module for Timezone Bot.

Provides the FastAPI liveness endpoint used by uptime monitors.
"""
from web.server import create_app, start_web_server, stop_web_server, run_server

__all__ = ["create_app", "start_web_server", "stop_web_server", "run_server"]
