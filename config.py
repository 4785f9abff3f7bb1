"""
Configuration module for Timezone Bot.

Loads settings from environment variables with sensible defaults.
"""
import os
from pathlib import Path

# =============================================================================
# Discord Configuration
# =============================================================================

DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")

# Prefix shared by all chat commands
COMMAND_PREFIX = "!"

# Discord rejects nicknames longer than this
MAX_NICKNAME_LENGTH = 32

# =============================================================================
# Data Storage
# =============================================================================

# Base directory for data files
DATA_DIR = Path(os.getenv("DATA_DIR", Path.cwd() / "data"))

# User id -> IANA timezone mapping
TIMEZONES_FILE = Path(os.getenv("TIMEZONES_FILE", DATA_DIR / "timezones.json"))

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
)

# =============================================================================
# Liveness Web Server
# =============================================================================

WEB_HOST = os.getenv("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.getenv("PORT", "3000"))

# =============================================================================
# Lifecycle
# =============================================================================

# Seconds to wait for a graceful shutdown before forcing the process out
SHUTDOWN_TIMEOUT = float(os.getenv("SHUTDOWN_TIMEOUT", "10"))

# =============================================================================
# Validation
# =============================================================================

def validate_config() -> list[str]:
    """
    Validate required configuration.
    Returns a list of error messages (empty if valid).
    """
    errors = []

    if not DISCORD_TOKEN:
        errors.append("DISCORD_TOKEN environment variable is required")

    if SHUTDOWN_TIMEOUT <= 0:
        errors.append("SHUTDOWN_TIMEOUT must be a positive number of seconds")

    return errors
