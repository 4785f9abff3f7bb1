"""
Custom exceptions for Timezone Bot.

These exceptions provide structured error handling with user-friendly messages,
and a small classification step so each call site can decide whether a failure
is shown to the user or only logged.
"""
from enum import Enum
from typing import Optional

import discord


class TimezoneBotError(Exception):
    """Base exception for all Timezone Bot errors."""

    def __init__(self, message: str, user_message: Optional[str] = None):
        """
        Args:
            message: Technical error message for logging
            user_message: User-friendly message to display (defaults to message)
        """
        super().__init__(message)
        self.user_message = user_message or message

    def __str__(self) -> str:
        return self.args[0]


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(TimezoneBotError):
    """Raised when a command argument is missing or malformed."""


class MissingArgumentError(ValidationError):
    """Raised when a command is called without a required argument."""

    def __init__(self, command: str, usage: str):
        self.command = command
        self.usage = usage
        super().__init__(
            message=f"Missing argument for {command}",
            user_message=f"❌ Please specify a timezone. Example: `{usage}`"
        )


class InvalidTimezoneError(ValidationError):
    """Raised when an invalid timezone is provided."""

    def __init__(self, timezone: str):
        self.timezone = timezone
        super().__init__(
            message=f"Invalid timezone: {timezone}",
            user_message="❌ Invalid timezone. Try `!settimezone Europe/London` or `America/New_York`"
        )


# =============================================================================
# User Errors
# =============================================================================

class TimezoneNotSetError(TimezoneBotError):
    """Raised when a user hasn't set their timezone."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(
            message=f"Timezone not set for user {user_id}",
            user_message="❌ You haven't set a timezone yet. Use `!settimezone` first."
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(TimezoneBotError):
    """Raised when required settings are missing at startup."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(message="Invalid configuration: " + "; ".join(errors))


# =============================================================================
# Classification
# =============================================================================

class ErrorKind(Enum):
    """Broad failure categories, used to pick reply-vs-log handling."""
    VALIDATION = "validation"   # Bad user input, reply only
    PERMISSION = "permission"   # Platform refused, degrade silently
    IO = "io"                   # Disk or network, log and degrade
    UNEXPECTED = "unexpected"   # Bug, log and send a generic apology


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception to the category that decides how it is surfaced."""
    if isinstance(exc, (ValidationError, TimezoneNotSetError)):
        return ErrorKind.VALIDATION
    if isinstance(exc, discord.Forbidden):
        return ErrorKind.PERMISSION
    if isinstance(exc, (OSError, discord.HTTPException)):
        return ErrorKind.IO
    return ErrorKind.UNEXPECTED
