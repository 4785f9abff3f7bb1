"""
Nickname rendering and updating.

A rendered nickname looks like ``"Alice | 14:30"``: the user's base name, a pipe,
and their local time. Rendering an already rendered name only swaps the time.
"""
from enum import Enum
from typing import Optional

import discord

import config
from core.logging import get_logger
from core.permissions import can_rename
from core.timezones import format_local_time

logger = get_logger(__name__)

SEPARATOR = "|"


class RenameOutcome(Enum):
    """Result of a nickname update attempt. Only ``UPDATED`` is truthy."""
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    NOT_MANAGEABLE = "not_manageable"
    FAILED = "failed"

    def __bool__(self) -> bool:
        return self is RenameOutcome.UPDATED


def base_name(display_name: str) -> str:
    """The part of a display name before the first ``|``, trimmed."""
    return display_name.split(SEPARATOR, 1)[0].strip()


def render_nickname(
    display_name: str,
    local_time: str,
    max_length: int = config.MAX_NICKNAME_LENGTH
) -> str:
    """
    Build ``"{base} | {local_time}"`` from the current display name.

    Unlike the bare ``"{base} | {HH:mm}"`` format, the base name is shortened
    when needed so the result fits in ``max_length`` characters (Discord's
    nickname limit). The shortened form is stable under re-rendering.
    """
    suffix = f" {SEPARATOR} {local_time}"
    base = base_name(display_name)
    room = max_length - len(suffix)
    if room > 0 and len(base) > room:
        base = base[:room].rstrip()
    return f"{base}{suffix}"


async def update_display_name(
    member: Optional[discord.Member],
    timezone: Optional[str]
) -> RenameOutcome:
    """
    Rewrite a member's nickname to show their current local time.

    Never raises: platform errors are logged and reported as ``FAILED``.
    """
    if member is None or not timezone:
        return RenameOutcome.SKIPPED

    try:
        if not can_rename(member):
            return RenameOutcome.NOT_MANAGEABLE

        new_name = render_nickname(member.display_name, format_local_time(timezone))
        if new_name == member.display_name:
            return RenameOutcome.UNCHANGED

        await member.edit(nick=new_name, reason=f"Local time update ({timezone})")
        logger.debug(f"Renamed {member} to {new_name!r}")
        return RenameOutcome.UPDATED

    except discord.Forbidden as e:
        logger.warning(f"Not allowed to update nickname for {member}: {e}")
        return RenameOutcome.FAILED
    except Exception as e:
        logger.error(f"Failed to update nickname for {member}: {e}", exc_info=e)
        return RenameOutcome.FAILED
