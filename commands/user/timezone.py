import discord
from typing import List

import config
from commands.shared import report_error, resolve_member
from core.exceptions import MissingArgumentError, TimezoneNotSetError
from core.logging import get_logger, log_timezone_change
from core.nickname import RenameOutcome, update_display_name
from core.store import TimezoneStore
from core.timezones import format_local_time, resolve_timezone

logger = get_logger(__name__)

SET_TIMEZONE_USAGE = f"{config.COMMAND_PREFIX}settimezone Europe/London"


async def set_timezone(message: discord.Message, args: List[str], store: TimezoneStore) -> None:
    """Handle `!settimezone <zone>`: validate, store, rename, confirm."""
    try:
        if not args:
            raise MissingArgumentError(f"{config.COMMAND_PREFIX}settimezone", SET_TIMEZONE_USAGE)

        timezone = resolve_timezone(args[0])

        store.set(message.author.id, timezone)
        if not store.save():
            logger.warning(f"Timezone for user {message.author.id} kept in memory only")

        outcome = await update_display_name(resolve_member(message), timezone)
        log_timezone_change(message.author.id, message.guild.id, timezone, outcome.value)

        if outcome is RenameOutcome.UPDATED:
            status = "and your nickname has been updated!"
        elif outcome is RenameOutcome.UNCHANGED:
            status = "and your nickname is already up to date!"
        else:
            status = "but I couldn't update your nickname due to permissions."

        await message.reply(f"✅ Timezone set to **{timezone}** {status}")

    except Exception as e:
        await report_error(
            message, e,
            fallback="❌ Error setting timezone. Please check your timezone format.",
            action="set_timezone",
        )


async def my_time(message: discord.Message, args: List[str], store: TimezoneStore) -> None:
    """Handle `!mytime`: report the caller's local time without renaming."""
    try:
        timezone = store.get(message.author.id)
        if not timezone:
            raise TimezoneNotSetError(message.author.id)

        await message.reply(f"Your current time ({timezone}): **{format_local_time(timezone)}**")

    except Exception as e:
        await report_error(
            message, e,
            fallback="❌ Error checking your time.",
            action="my_time",
        )


async def refresh_nickname(message: discord.Message, store: TimezoneStore) -> RenameOutcome:
    """Keep the embedded clock current on ordinary message activity."""
    timezone = store.get(message.author.id)
    if not timezone:
        return RenameOutcome.SKIPPED

    outcome = await update_display_name(resolve_member(message), timezone)
    if outcome is RenameOutcome.FAILED:
        logger.warning(f"Nickname refresh failed for user {message.author.id}")
    return outcome
