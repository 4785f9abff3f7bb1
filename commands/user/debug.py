import discord
from typing import List

from commands.shared import report_error, resolve_member
from core.permissions import build_permission_report
from core.store import TimezoneStore
from core.timezones import format_local_time


async def timezone_debug(message: discord.Message, args: List[str], store: TimezoneStore) -> None:
    """Handle `!timezonedebug`: explain whether the bot can rename the caller."""
    try:
        member = resolve_member(message)
        if member is None:
            raise LookupError(f"member {message.author.id} not found in guild {message.guild.id}")

        timezone = store.get(message.author.id)
        current_time = format_local_time(timezone) if timezone else None

        report = build_permission_report(member, timezone, current_time)
        await message.reply(report.render())

    except Exception as e:
        await report_error(
            message, e,
            fallback=f"Error running debug command: {e}",
            action="timezone_debug",
        )
