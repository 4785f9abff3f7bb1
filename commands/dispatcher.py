"""
Chat command dispatcher for Timezone Bot.

Each guild message is split on whitespace and its first token, lower-cased,
is looked up in ``COMMANDS``. Messages that are not commands still refresh the
sender's nickname clock.
"""
import discord
from typing import Awaitable, Callable, Dict, List, Tuple

import config
from commands.shared import DM_ONLY_REPLY, safe_reply
from commands.user import debug, timezone
from core.logging import get_logger
from core.store import TimezoneStore

logger = get_logger(__name__)

CommandHandler = Callable[[discord.Message, List[str], TimezoneStore], Awaitable[None]]

COMMANDS: Dict[str, CommandHandler] = {
    f"{config.COMMAND_PREFIX}settimezone": timezone.set_timezone,
    f"{config.COMMAND_PREFIX}timezonedebug": debug.timezone_debug,
    f"{config.COMMAND_PREFIX}mytime": timezone.my_time,
}


def parse_command(content: str) -> Tuple[str, List[str]]:
    """Split message content into a lower-cased command token and its arguments."""
    tokens = (content or "").split()
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]


class CommandDispatcher:
    """Routes inbound messages to command handlers."""

    def __init__(self, store: TimezoneStore):
        self.store = store

    async def handle_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        if message.guild is None:
            await safe_reply(message, DM_ONLY_REPLY)
            return

        command, args = parse_command(message.content)
        handler = COMMANDS.get(command)
        if handler is not None:
            logger.debug(f"{command} from user {message.author.id} in guild {message.guild.id}")
            await handler(message, args, self.store)
            return

        await timezone.refresh_nickname(message, self.store)
