import discord
from typing import Optional

from core.exceptions import ErrorKind, TimezoneBotError, classify_error
from core.logging import get_logger, log_error

logger = get_logger(__name__)

DM_ONLY_REPLY = "This bot only works in servers, not in DMs."


def resolve_member(message: discord.Message) -> Optional[discord.Member]:
    """Return the guild member behind a message author, if there is one."""
    author = message.author
    if isinstance(author, discord.Member):
        return author
    if message.guild is None:
        return None
    return message.guild.get_member(author.id)


async def safe_reply(message: discord.Message, content: str) -> bool:
    """Reply to a message, logging instead of raising if Discord refuses."""
    try:
        await message.reply(content)
        return True
    except discord.HTTPException as e:
        logger.warning(f"Could not reply in channel {message.channel.id}: {e}")
        return False


async def report_error(
    message: discord.Message,
    exc: Exception,
    fallback: str,
    action: str
) -> ErrorKind:
    """
    Surface a handler failure according to its category.

    Validation problems are answered with the exception's own user message.
    Everything else is logged and answered with ``fallback``.
    """
    kind = classify_error(exc)
    if kind is ErrorKind.VALIDATION and isinstance(exc, TimezoneBotError):
        await safe_reply(message, exc.user_message)
        return kind

    log_error(
        f"Error during {action}",
        exc=exc,
        kind=kind.value,
        user_id=message.author.id,
        guild_id=message.guild.id if message.guild else None,
    )
    await safe_reply(message, fallback)
    return kind
