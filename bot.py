import asyncio
import sys

import discord

import config
from commands.dispatcher import CommandDispatcher
from core.inbox import MessageInbox
from core.exceptions import ConfigurationError
from core.lifecycle import Lifecycle, LifecycleState
from core.logging import get_logger, log_error, setup_logging
from core.store import TimezoneStore
from web.server import create_app, start_web_server, stop_web_server

logger = get_logger(__name__)


class TimezoneBot(discord.Client):
    """Discord client that keeps members' local time in their nicknames."""

    def __init__(self, store: TimezoneStore, lifecycle: Lifecycle):
        # Message content is needed for the ! commands, members for renaming
        intents = discord.Intents.default()
        intents.members = True
        intents.message_content = True
        super().__init__(intents=intents)

        self.store = store
        self.lifecycle = lifecycle
        self.dispatcher = CommandDispatcher(store)
        self.inbox = MessageInbox(self.dispatcher.handle_message)

    # ============================================================
    #                        BOT EVENTS
    # ============================================================

    async def on_ready(self):
        """Event triggered when the bot is ready and connected."""
        logger.info(f"✅ Logged in as {self.user}")
        if self.lifecycle.state is not LifecycleState.STARTING:
            return

        self.store.load()
        self.inbox.start()
        self.lifecycle.mark_ready()

    async def on_message(self, message: discord.Message):
        """Queue inbound messages so they are handled one at a time."""
        if not self.lifecycle.is_ready:
            return
        self.inbox.put(message)

    async def on_error(self, event_method: str, *args, **kwargs):
        log_error(f"Discord client error in {event_method}", exc=sys.exc_info()[1])


# ============================================================
#                        ENTRY POINT
# ============================================================

def check_config() -> None:
    """Raise ConfigurationError if required settings are missing."""
    errors = config.validate_config()
    if errors:
        raise ConfigurationError(errors)


async def main() -> int:
    try:
        check_config()
    except ConfigurationError as e:
        log_error("Refusing to start", errors=e.errors)
        return 1

    loop = asyncio.get_running_loop()
    lifecycle = Lifecycle()
    lifecycle.install_exception_handler(loop)
    lifecycle.install_signal_handlers(loop)

    store = TimezoneStore()
    bot = TimezoneBot(store, lifecycle)

    server, server_task = await start_web_server(create_app(lambda: lifecycle.state.value))

    lifecycle.add_shutdown_step("Web server", lambda: stop_web_server(server, server_task))
    lifecycle.add_shutdown_step("Message inbox", bot.inbox.stop)
    lifecycle.add_shutdown_step("Discord client", bot.close)

    try:
        return await _run_until_closed(bot, lifecycle)
    finally:
        lifecycle.remove_signal_handlers(loop)


async def _run_until_closed(bot: TimezoneBot, lifecycle: Lifecycle) -> int:
    try:
        await bot.start(config.DISCORD_TOKEN)
    except discord.LoginFailure as e:
        log_error("Discord login failed, check DISCORD_TOKEN", exc=e)
        await lifecycle.request_shutdown("login failure")
        return 1
    except discord.DiscordException as e:
        log_error("Discord connection failed", exc=e, error=type(e).__name__)
        await lifecycle.request_shutdown("platform error")
        return 1

    # The client also stops on its own (e.g. fatal gateway errors)
    lifecycle.request_shutdown("client closed")
    await lifecycle.wait_closed()
    return 0


def run() -> None:
    setup_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
