"""Discord bot bootstrap utilities."""

from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands as discord_commands

from welcome_bot import commands as wb_commands
from welcome_bot.clients.gateway import DiscordGateway
from welcome_bot.config import BotConfig
from welcome_bot.event_hooks import member_hook, message_hook, ready_hook

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOGIN_FAILED = 1


def build_intents() -> discord.Intents:
    # Members and message content are privileged; enable both in the developer portal.
    intents = discord.Intents.default()
    intents.members = True
    intents.message_content = True
    return intents


class WelcomeBot(discord_commands.Bot):
    """Bot wiring gateway events to the hook modules and ``!`` command cogs."""

    def __init__(self, config: BotConfig) -> None:
        super().__init__(
            command_prefix=wb_commands.PREFIX,
            case_insensitive=True,
            help_command=None,
            intents=build_intents(),
        )
        self.config = config
        self.gateway = DiscordGateway(self)
        self.ready_logged = False

    async def setup_hook(self) -> None:
        """Attach command cogs and route errors from stray tasks to the log."""

        await wb_commands.setup(self)
        asyncio.get_running_loop().set_exception_handler(_log_loop_exception)

    async def on_ready(self) -> None:
        await ready_hook.handle(self, self.gateway, self.config)

    async def on_member_join(self, member: discord.Member) -> None:
        await member_hook.handle_join(member, self.gateway, self.config)

    async def on_member_remove(self, member: discord.Member) -> None:
        await member_hook.handle_leave(member, self.gateway, self.config)

    async def on_message(self, message: discord.Message) -> None:
        await message_hook.handle(self, message)

    async def on_command_error(
        self, ctx: discord_commands.Context, error: discord_commands.CommandError, /
    ) -> None:
        await wb_commands.handle_command_error(ctx, error)

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        logger.exception("Unhandled error in %s", event_method)


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: dict) -> None:
    exc = context.get("exception")
    if exc is not None:
        logger.error("Unhandled exception: %s", context.get("message"), exc_info=exc)
    else:
        logger.error("Unhandled event loop error: %s", context.get("message"))


def run(config: BotConfig) -> int:
    """Run the bot until interrupted; return the process exit code."""

    bot = WelcomeBot(config)
    try:
        # log_handler=None: logging is already configured by welcome_bot.config
        bot.run(config.token, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Failed to login: %s", exc)
        return EXIT_LOGIN_FAILED
    except discord.PrivilegedIntentsRequired:
        logger.error(
            "Privileged intents required. Enable the SERVER MEMBERS and MESSAGE "
            "CONTENT intents in the Discord developer portal."
        )
        return EXIT_LOGIN_FAILED

    logger.info("Shutting down bot gracefully...")
    return EXIT_OK
