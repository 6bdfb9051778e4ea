import logging

import discord
from discord.ext import commands

logger = logging.getLogger(__name__)


async def handle(bot: commands.Bot, message: discord.Message) -> None:
    """Hand human-authored messages to the ``!`` command processor."""

    # Ignore bots (ourselves included) so replies can never trigger commands.
    if message.author.bot:
        return

    try:
        await bot.process_commands(message)
    except Exception:
        logger.exception("Command processing failed for message %s", message.id)
