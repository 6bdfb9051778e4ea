import logging

import discord

from welcome_bot.clients.gateway import GatewaySession
from welcome_bot.config import BotConfig

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, gateway: GatewaySession, config: BotConfig) -> None:
    """Log the session summary once per process and (re)set the bot's presence."""

    # on_ready fires again after every non-resumed reconnect.
    if not getattr(client, "ready_logged", False):
        guilds = client.guilds
        members = sum(guild.member_count or 0 for guild in guilds)
        logger.info("Logged in as %s (ID: %s)", client.user, client.user.id)
        logger.info("Serving %d server(s), %d user(s)", len(guilds), members)
        client.ready_logged = True

    try:
        await gateway.set_presence(config.presence_text)
    except Exception:
        logger.exception("Failed to set presence")
