from __future__ import annotations

import discord
from discord.ext import commands

from welcome_bot.formatter import ping_embed

from .. import register_cog


@register_cog
class Ping(commands.Cog):
    """Latency check."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(name="ping", brief="Check bot latency", ignore_extra=False)
    @commands.guild_only()
    async def ping(self, ctx: commands.Context) -> None:
        """Round-trip since the message was created, plus gateway heartbeat latency."""

        elapsed = discord.utils.utcnow() - ctx.message.created_at
        latency_ms = max(0, round(elapsed.total_seconds() * 1000))
        await ctx.reply(embed=ping_embed(latency_ms, self.bot.gateway.latency_ms))
