from __future__ import annotations

from discord.ext import commands

from welcome_bot.formatter import server_info_embed

from .. import register_cog


@register_cog
class ServerInfo(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(
        name="serverinfo", brief="Show information about this server", ignore_extra=False
    )
    @commands.guild_only()
    async def serverinfo(self, ctx: commands.Context) -> None:
        await ctx.reply(embed=server_info_embed(ctx.guild))
