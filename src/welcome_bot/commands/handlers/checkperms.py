from __future__ import annotations

from discord.ext import commands

from welcome_bot.formatter import checkperms_embed
from welcome_bot.roles import diagnose

from .. import register_cog


@register_cog
class CheckPerms(commands.Cog):
    """Auto-role diagnostics for administrators."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(
        name="checkperms",
        brief="Diagnose the bot's role permissions and auto-role hierarchy",
        ignore_extra=False,
        extras={"admin_only": True},
    )
    @commands.guild_only()
    @commands.has_permissions(administrator=True)
    async def checkperms(self, ctx: commands.Context) -> None:
        """Report Manage Roles and hierarchy state without touching any member."""

        diagnosis = await diagnose(ctx.guild, self.bot.gateway, self.bot.config)
        await ctx.reply(embed=checkperms_embed(diagnosis))
