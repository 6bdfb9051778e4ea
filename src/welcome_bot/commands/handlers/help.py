from __future__ import annotations

from discord.ext import commands

from welcome_bot.formatter import help_embed

from .. import PREFIX, is_admin_only, register_cog


@register_cog
class Help(commands.Cog):
    """List available commands."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @commands.command(name="help", brief="Show this message", ignore_extra=False)
    @commands.guild_only()
    async def help(self, ctx: commands.Context) -> None:
        """List every visible command, flagging the administrator-only ones."""

        listing = [
            (cmd.name, f"{cmd.brief} (admin only)" if is_admin_only(cmd) else cmd.brief)
            for cmd in sorted(self.bot.commands, key=lambda c: c.name)
            if not cmd.hidden
        ]
        await ctx.reply(embed=help_embed(listing, prefix=PREFIX))
