"""
Auto-discovery & registry for ``!`` command cogs.

Any module inside ``commands/handlers`` that defines::

    from welcome_bot.commands import register_cog

    @register_cog
    class MyCog(commands.Cog): ...

is picked up automatically at import-time. Invoking :func:`setup` attaches
every registered cog to the bot; :func:`handle_command_error` is the bot's
``on_command_error``.
"""

from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import List, Optional, Type

import discord
from discord.ext import commands as commands_ext

logger = logging.getLogger(__name__)

PREFIX = "!"
ADMIN_ONLY_MESSAGE = "❌ Only administrators can use this command."

_COG_CLASSES: List[Type[commands_ext.Cog]] = []

# Text that merely looks like a command gets no response.
_SILENT_ERRORS = (
    commands_ext.CommandNotFound,
    commands_ext.TooManyArguments,
    commands_ext.NoPrivateMessage,
)


def register_cog(cls: Optional[Type[commands_ext.Cog]] = None):
    """Decorator registering a Cog class for later attachment to the bot."""

    def _register(cog_cls: Type[commands_ext.Cog]):
        if not issubclass(cog_cls, commands_ext.Cog):
            raise TypeError("register_cog expects a discord.ext.commands.Cog subclass")

        _COG_CLASSES.append(cog_cls)
        return cog_cls

    if cls is None:
        return _register
    return _register(cls)


async def setup(bot: commands_ext.Bot) -> None:
    """
    Attach registered cogs to ``bot``.

    This must be invoked during the bot setup phase (typically inside
    ``commands.Bot.setup_hook``).
    """

    for cog_cls in _COG_CLASSES:
        if bot.get_cog(cog_cls.__name__):
            continue
        await bot.add_cog(cog_cls(bot))

    if _COG_CLASSES:
        logger.info("Registered %d command cog(s)", len(_COG_CLASSES))
    else:
        logger.warning("No command cogs discovered; no commands available")


def is_admin_only(command: commands_ext.Command) -> bool:
    return bool(command.extras.get("admin_only"))


async def handle_command_error(
    ctx: commands_ext.Context, error: commands_ext.CommandError
) -> None:
    if isinstance(error, _SILENT_ERRORS):
        return

    if isinstance(error, commands_ext.MissingPermissions):
        logger.info("Denied %s%s for %s", PREFIX, ctx.command, ctx.author)
        try:
            await ctx.reply(ADMIN_ONLY_MESSAGE)
        except discord.HTTPException as exc:
            logger.error("Failed to send permission denial: %s", exc)
        return

    original = getattr(error, "original", error)
    logger.error(
        "Command %s%s failed", PREFIX, ctx.command, exc_info=original
    )


_pkg_path = Path(__file__).resolve().parent / "handlers"
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname.startswith("_"):
        continue
    import_module(f"{__name__}.handlers.{modname}")


__all__ = [
    "ADMIN_ONLY_MESSAGE",
    "PREFIX",
    "handle_command_error",
    "is_admin_only",
    "register_cog",
    "setup",
]
