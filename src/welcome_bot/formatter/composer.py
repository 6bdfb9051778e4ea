from __future__ import annotations

import datetime
from typing import Iterable, Optional

import discord

from welcome_bot.config import BotConfig

WELCOME_COLOR = discord.Colour(0xFF6B6B)
DIRECT_MESSAGE_COLOR = discord.Colour(0x4ECDC4)
GOODBYE_COLOR = discord.Colour(0x95A5A6)
PING_COLOR = discord.Colour(0x00FF00)
SERVER_INFO_COLOR = discord.Colour(0x3498DB)
HELP_COLOR = discord.Colour(0x9B59B6)
PERMS_OK_COLOR = discord.Colour(0x00FF00)
PERMS_BAD_COLOR = discord.Colour(0xFF0000)


def relative_timestamp(moment: datetime.datetime) -> str:
    """Discord ``<t:...:R>`` markup, rendered client-side as "3 years ago"."""
    return discord.utils.format_dt(moment, style="R")


def _icon_url(guild: discord.Guild) -> Optional[str]:
    return guild.icon.url if guild.icon else None


def welcome_embed(
    member: discord.Member, config: BotConfig, *, banner_name: Optional[str] = None
) -> discord.Embed:
    """
    Build the welcome card posted in the welcome channel.

    :param member: The member who just joined.
    :param config: Supplies the rules/general channel ids and video link.
    :param banner_name: Filename of an image attachment sent alongside the
        embed; it becomes the embed image.
    """
    guild = member.guild
    embed = discord.Embed(
        title="🎮 WELCOME TO THE SERVER!",
        description=(
            f"Hey {member.mention}! Welcome to **{guild.name}**!\n\n"
            "We're glad you joined the most fun gaming community around! 🚀"
        ),
        colour=WELCOME_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_thumbnail(url=member.display_avatar.url)

    rules = (
        f"Don't forget to read the rules in <#{config.rules_channel_id}>"
        if config.rules_channel_id
        else "Read the server rules!"
    )
    hello = (
        f"Introduce yourself in <#{config.general_channel_id}>!"
        if config.general_channel_id
        else "Say hi in chat!"
    )

    embed.add_field(
        name="📊 Member Count", value=f"You are member **#{guild.member_count}**!", inline=True
    )
    embed.add_field(
        name="📅 Account Created", value=relative_timestamp(member.created_at), inline=True
    )
    embed.add_field(name="📜 Read Rules", value=rules, inline=False)
    embed.add_field(name="💬 Say Hello!", value=hello, inline=False)
    embed.add_field(
        name="🎬 YouTube Channel",
        value=f"[Subscribe now!]({config.youtube_link})",
        inline=False,
    )

    if banner_name:
        embed.set_image(url=f"attachment://{banner_name}")
    embed.set_footer(text="Have fun and enjoy your stay! 🎯", icon_url=_icon_url(guild))
    return embed


def direct_message_embed(member: discord.Member) -> discord.Embed:
    guild = member.guild
    embed = discord.Embed(
        title=f"👋 Welcome to {guild.name}!",
        description=(
            f"Hi {member.name}!\n\n"
            "Thanks for joining our server. Don't forget to:\n\n"
            "✅ Read the rules\n"
            "✅ Introduce yourself in chat\n"
            "✅ Subscribe to our YouTube!\n\n"
            "Have fun! 🎮"
        ),
        colour=DIRECT_MESSAGE_COLOR,
    )
    embed.set_thumbnail(url=_icon_url(guild))
    embed.set_footer(text=guild.name)
    return embed


def goodbye_embed(member: discord.Member) -> discord.Embed:
    embed = discord.Embed(
        description=f"😢 **{member}** has left the server.\n\nHope to see you again! 👋",
        colour=GOODBYE_COLOR,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_thumbnail(url=member.display_avatar.url)
    embed.set_footer(text=f"Member count: {member.guild.member_count}")
    return embed


def ping_embed(latency_ms: int, api_latency_ms: int) -> discord.Embed:
    embed = discord.Embed(title="🏓 Pong!", colour=PING_COLOR)
    embed.add_field(name="Latency", value=f"{latency_ms}ms", inline=True)
    embed.add_field(name="API Latency", value=f"{api_latency_ms}ms", inline=True)
    return embed


def server_info_embed(guild: discord.Guild) -> discord.Embed:
    embed = discord.Embed(title=f"📊 {guild.name} - Server Info", colour=SERVER_INFO_COLOR)
    embed.set_thumbnail(url=_icon_url(guild))
    embed.add_field(name="👥 Members", value=str(guild.member_count), inline=True)
    embed.add_field(name="📅 Created", value=relative_timestamp(guild.created_at), inline=True)
    embed.add_field(name="👑 Owner", value=f"<@{guild.owner_id}>", inline=True)
    embed.add_field(name="💬 Channels", value=str(len(guild.channels)), inline=True)
    embed.add_field(name="🎭 Roles", value=str(len(guild.roles)), inline=True)
    embed.add_field(name="😀 Emojis", value=str(len(guild.emojis)), inline=True)
    embed.set_footer(text=f"Server ID: {guild.id}")
    return embed


def help_embed(commands: Iterable[tuple[str, str]], prefix: str = "!") -> discord.Embed:
    """
    :param commands: ``(name, description)`` pairs in display order.
    """
    embed = discord.Embed(
        title="🤖 Bot Commands",
        description="Here are the available commands:",
        colour=HELP_COLOR,
    )
    for name, description in commands:
        embed.add_field(name=f"{prefix}{name}", value=description, inline=False)
    embed.set_footer(text="Have fun! 🎮")
    return embed


def checkperms_embed(diagnosis) -> discord.Embed:
    """Render a :class:`~welcome_bot.roles.Diagnosis` for ``!checkperms``."""

    if not diagnosis.configured:
        role_info = "No auto-role configured"
    elif diagnosis.target_role is None:
        role_info = f"❌ Role ID {diagnosis.auto_role_id} not found"
    else:
        target = diagnosis.target_role
        verdict = "✅ Yes" if diagnosis.can_assign else "❌ No (role hierarchy issue)"
        role_info = (
            f"**Target Role:** {target.name} (position: {target.position})\n"
            f"**Can Assign:** {verdict}"
        )

    embed = discord.Embed(
        title="🔐 Bot Permission Check",
        colour=PERMS_OK_COLOR if diagnosis.can_manage_roles else PERMS_BAD_COLOR,
    )
    embed.add_field(
        name="Manage Roles Permission",
        value="✅ Enabled" if diagnosis.can_manage_roles else "❌ Disabled",
        inline=False,
    )
    embed.add_field(name="Bot's Highest Role", value=diagnosis.bot_highest_role.name, inline=True)
    embed.add_field(
        name="Role Position", value=str(diagnosis.bot_highest_role.position), inline=True
    )
    embed.add_field(name="Auto-Role Status", value=role_info, inline=False)
    embed.set_footer(text="Use this to diagnose permission issues")
    return embed
