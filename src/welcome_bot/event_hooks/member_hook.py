"""
Member join/leave handling.

A join fans out into three independent operations: the welcome-channel post,
the auto-role guard and the welcome DM. They run concurrently and each one
absorbs its own failure, so a closed DM or a rejected role never suppresses
the others. Every operation reports back through :class:`JoinReport`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import discord

from welcome_bot.clients.gateway import GatewaySession
from welcome_bot.config import BotConfig
from welcome_bot.errors import ChannelNotFound, GatewayError
from welcome_bot.formatter import (
    direct_message_embed,
    goodbye_embed,
    welcome_embed,
)
from welcome_bot.roles import Failed, Outcome, evaluate_and_assign
from welcome_bot.roles.guard import UNEXPECTED_ERROR

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SendResult:
    sent: bool
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class JoinReport:
    welcome: SendResult
    role: Outcome
    direct_message: SendResult


@dataclass(frozen=True, slots=True)
class LeaveReport:
    goodbye: SendResult


def _banner(config: BotConfig) -> Optional[Path]:
    path = Path(config.banner_path)
    if not path.is_file():
        logger.debug("Welcome banner %s not found; sending without image", path)
        return None
    return path


async def _post_to_welcome_channel(
    member: discord.Member,
    gateway: GatewaySession,
    config: BotConfig,
    *,
    kind: str,
    embed: discord.Embed,
    content: Optional[str] = None,
    attachments: tuple[Path, ...] = (),
) -> SendResult:
    if config.welcome_channel_id is None:
        logger.info(
            "WELCOME_CHANNEL_ID not configured; skipping %s message for %s", kind, member
        )
        return SendResult(False, "welcome channel not configured")

    try:
        await gateway.send_message(
            member.guild,
            config.welcome_channel_id,
            content=content,
            embed=embed,
            attachments=attachments,
        )
    except ChannelNotFound:
        logger.error(
            "Welcome channel %s not found; check WELCOME_CHANNEL_ID",
            config.welcome_channel_id,
        )
        return SendResult(False, "welcome channel not found")
    except GatewayError as exc:
        logger.error("Error sending %s message for %s: %s", kind, member, exc)
        return SendResult(False, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error sending %s message for %s", kind, member)
        return SendResult(False, str(exc))

    logger.info("%s message sent for %s", kind.capitalize(), member)
    return SendResult(True)


async def send_welcome(
    member: discord.Member, gateway: GatewaySession, config: BotConfig
) -> SendResult:
    banner = _banner(config)
    embed = welcome_embed(member, config, banner_name=banner.name if banner else None)
    return await _post_to_welcome_channel(
        member,
        gateway,
        config,
        kind="welcome",
        content=f"{member.mention} 🎉",
        embed=embed,
        attachments=(banner,) if banner else (),
    )


async def assign_auto_role(
    member: discord.Member, gateway: GatewaySession, config: BotConfig
) -> Outcome:
    try:
        return await evaluate_and_assign(member, member.guild, gateway, config)
    except Exception:
        logger.exception("Unexpected error assigning auto-role to %s", member)
        return Failed(UNEXPECTED_ERROR, role_id=config.auto_role_id)


async def send_direct_welcome(
    member: discord.Member, gateway: GatewaySession
) -> SendResult:
    try:
        await gateway.send_direct_message(member, embed=direct_message_embed(member))
    except GatewayError as exc:
        # 50007: the member has DMs from server members disabled
        logger.warning("Could not send DM to %s (DMs might be disabled): %s", member, exc)
        return SendResult(False, str(exc))
    except Exception as exc:
        logger.exception("Unexpected error sending DM to %s", member)
        return SendResult(False, str(exc))

    logger.info("DM sent to %s", member)
    return SendResult(True)


async def handle_join(
    member: discord.Member, gateway: GatewaySession, config: BotConfig
) -> JoinReport:
    logger.info("New member joined: %s (guild %s)", member, member.guild.id)

    welcome, role, direct_message = await asyncio.gather(
        send_welcome(member, gateway, config),
        assign_auto_role(member, gateway, config),
        send_direct_welcome(member, gateway),
    )
    return JoinReport(welcome=welcome, role=role, direct_message=direct_message)


async def handle_leave(
    member: discord.Member, gateway: GatewaySession, config: BotConfig
) -> LeaveReport:
    logger.info("Member left: %s (guild %s)", member, member.guild.id)

    goodbye = await _post_to_welcome_channel(
        member, gateway, config, kind="goodbye", embed=goodbye_embed(member)
    )
    return LeaveReport(goodbye=goodbye)
