"""
Auto-role guard run on every member join.

Discord only lets an actor grant a role when it holds Manage Roles *and* its
highest role sits strictly above the target role. The guard checks both
locally, in order, and only then issues the single ``add_roles`` call:

1. an auto-role is configured            -> else ``Skipped("not configured")``
2. the role exists in the guild           -> else ``Failed("role not found")``
3. the bot has Manage Roles               -> else ``Failed("missing manage-roles permission")``
4. bot's top role outranks the target     -> else ``Failed("role hierarchy violation")``
5. add the role                           -> ``Assigned`` or ``Failed("platform rejected mutation")``

Expected failures are returned as :class:`Failed`, never raised. :func:`diagnose`
repeats checks 2-4 without mutating anything for ``!checkperms``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import discord

from welcome_bot.clients.gateway import BotIdentity, GatewaySession, RoleView
from welcome_bot.config import BotConfig
from welcome_bot.errors import GatewayError

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "not configured"
ROLE_NOT_FOUND = "role not found"
MISSING_MANAGE_ROLES = "missing manage-roles permission"
HIERARCHY_VIOLATION = "role hierarchy violation"
PLATFORM_REJECTED = "platform rejected mutation"
UNEXPECTED_ERROR = "unexpected error"

MISSING_PERMISSIONS_CODE = 50013


@dataclass(frozen=True, slots=True)
class Skipped:
    reason: str


@dataclass(frozen=True, slots=True)
class Assigned:
    role_id: int


@dataclass(frozen=True, slots=True)
class Failed:
    reason: str
    role_id: Optional[int] = None
    bot_position: Optional[int] = None
    target_position: Optional[int] = None
    error_code: Optional[int] = None


Outcome = Union[Skipped, Assigned, Failed]


def outranks(bot_role: RoleView, target_role: RoleView) -> bool:
    """Equal positions do not outrank; Discord rejects that mutation."""
    return bot_role.position > target_role.position


async def evaluate_and_assign(
    member: discord.Member,
    guild: discord.Guild,
    gateway: GatewaySession,
    config: BotConfig,
) -> Outcome:
    role_id = config.auto_role_id
    if role_id is None:
        return Skipped(NOT_CONFIGURED)

    role = await gateway.get_role(guild, role_id)
    if role is None:
        logger.error("Auto-role %s not found in guild %s", role_id, guild.id)
        return Failed(ROLE_NOT_FOUND, role_id=role_id)

    bot = await gateway.get_bot_identity(guild)
    if not bot.can_manage_roles:
        logger.error(
            "Bot lacks the Manage Roles permission in guild %s; enable it under "
            "Server Settings > Roles",
            guild.id,
        )
        return Failed(MISSING_MANAGE_ROLES, role_id=role_id)

    if not outranks(bot.highest_role, role):
        logger.error(
            "Cannot assign role %r: bot's highest role %r (position %d) must be "
            "above it (position %d). Drag the bot's role above %r in Server "
            "Settings > Roles",
            role.name,
            bot.highest_role.name,
            bot.highest_role.position,
            role.position,
            role.name,
        )
        return Failed(
            HIERARCHY_VIOLATION,
            role_id=role_id,
            bot_position=bot.highest_role.position,
            target_position=role.position,
        )

    try:
        await gateway.add_role_to_member(member, role.id, reason="Auto-role on join")
    except GatewayError as exc:
        logger.error("Failed to assign auto-role %r to %s: %s", role.name, member, exc)
        if exc.code == MISSING_PERMISSIONS_CODE:
            logger.error("Missing Permissions: check role hierarchy and bot permissions")
        return Failed(PLATFORM_REJECTED, role_id=role_id, error_code=exc.code)

    logger.info("Auto-role %r assigned to %s", role.name, member)
    return Assigned(role.id)


@dataclass(frozen=True, slots=True)
class Diagnosis:
    """Read-only snapshot of what the guard would decide right now."""

    can_manage_roles: bool
    bot_highest_role: RoleView
    auto_role_id: Optional[int]
    target_role: Optional[RoleView]
    can_assign: Optional[bool]

    @property
    def configured(self) -> bool:
        return self.auto_role_id is not None


async def diagnose(
    guild: discord.Guild, gateway: GatewaySession, config: BotConfig
) -> Diagnosis:
    bot: BotIdentity = await gateway.get_bot_identity(guild)

    target: Optional[RoleView] = None
    can_assign: Optional[bool] = None
    if config.auto_role_id is not None:
        target = await gateway.get_role(guild, config.auto_role_id)
        if target is not None:
            can_assign = outranks(bot.highest_role, target)

    return Diagnosis(
        can_manage_roles=bot.can_manage_roles,
        bot_highest_role=bot.highest_role,
        auto_role_id=config.auto_role_id,
        target_role=target,
        can_assign=can_assign,
    )
