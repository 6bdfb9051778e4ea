"""
Gateway Session: the narrow surface the hooks need from the chat platform.

Hooks, the role guard and commands talk to :class:`GatewaySession` only, so
they can be exercised with an in-memory fake. :class:`DiscordGateway` is the
``discord.py`` implementation used at runtime; it translates
:class:`discord.HTTPException` and connection failures into
:class:`~welcome_bot.errors.GatewayError`.
"""

from __future__ import annotations

import asyncio
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence

import aiohttp
import discord

from welcome_bot.errors import ChannelNotFound, GatewayError

logger = logging.getLogger(__name__)

# Raised by discord.py's HTTP client once its own retries are exhausted.
_NETWORK_ERRORS = (OSError, aiohttp.ClientError, asyncio.TimeoutError)


@contextmanager
def _platform_call() -> Iterator[None]:
    try:
        yield
    except discord.HTTPException as exc:
        raise GatewayError.from_http(exc) from exc
    except _NETWORK_ERRORS as exc:
        raise GatewayError(str(exc) or exc.__class__.__name__) from exc


@dataclass(frozen=True, slots=True)
class RoleView:
    id: int
    name: str
    position: int

    @classmethod
    def from_role(cls, role: discord.Role) -> "RoleView":
        return cls(id=role.id, name=role.name, position=role.position)


@dataclass(frozen=True, slots=True)
class BotIdentity:
    """The bot's own membership record in a guild."""

    can_manage_roles: bool
    highest_role: RoleView


class GatewaySession(Protocol):
    async def get_role(self, guild: discord.Guild, role_id: int) -> Optional[RoleView]: ...

    async def get_bot_identity(self, guild: discord.Guild) -> BotIdentity: ...

    async def add_role_to_member(
        self, member: discord.Member, role_id: int, *, reason: str | None = None
    ) -> None: ...

    async def send_message(
        self,
        guild: discord.Guild,
        channel_id: int | None,
        *,
        content: str | None = None,
        embed: discord.Embed | None = None,
        attachments: Sequence[Path] = (),
    ) -> None: ...

    async def send_direct_message(
        self, member: discord.abc.User, *, content: str | None = None, embed: discord.Embed | None = None
    ) -> None: ...

    async def set_presence(self, text: str) -> None: ...

    @property
    def latency_ms(self) -> int: ...


class DiscordGateway:
    """:class:`GatewaySession` backed by a connected :class:`discord.Client`."""

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    @property
    def latency_ms(self) -> int:
        latency = self.client.latency
        # ``latency`` is ``inf`` before the first heartbeat ack
        if not math.isfinite(latency):
            return -1
        return round(latency * 1000)

    async def get_role(self, guild: discord.Guild, role_id: int) -> Optional[RoleView]:
        role = guild.get_role(role_id)
        return RoleView.from_role(role) if role is not None else None

    async def get_bot_identity(self, guild: discord.Guild) -> BotIdentity:
        me = guild.me
        return BotIdentity(
            can_manage_roles=me.guild_permissions.manage_roles,
            highest_role=RoleView.from_role(me.top_role),
        )

    async def add_role_to_member(
        self, member: discord.Member, role_id: int, *, reason: str | None = None
    ) -> None:
        with _platform_call():
            await member.add_roles(discord.Object(id=role_id), reason=reason)

    async def send_message(
        self,
        guild: discord.Guild,
        channel_id: int | None,
        *,
        content: str | None = None,
        embed: discord.Embed | None = None,
        attachments: Sequence[Path] = (),
    ) -> None:
        channel = guild.get_channel(channel_id) if channel_id is not None else None
        if channel is None or not hasattr(channel, "send"):
            raise ChannelNotFound(channel_id)

        # discord.File wraps an open handle and can only be sent once
        files = [discord.File(path, filename=Path(path).name) for path in attachments]
        kwargs = {"files": files} if files else {}
        try:
            with _platform_call():
                await channel.send(content=content, embed=embed, **kwargs)
        finally:
            for file in files:
                file.close()

    async def send_direct_message(
        self, member: discord.abc.User, *, content: str | None = None, embed: discord.Embed | None = None
    ) -> None:
        with _platform_call():
            await member.send(content=content, embed=embed)

    async def set_presence(self, text: str) -> None:
        activity = discord.Activity(type=discord.ActivityType.watching, name=text)
        await self.client.change_presence(activity=activity)


__all__ = ["RoleView", "BotIdentity", "GatewaySession", "DiscordGateway"]
