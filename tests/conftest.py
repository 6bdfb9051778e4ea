import asyncio
import datetime
import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src/ to sys.path so tests run without an editable install
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

# Ensure required environment variables for BotConfig.from_sources()
os.environ.setdefault("BOT_TOKEN", "test-token")

from welcome_bot.clients.gateway import BotIdentity, RoleView  # noqa: E402
from welcome_bot.config import BotConfig  # noqa: E402
from welcome_bot.errors import ChannelNotFound, GatewayError  # noqa: E402

WELCOME_CHANNEL_ID = 100
AUTO_ROLE_ID = 500


class FakeMember(SimpleNamespace):
    def __str__(self) -> str:
        return self.name


class FakeGateway:
    """In-memory GatewaySession recording every outbound call."""

    def __init__(self) -> None:
        self.roles: dict[int, RoleView] = {}
        self.can_manage_roles = True
        self.bot_role = RoleView(id=1, name="Welcome Bot", position=10)
        self.channels: set[int] = {WELCOME_CHANNEL_ID}
        self.latency_ms = 42
        self.presence: str | None = None

        self.add_calls: list[tuple[int, int]] = []
        self.sent: list[SimpleNamespace] = []
        self.dms: list[SimpleNamespace] = []

        self.add_errors: dict[int, Exception] = {}
        self.send_error: Exception | None = None
        self.dm_errors: dict[int, Exception] = {}

    def add_role(self, role_id: int, name: str, position: int) -> RoleView:
        role = RoleView(id=role_id, name=name, position=position)
        self.roles[role_id] = role
        return role

    async def get_role(self, guild, role_id):
        await asyncio.sleep(0)
        return self.roles.get(role_id)

    async def get_bot_identity(self, guild):
        await asyncio.sleep(0)
        return BotIdentity(can_manage_roles=self.can_manage_roles, highest_role=self.bot_role)

    async def add_role_to_member(self, member, role_id, *, reason=None):
        await asyncio.sleep(0)
        self.add_calls.append((member.id, role_id))
        if member.id in self.add_errors:
            raise self.add_errors[member.id]

    async def send_message(self, guild, channel_id, *, content=None, embed=None, attachments=()):
        await asyncio.sleep(0)
        if channel_id not in self.channels:
            raise ChannelNotFound(channel_id)
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(
            SimpleNamespace(
                channel_id=channel_id,
                content=content,
                embed=embed,
                attachments=tuple(attachments),
            )
        )

    async def send_direct_message(self, member, *, content=None, embed=None):
        await asyncio.sleep(0)
        if member.id in self.dm_errors:
            raise self.dm_errors[member.id]
        self.dms.append(SimpleNamespace(member_id=member.id, content=content, embed=embed))

    async def set_presence(self, text):
        self.presence = text


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def guild():
    return SimpleNamespace(
        id=7,
        name="Test Guild",
        member_count=42,
        icon=None,
        owner_id=9,
        created_at=datetime.datetime(2020, 1, 1, tzinfo=datetime.timezone.utc),
        channels=[object(), object(), object()],
        roles=[object(), object()],
        emojis=[object()],
    )


@pytest.fixture
def make_member(guild):
    def _make(member_id: int = 11, name: str = "newcomer", **extra) -> FakeMember:
        attrs = dict(
            id=member_id,
            name=name,
            mention=f"<@{member_id}>",
            bot=False,
            guild=guild,
            display_avatar=SimpleNamespace(url=f"https://cdn.example/{member_id}.png"),
            created_at=datetime.datetime(2022, 6, 1, tzinfo=datetime.timezone.utc),
        )
        attrs.update(extra)
        return FakeMember(**attrs)

    return _make


@pytest.fixture
def config(tmp_path) -> BotConfig:
    return BotConfig(
        token="test-token",
        welcome_channel_id=WELCOME_CHANNEL_ID,
        rules_channel_id=200,
        general_channel_id=300,
        youtube_link="https://youtube.com/@example",
        auto_role_id=AUTO_ROLE_ID,
        banner_path=str(tmp_path / "missing_banner.png"),
    )


@pytest.fixture
def gateway_error():
    def _make(code: int = 50013, status: int = 403) -> GatewayError:
        return GatewayError("Missing Permissions", status=status, code=code)

    return _make
