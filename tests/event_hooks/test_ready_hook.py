import logging
from types import SimpleNamespace

import pytest

from welcome_bot.event_hooks import ready_hook


@pytest.mark.asyncio
async def test_ready_logs_summary_and_sets_presence(caplog, gateway, config):
    client = SimpleNamespace(
        user=SimpleNamespace(id=1, name="welcome-bot"),
        guilds=[SimpleNamespace(member_count=10), SimpleNamespace(member_count=None)],
    )

    with caplog.at_level(logging.INFO):
        await ready_hook.handle(client, gateway, config)

    assert gateway.presence == config.presence_text
    assert "Serving 2 server(s), 10 user(s)" in caplog.text


@pytest.mark.asyncio
async def test_reconnect_does_not_repeat_summary(caplog, gateway, config):
    client = SimpleNamespace(
        user=SimpleNamespace(id=1, name="welcome-bot"),
        guilds=[SimpleNamespace(member_count=3)],
    )

    with caplog.at_level(logging.INFO):
        await ready_hook.handle(client, gateway, config)
        gateway.presence = None
        await ready_hook.handle(client, gateway, config)

    assert caplog.text.count("Logged in as") == 1
    assert caplog.text.count("Serving 1 server(s)") == 1
    assert gateway.presence == config.presence_text
