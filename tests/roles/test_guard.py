import dataclasses

import pytest

from welcome_bot.roles import Assigned, Failed, Skipped, diagnose, evaluate_and_assign
from welcome_bot.roles import guard


@pytest.mark.asyncio
async def test_skips_without_configured_role(gateway, guild, make_member, config):
    config = dataclasses.replace(config, auto_role_id=None)

    outcome = await evaluate_and_assign(make_member(), guild, gateway, config)

    assert outcome == Skipped("not configured")
    assert gateway.add_calls == []


@pytest.mark.asyncio
async def test_unknown_role_fails_with_role_id(gateway, guild, make_member, config):
    outcome = await evaluate_and_assign(make_member(), guild, gateway, config)

    assert isinstance(outcome, Failed)
    assert outcome.reason == guard.ROLE_NOT_FOUND
    assert outcome.role_id == config.auto_role_id
    assert gateway.add_calls == []


@pytest.mark.asyncio
async def test_missing_manage_roles_fails_before_hierarchy(gateway, guild, make_member, config):
    gateway.add_role(config.auto_role_id, "Member", 1)
    gateway.can_manage_roles = False

    outcome = await evaluate_and_assign(make_member(), guild, gateway, config)

    assert outcome.reason == guard.MISSING_MANAGE_ROLES
    assert gateway.add_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("bot_position,target_position", [(5, 5), (1, 2), (0, 9), (3, 3)])
async def test_hierarchy_violation_never_mutates(
    gateway, guild, make_member, config, bot_position, target_position
):
    gateway.add_role(config.auto_role_id, "Member", target_position)
    gateway.bot_role = dataclasses.replace(gateway.bot_role, position=bot_position)

    outcome = await evaluate_and_assign(make_member(), guild, gateway, config)

    assert outcome == Failed(
        guard.HIERARCHY_VIOLATION,
        role_id=config.auto_role_id,
        bot_position=bot_position,
        target_position=target_position,
    )
    assert gateway.add_calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("bot_position,target_position", [(6, 5), (2, 1), (10, 0)])
async def test_outranking_bot_assigns_exactly_once(
    gateway, guild, make_member, config, bot_position, target_position
):
    gateway.add_role(config.auto_role_id, "Member", target_position)
    gateway.bot_role = dataclasses.replace(gateway.bot_role, position=bot_position)
    member = make_member()

    outcome = await evaluate_and_assign(member, guild, gateway, config)

    assert outcome == Assigned(config.auto_role_id)
    assert gateway.add_calls == [(member.id, config.auto_role_id)]


@pytest.mark.asyncio
async def test_platform_rejection_is_reported_not_raised(
    gateway, guild, make_member, config, gateway_error
):
    gateway.add_role(config.auto_role_id, "Member", 1)
    member = make_member()
    gateway.add_errors[member.id] = gateway_error(code=50013)

    outcome = await evaluate_and_assign(member, guild, gateway, config)

    assert outcome == Failed(
        guard.PLATFORM_REJECTED, role_id=config.auto_role_id, error_code=50013
    )
    assert len(gateway.add_calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "bot_position,target_position", [(5, 5), (6, 5), (4, 5), (0, 0), (1, 0)]
)
async def test_diagnosis_agrees_with_guard(
    gateway, guild, make_member, config, bot_position, target_position
):
    gateway.add_role(config.auto_role_id, "Member", target_position)
    gateway.bot_role = dataclasses.replace(gateway.bot_role, position=bot_position)

    diagnosis = await diagnose(guild, gateway, config)
    outcome = await evaluate_and_assign(make_member(), guild, gateway, config)

    assert diagnosis.can_assign == isinstance(outcome, Assigned)


@pytest.mark.asyncio
async def test_diagnosis_is_read_only(gateway, guild, config):
    gateway.add_role(config.auto_role_id, "Member", 3)

    diagnosis = await diagnose(guild, gateway, config)

    assert diagnosis.configured
    assert diagnosis.target_role.name == "Member"
    assert diagnosis.bot_highest_role == gateway.bot_role
    assert diagnosis.can_manage_roles is True
    assert gateway.add_calls == []


@pytest.mark.asyncio
async def test_diagnosis_without_role(gateway, guild, config):
    missing = await diagnose(guild, gateway, config)
    unconfigured = await diagnose(guild, gateway, dataclasses.replace(config, auto_role_id=None))

    assert missing.configured and missing.target_role is None and missing.can_assign is None
    assert not unconfigured.configured and unconfigured.can_assign is None
