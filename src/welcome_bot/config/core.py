import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from welcome_bot.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_YOUTUBE_LINK = "https://youtube.com"
DEFAULT_BANNER_PATH = "images/banner_welcome.png"
DEFAULT_PRESENCE_TEXT = "new members join! 👋"


def _lookup(raw: Mapping[str, Any], env: Mapping[str, str], key: str) -> Any:
    """Prefer the config.toml value (lower-case key), then the env var."""
    value = raw.get(key.lower())
    if value is None or value == "":
        value = env.get(key)
    if isinstance(value, str):
        value = value.strip()
    return value or None


def _optional_id(name: str, value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring %s=%r: not a numeric id", name, value)
        return None


@dataclass(frozen=True, slots=True)
class BotConfig:
    """Process-wide settings, read once at startup and never mutated."""

    token: str
    welcome_channel_id: Optional[int] = None
    rules_channel_id: Optional[int] = None
    general_channel_id: Optional[int] = None
    youtube_link: str = DEFAULT_YOUTUBE_LINK
    auto_role_id: Optional[int] = None
    banner_path: str = DEFAULT_BANNER_PATH
    presence_text: str = DEFAULT_PRESENCE_TEXT

    @classmethod
    def from_sources(
        cls,
        raw: Mapping[str, Any] | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "BotConfig":
        raw = raw or {}
        env = os.environ if env is None else env

        token = _lookup(raw, env, "BOT_TOKEN")
        if not token:
            raise ConfigError("Missing environment variables: BOT_TOKEN")

        welcome_channel_id = _optional_id(
            "WELCOME_CHANNEL_ID", _lookup(raw, env, "WELCOME_CHANNEL_ID")
        )
        if welcome_channel_id is None:
            logger.warning(
                "WELCOME_CHANNEL_ID is not set; join/leave notifications are disabled"
            )

        return cls(
            token=str(token),
            welcome_channel_id=welcome_channel_id,
            rules_channel_id=_optional_id(
                "RULES_CHANNEL_ID", _lookup(raw, env, "RULES_CHANNEL_ID")
            ),
            general_channel_id=_optional_id(
                "GENERAL_CHANNEL_ID", _lookup(raw, env, "GENERAL_CHANNEL_ID")
            ),
            youtube_link=str(_lookup(raw, env, "YOUTUBE_LINK") or DEFAULT_YOUTUBE_LINK),
            auto_role_id=_optional_id("AUTO_ROLE_ID", _lookup(raw, env, "AUTO_ROLE_ID")),
            banner_path=str(_lookup(raw, env, "WELCOME_BANNER_PATH") or DEFAULT_BANNER_PATH),
            presence_text=str(_lookup(raw, env, "PRESENCE_TEXT") or DEFAULT_PRESENCE_TEXT),
        )

    def __repr__(self) -> str:  # keep the token out of logs
        return (
            f"BotConfig(welcome_channel_id={self.welcome_channel_id}, "
            f"rules_channel_id={self.rules_channel_id}, "
            f"general_channel_id={self.general_channel_id}, "
            f"auto_role_id={self.auto_role_id})"
        )
