"""Application configuration"""

import logging
from pathlib import Path

from dotenv import load_dotenv

from .core import BotConfig
from .loader import load_raw_config

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NOISY_LOGGERS = ("discord.gateway", "discord.http")


def configure_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=resolved)
    if resolved > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def load_config(path: str | Path | None = None) -> BotConfig:
    """Load ``.env`` and config.toml, then build the immutable :class:`BotConfig`."""

    load_dotenv()
    return BotConfig.from_sources(load_raw_config(path))


__all__ = ["BotConfig", "configure_logging", "load_config", "load_raw_config"]
