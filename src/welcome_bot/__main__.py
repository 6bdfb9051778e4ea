from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

from welcome_bot.clients import disc
from welcome_bot.config import configure_logging, load_config
from welcome_bot.config.loader import DEFAULT_CONFIG_PATH
from welcome_bot.errors import ConfigError

logger = logging.getLogger("welcome_bot")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m welcome_bot",
        description="Discord welcome bot with auto-role assignment.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="Optional TOML file with a [welcomebot] table (default: %(default)s).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("%s. Cannot run client.", exc)
        return disc.EXIT_LOGIN_FAILED

    logger.info("Starting with %r", config)
    return disc.run(config)


if __name__ == "__main__":
    sys.exit(main())
