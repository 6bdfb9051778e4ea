from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict


DEFAULT_CONFIG_PATH = Path("config.toml")
SECTION = "welcomebot"


def load_raw_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Load the ``[welcomebot]`` table from config.toml (the default path).

    Returns an empty dict when the file or the table is missing so callers can
    fall back to environment variables.
    """
    target = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not target.is_file():
        return {}

    with target.open("rb") as handle:
        data = tomllib.load(handle)
    return dict(data.get(SECTION, {}))


__all__ = ["load_raw_config", "DEFAULT_CONFIG_PATH", "SECTION"]
