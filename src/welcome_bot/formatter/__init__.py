"""Embed builders for notifications and command replies."""

from .composer import (
    checkperms_embed,
    direct_message_embed,
    goodbye_embed,
    help_embed,
    ping_embed,
    relative_timestamp,
    server_info_embed,
    welcome_embed,
)

__all__ = [
    "checkperms_embed",
    "direct_message_embed",
    "goodbye_embed",
    "help_embed",
    "ping_embed",
    "relative_timestamp",
    "server_info_embed",
    "welcome_embed",
]
