"""Exception types shared across the bot."""

from __future__ import annotations

from typing import Any


class ConfigError(ValueError):
    """A required configuration value is missing or unusable."""


class GatewayError(Exception):
    """
    A call to the chat platform failed.

    ``status`` is the HTTP status and ``code`` the platform's JSON error code
    (``50013`` is Missing Permissions, ``50007`` is "cannot DM this user").
    Both are ``None`` when the failure did not come from an HTTP response.
    """

    def __init__(
        self, message: str, *, status: int | None = None, code: int | None = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code

    @classmethod
    def from_http(cls, exc: Any) -> "GatewayError":
        """Wrap a :class:`discord.HTTPException`."""

        return cls(
            getattr(exc, "text", "") or str(exc),
            status=getattr(exc, "status", None),
            code=getattr(exc, "code", None),
        )


class ChannelNotFound(GatewayError):
    def __init__(self, channel_id: int | None) -> None:
        super().__init__(f"Channel {channel_id} not found in guild")
        self.channel_id = channel_id


__all__ = ["ConfigError", "GatewayError", "ChannelNotFound"]
