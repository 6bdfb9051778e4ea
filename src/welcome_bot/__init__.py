"""Discord welcome bot: join/leave notifications, auto-role and a few text commands."""

__version__ = "1.0.0"
