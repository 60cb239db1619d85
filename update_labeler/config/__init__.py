"""Configuration package."""

from update_labeler.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
