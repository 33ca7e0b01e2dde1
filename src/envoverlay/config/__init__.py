"""Configuration for envoverlay.

Example:
    from envoverlay.config import get_settings

    settings = get_settings()
    print(settings.peer_url, settings.port)
"""

from envoverlay.config.env_loader import EnvLoader
from envoverlay.config.settings import (
    DEFAULT_PREFIX,
    OverlaySettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "EnvLoader",
    "OverlaySettings",
    "DEFAULT_PREFIX",
    "get_settings",
    "reset_settings",
]
