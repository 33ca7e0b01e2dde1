"""Dataclass-based settings for envoverlay.

Covers the peer connection used by ``HttpExecutor``, the bind address of the
peer server, and logging. Every value can be set through an environment
variable carrying a configurable prefix (``ENVOVERLAY`` by default).
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from envoverlay.config.env_loader import EnvLoader
from envoverlay.exceptions import ConfigurationError

DEFAULT_PREFIX = "ENVOVERLAY"
DEFAULT_PEER_TIMEOUT = 30.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8765

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class OverlaySettings:
    """envoverlay configuration

    Attributes:
        peer_url: Base URL of a peer server to fetch environments from
        peer_timeout: Seconds to wait on a peer before the executor gives up
        host: Bind address of the peer server
        port: Bind port of the peer server
        log_level: Logging level name
        log_json: Emit JSON log lines instead of text
    """

    peer_url: Optional[str] = None
    peer_timeout: float = DEFAULT_PEER_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self):
        """Validate settings"""
        if not 0 < self.port < 65536:
            raise ConfigurationError(
                f"port must be between 1 and 65535, got {self.port}", details={"port": self.port}
            )
        if self.peer_timeout <= 0:
            raise ConfigurationError(
                "peer timeout must be positive", details={"peer_timeout": self.peer_timeout}
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"unknown log level '{self.log_level}'", details={"allowed": list(_LOG_LEVELS)}
            )

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        env: Optional[Mapping[str, str]] = None,
    ) -> "OverlaySettings":
        """Load settings from environment variables

        Args:
            prefix: Environment variable prefix
            env: Mapping to read instead of .env + os.environ (used by tests)

        Environment variables:
            {prefix}_PEER_URL: Peer server base URL
            {prefix}_PEER_TIMEOUT: Peer timeout in seconds
            {prefix}_HOST: Peer server bind host
            {prefix}_PORT: Peer server bind port
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_JSON: "true" for JSON log output
        """
        if env is None:
            env = EnvLoader().load()

        return cls(
            peer_url=env.get(f"{prefix}_PEER_URL") or None,
            peer_timeout=_parse_number(env, f"{prefix}_PEER_TIMEOUT", DEFAULT_PEER_TIMEOUT, float),
            host=env.get(f"{prefix}_HOST", DEFAULT_HOST),
            port=_parse_number(env, f"{prefix}_PORT", DEFAULT_PORT, int),
            log_level=env.get(f"{prefix}_LOG_LEVEL", "INFO"),
            log_json=env.get(f"{prefix}_LOG_JSON", "false").lower() == "true",
        )


def _parse_number(env: Mapping[str, str], name: str, default, kind):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a {kind.__name__}, got '{raw}'", details={"variable": name}
        ) from e


_settings: Optional[OverlaySettings] = None


def get_settings(prefix: str = DEFAULT_PREFIX, reload: bool = False) -> OverlaySettings:
    """Get the cached settings instance, loading it from the environment on first use."""
    global _settings
    if _settings is None or reload:
        _settings = OverlaySettings.from_env(prefix=prefix)
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (useful for testing)."""
    global _settings
    _settings = None
