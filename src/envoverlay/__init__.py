"""envoverlay - environment variable overlays.

This package provides:
- overlay: ordered, case-insensitive environment mappings with PATH+XYZ merging
- host: the process-wide snapshot of the inherited environment
- remote: fetching the environment of another process or host
- transport / web: HTTP executor and the peer server it talks to
- logger, config, exceptions: shared infrastructure
"""

__version__ = "1.0.0"

from envoverlay.exceptions import (
    ChannelError,
    ChannelInterruptedError,
    ConfigurationError,
    EnvOverlayError,
    ReadOnlyEnvironmentError,
    UnknownCallError,
)

from envoverlay.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)

from envoverlay.overlay import EnvironmentOverlay, compare_keys, fold_key

from envoverlay.host import (
    HostEnvironmentSnapshot,
    HostEnvironmentSource,
    OsEnvironmentSource,
    get_host_environment,
)

from envoverlay.remote import (
    NO_PEER,
    NOT_APPLICABLE,
    GetEnvironment,
    LocalExecutor,
    RemoteExecutor,
    fetch_remote_environment,
)

from envoverlay.transport import HttpExecutor

from envoverlay.config import OverlaySettings, get_settings, reset_settings

__all__ = [
    "__version__",
    # Overlay
    "EnvironmentOverlay",
    "fold_key",
    "compare_keys",
    # Host snapshot
    "HostEnvironmentSnapshot",
    "HostEnvironmentSource",
    "OsEnvironmentSource",
    "get_host_environment",
    # Remote
    "NO_PEER",
    "NOT_APPLICABLE",
    "GetEnvironment",
    "LocalExecutor",
    "RemoteExecutor",
    "HttpExecutor",
    "fetch_remote_environment",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Config
    "OverlaySettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "EnvOverlayError",
    "ConfigurationError",
    "ReadOnlyEnvironmentError",
    "ChannelError",
    "ChannelInterruptedError",
    "UnknownCallError",
]
