"""Exceptions for envoverlay.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from envoverlay.exceptions import (
        EnvOverlayError,
        ChannelError,
        ChannelInterruptedError,
    )
"""

from envoverlay.exceptions.base import (
    ChannelError,
    ChannelInterruptedError,
    ConfigurationError,
    EnvOverlayError,
    ReadOnlyEnvironmentError,
    UnknownCallError,
)

__all__ = [
    "EnvOverlayError",
    "ConfigurationError",
    "ReadOnlyEnvironmentError",
    "ChannelError",
    "ChannelInterruptedError",
    "UnknownCallError",
]
