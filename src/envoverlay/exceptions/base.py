"""Base exception classes for envoverlay.

All envoverlay exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery
"""

from typing import Any, Dict, Optional


class EnvOverlayError(Exception):
    """Base exception for all envoverlay errors.

    Attributes:
        code: Machine-readable error code (e.g., "CHANNEL_ERROR")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(EnvOverlayError):
    """Raised when settings read from the environment are invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CONFIGURATION_ERROR", message=message, details=details)


class ReadOnlyEnvironmentError(EnvOverlayError):
    """Raised on any attempt to mutate the process-wide host snapshot.

    The snapshot is the shared baseline for every overlay in the process;
    callers wanting a mutable environment must take a copy first.
    """

    def __init__(self, operation: str):
        super().__init__(
            code="READ_ONLY_ENVIRONMENT",
            message=f"host environment snapshot is read-only ({operation}); use copy()",
            details={"operation": operation},
        )


class ChannelError(EnvOverlayError):
    """The remote channel is broken or the peer is unreachable."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CHANNEL_ERROR", message=message, details=details)


class ChannelInterruptedError(EnvOverlayError):
    """A remote call was cancelled while waiting for the peer.

    Deliberately not a ChannelError subclass so callers can tell
    "peer unreachable" apart from "we gave up waiting".
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="CHANNEL_INTERRUPTED", message=message, details=details)


class UnknownCallError(EnvOverlayError):
    """A peer server was asked to run a call it has no registration for."""

    def __init__(self, name: str, known: Optional[list] = None):
        super().__init__(
            code="UNKNOWN_CALL",
            message=f"no remote call registered under '{name}'",
            details={"name": name, "known": sorted(known or [])},
        )
