"""
Exit Codes - Process exit statuses of the jirate CLI.
"""

from __future__ import annotations

from enum import IntEnum

from ..core.exceptions import (
    ConfigError,
    InvalidDocument,
    InvalidQuery,
    NotFound,
    RejectedByServer,
    ResolutionError,
    TrackerError,
    TransportError,
)


class ExitCode(IntEnum):
    """
    Exit codes returned by ``jirate``.

    0 is success; everything else identifies the failure class so scripts
    can branch on it.
    """

    SUCCESS = 0
    ERROR = 1
    CONFIG_ERROR = 2
    CONNECTION_ERROR = 3
    NOT_FOUND = 4
    VALIDATION_ERROR = 5
    REJECTED = 6
    RESOLUTION_ERROR = 7
    CANCELLED = 8
    SIGINT = 130

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to the exit code that describes it."""
        if isinstance(exc, KeyboardInterrupt):
            return cls.SIGINT
        if isinstance(exc, ConfigError):
            return cls.CONFIG_ERROR
        if isinstance(exc, (InvalidQuery, InvalidDocument)):
            return cls.VALIDATION_ERROR
        if isinstance(exc, NotFound):
            return cls.NOT_FOUND
        if isinstance(exc, ResolutionError):
            return cls.RESOLUTION_ERROR
        if isinstance(exc, RejectedByServer):
            return cls.REJECTED
        if isinstance(exc, TransportError):
            return cls.CONNECTION_ERROR
        if isinstance(exc, TrackerError) and exc.status_code in (401, 403):
            return cls.CONNECTION_ERROR
        return cls.ERROR
