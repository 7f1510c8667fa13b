from __future__ import annotations

from typing import Optional, Sequence


class BootstrapError(Exception):
    """Base class for all bootstrap errors."""


class ConfigNotFound(BootstrapError, FileNotFoundError):
    def __init__(self, path: str):
        super().__init__(f"Config file not found: {path}")
        self.path = path


class ConfigParseError(BootstrapError, ValueError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid config {path}: {reason}")
        self.path = path
        self.reason = reason


class ValidationError(BootstrapError, ValueError):
    """A single user-supplied value was rejected."""


class CollaboratorFailure(BootstrapError, RuntimeError):
    """An external command (package manager, OS tool) failed."""

    def __init__(
        self,
        message: str,
        *,
        argv: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.argv = list(argv or [])
        self.returncode = returncode
