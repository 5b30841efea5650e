from __future__ import annotations

"""
Domain Error Hierarchy.

Every failure raised by the resolution and trust engine derives from
JsonEnvError and carries the offending file path and path expression so the
CLI can report them without extra context.
"""

from typing import Optional


class JsonEnvError(Exception):
    """Base class for all json_env failures."""

    def __init__(
            self,
            message: str,
            *,
            file_path: Optional[str] = None,
            expression: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file_path = file_path
        self.expression = expression

    def __str__(self) -> str:
        parts = [self.message]
        if self.file_path:
            parts.append(f"file: {self.file_path}")
        if self.expression:
            parts.append(f"path: {self.expression}")
        return " | ".join(parts)


class ConfigIOError(JsonEnvError):
    """A config file is missing or cannot be read."""


class ConfigParseError(JsonEnvError):
    """A config file does not contain well-formed JSON."""


class PathError(JsonEnvError):
    """A path expression is invalid, matches nothing, or yields no objects."""


class SpawnError(JsonEnvError):
    """The target executable could not be started."""

    def __init__(self, message: str, *, command: str) -> None:
        super().__init__(message)
        self.command = command

    def __str__(self) -> str:
        return f"{self.message} | command: {self.command}"


class TrustStoreError(JsonEnvError):
    """The trust store cannot be read, created or written."""


class UsageError(JsonEnvError):
    """Command line arguments are inconsistent."""


class NotTrustedError(JsonEnvError):
    """A config file was not trusted for non-interactive export."""
