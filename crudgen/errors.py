"""Exceptions raised by the crudgen generators and registries."""

from __future__ import annotations

from pathlib import Path


class CrudgenError(Exception):
    """Base class for every error crudgen reports at the command boundary."""


class AlreadyExistsError(CrudgenError):
    """Raised when a project, module or router target is already on disk."""

    def __init__(self, path: Path, kind: str = "Path") -> None:
        self.path = Path(path)
        self.kind = kind
        super().__init__(f"{kind} already exists: {self.path}")


class AnchorNotFoundError(CrudgenError):
    """Raised when a strict registry patch finds none of its anchors."""

    def __init__(self, anchor: str, path: Path | None = None) -> None:
        self.anchor = anchor
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Insertion anchor {anchor!r} not found{where}")


class CommandError(CrudgenError):
    """Raised when an external command (package manager) fails."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class UnsupportedCommandError(CrudgenError):
    """Raised when a command is not available for the project's framework."""


class InvalidNameError(CrudgenError):
    """Raised when a project or module name cannot form valid identifiers."""
