"""Exceptions raised while scaffolding a project.

Every failure the CLI reports derives from :class:`ScaffoldError`.  Nothing
in the scaffolder retries: each error aborts the run and leaves whatever was
already written on disk.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class DirectoryExistsError(ScaffoldError):
    """Raised when the target project directory is already present."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Directory already exists: {self.path}")


class ExternalToolError(ScaffoldError):
    """Raised when ``create-next-app`` or the package manager exits non-zero."""

    def __init__(self, message: str, command: str = "", returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(message)


class PatchAnchorNotFoundError(ScaffoldError):
    """Raised when a text patch cannot find the line it anchors on."""

    def __init__(self, path: str | Path, anchor: str) -> None:
        self.path = Path(path)
        self.anchor = anchor
        super().__init__(f"Patch anchor {anchor!r} not found in {self.path}")


class InvariantViolation(ScaffoldError):
    """Raised when a directory the materializer guarantees is missing."""
