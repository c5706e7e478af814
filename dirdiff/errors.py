"""Exceptions raised while synchronizing directory trees."""

import os
from typing import Optional


def display_path(path) -> str:
    """Render a path for output, escaping bytes that do not decode as text."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")


class DirDiffError(Exception):
    """Base class for all dirdiff errors."""

    message = "dirdiff error"

    def __init__(self, path: Optional[str] = None, cause: Optional[BaseException] = None):
        self.path = str(path) if path is not None else None
        self.cause = cause
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.path is not None:
            text += f": '{display_path(self.path)}'"
        if self.cause is not None:
            text += f" ({self.cause})"
        return text


class ConfigError(DirDiffError):
    """A required path parameter was empty."""

    message = "Parameter is empty"


class PathResolutionError(DirDiffError):
    """A path could not be made absolute."""

    message = "failed to resolve path"


class TraversalError(DirDiffError):
    """A node under the source tree could not be stat'ed or listed."""

    message = "failed to read"


class FingerprintError(DirDiffError):
    """Hashing a file failed. Recovered locally by treating the file as changed."""

    message = "failed to fingerprint file"


class DirectoryCreateError(DirDiffError):
    """A needed directory could not be created."""

    message = "failed to create directory"


class CopyError(DirDiffError):
    """Opening, creating or transferring a staged file failed."""

    message = "It was not possible to copy file"
