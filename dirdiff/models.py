"""Data models for dirdiff."""

import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Union

from .errors import ConfigError, PathResolutionError


class EntryAction(Enum):
    """Outcome of comparing one source entry against the target tree."""
    CREATE_DIRECTORY = "create_directory"
    DIRECTORY_EXISTS = "directory_exists"
    STAGE_NEW = "stage_new"
    STAGE_CHANGED = "stage_changed"
    STAGE_UNVERIFIED = "stage_unverified"
    UNCHANGED = "unchanged"

    @property
    def stages_file(self) -> bool:
        return self in (
            EntryAction.STAGE_NEW,
            EntryAction.STAGE_CHANGED,
            EntryAction.STAGE_UNVERIFIED,
        )


def _absolute(value: Union[str, Path]) -> Path:
    try:
        return Path(os.path.abspath(value))
    except OSError as e:
        # os.getcwd() fails when the working directory was removed
        raise PathResolutionError(value, e) from e


@dataclass(frozen=True)
class ResolvedPaths:
    """Absolute roots used during a single run."""
    source: Path
    target: Path
    diff_dir: Path
    staging_root: Path


@dataclass(frozen=True)
class SyncConfig:
    """Immutable run configuration, built once by the caller."""
    source: Union[str, Path]
    target: Union[str, Path]
    diff_dir: Union[str, Path]
    verbose: bool = False
    hash_algorithm: str = "sha256"
    show_progress: bool = False
    json_summary: bool = False

    def validate(self) -> None:
        """Raise ConfigError for the first empty path parameter."""
        for name, value in (
            ("srcdir", self.source),
            ("targetdir", self.target),
            ("diffdir", self.diff_dir),
        ):
            if value is None or str(value) == "":
                raise ConfigError(name)

    def resolve(self) -> ResolvedPaths:
        """Make every root absolute and derive the staging root."""
        source = _absolute(self.source)
        target = _absolute(self.target)
        diff_dir = _absolute(self.diff_dir)
        return ResolvedPaths(
            source=source,
            target=target,
            diff_dir=diff_dir,
            staging_root=diff_dir / target.name,
        )


@dataclass(frozen=True)
class TreeEntry:
    """A node visited during the walk of the source tree."""
    path: Path
    relative_path: Path
    is_dir: bool


@dataclass
class StagedFile:
    """Record of a file copied under the staging root."""
    relative_path: str
    source: str
    destination: str
    action: str
    size: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FingerprintFailure:
    """Record of a file whose fingerprint could not be computed."""
    relative_path: str
    path: str
    error: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SyncResult:
    """Summary of a completed run."""
    staged: list[StagedFile] = field(default_factory=list)
    created_directories: list[str] = field(default_factory=list)
    unchanged: int = 0
    entries_visited: int = 0
    fingerprint_failures: list[FingerprintFailure] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
