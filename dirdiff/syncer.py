"""Core sync logic: compare the source tree against the target and stage differences."""

import logging
import os
import shutil
from pathlib import Path
from typing import Optional, Union

from tqdm import tqdm

from .errors import CopyError, DirectoryCreateError, FingerprintError, display_path
from .models import (
    EntryAction,
    FingerprintFailure,
    ResolvedPaths,
    StagedFile,
    SyncConfig,
    SyncResult,
    TreeEntry,
)
from .scanner import (
    HASH_ALGORITHMS,
    _long_path,
    compute_file_hash,
    directory_exists,
    file_exists,
    walk_tree,
)

_log = logging.getLogger(__name__)


def relocate(path: Union[str, Path], old_root: Union[str, Path], new_root: Union[str, Path]) -> Path:
    """
    Move path from under old_root to the same relative location under new_root.

    Raises ValueError if path is not inside old_root.
    """
    return Path(new_root) / Path(path).relative_to(old_root)


def classify_entry(
    entry: TreeEntry,
    paths: ResolvedPaths,
    algorithm: str = "sha256",
    result: Optional[SyncResult] = None
) -> EntryAction:
    """
    Decide what has to happen for a single source entry.

    Directories are only checked for existence in the target tree. Files
    are staged when missing from the target or when their fingerprints
    differ; a file whose fingerprint cannot be computed on either side is
    staged as well and the failure is recorded in result.
    """
    target_path = relocate(entry.path, paths.source, paths.target)

    if entry.is_dir:
        if directory_exists(target_path):
            return EntryAction.DIRECTORY_EXISTS
        return EntryAction.CREATE_DIRECTORY

    if not file_exists(target_path):
        return EntryAction.STAGE_NEW

    try:
        source_hash = compute_file_hash(entry.path, algorithm)
        target_hash = compute_file_hash(target_path, algorithm)
    except FingerprintError as e:
        _log.warning("Treating %s as changed: %s", display_path(entry.relative_path), e)
        if result is not None:
            result.fingerprint_failures.append(
                FingerprintFailure(entry.relative_path.as_posix(), e.path, str(e.cause))
            )
        return EntryAction.STAGE_UNVERIFIED

    if source_hash != target_hash:
        return EntryAction.STAGE_CHANGED
    return EntryAction.UNCHANGED


def create_directory(path: Union[str, Path]) -> None:
    """Create path and any missing parents with permissive default permissions."""
    try:
        os.makedirs(_long_path(path), mode=0o777, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(path, e) from e


def copy_file(src: Union[str, Path], dst: Union[str, Path]) -> int:
    """
    Copy the bytes of src to dst, creating dst's parent directories if needed.

    Only content is copied; dst is created with default permissions or
    truncated if it already exists. Returns the number of bytes written.
    """
    dst_parent = os.path.dirname(_long_path(dst))
    if not file_exists(dst_parent):
        create_directory(dst_parent)

    try:
        source = open(_long_path(src), 'rb')
    except OSError as e:
        raise CopyError(src, e) from e

    with source:
        try:
            destination = open(_long_path(dst), 'wb')
        except OSError as e:
            raise CopyError(dst, e) from e

        with destination:
            try:
                shutil.copyfileobj(source, destination)
            except OSError as e:
                raise CopyError(src, e) from e
            return destination.tell()


def _dot_relative(path: Path, root: Path) -> str:
    return display_path(os.path.join(".", os.path.relpath(path, root)))


def stage_file(
    entry: TreeEntry,
    paths: ResolvedPaths,
    action: EntryAction,
    verbose: bool = False
) -> StagedFile:
    """Copy a source file to its mirrored location under the staging root."""
    destination = relocate(entry.path, paths.source, paths.staging_root)
    size = copy_file(entry.path, destination)

    if verbose:
        tqdm.write(
            f"{_dot_relative(entry.path, paths.source)} was copied to "
            f"{_dot_relative(destination, paths.diff_dir)}"
        )

    return StagedFile(
        relative_path=entry.relative_path.as_posix(),
        source=str(entry.path),
        destination=str(destination),
        action=action.value,
        size=size,
    )


def sync_trees(config: SyncConfig) -> SyncResult:
    """
    Stage every new or changed file of the source tree and create new directories in the target.

    The walk is a single synchronous pass. The first error other than a
    fingerprint failure aborts the run and propagates to the caller;
    whatever was staged before that point is left in place.

    Args:
        config: Run configuration

    Returns:
        SyncResult describing what was staged and created
    """
    config.validate()
    if config.hash_algorithm not in HASH_ALGORITHMS:
        raise ValueError(f"Unknown hash algorithm: {config.hash_algorithm}")

    paths = config.resolve()
    _log.debug("Source: %s", paths.source)
    _log.debug("Target: %s", paths.target)
    _log.debug("Staging root: %s", paths.staging_root)

    result = SyncResult()

    with tqdm(walk_tree(paths.source), desc="Syncing", unit="entry",
              disable=not config.show_progress) as pbar:
        for entry in pbar:
            result.entries_visited += 1
            action = classify_entry(entry, paths, config.hash_algorithm, result)
            _log.debug("%s: %s", display_path(entry.relative_path), action.value)

            if action is EntryAction.CREATE_DIRECTORY:
                create_directory(relocate(entry.path, paths.source, paths.target))
                result.created_directories.append(entry.relative_path.as_posix())
            elif action.stages_file:
                result.staged.append(stage_file(entry, paths, action, config.verbose))
            elif action is EntryAction.UNCHANGED:
                result.unchanged += 1

    return result
