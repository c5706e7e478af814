"""Source tree walking and file fingerprinting."""

import hashlib
import logging
import os
import stat
from pathlib import Path
from typing import Iterator, Union

import xxhash

from .errors import FingerprintError, TraversalError, display_path
from .models import TreeEntry

_log = logging.getLogger(__name__)

HASH_ALGORITHMS = {
    "sha256": hashlib.sha256,
    "xxh64": xxhash.xxh64,
}


def _long_path(path: Union[str, Path]) -> str:
    """Convert path to long path format on Windows to handle paths > 260 chars."""
    path_str = os.path.abspath(path)
    if os.name == 'nt' and not path_str.startswith('\\\\?\\'):
        return '\\\\?\\' + path_str
    return path_str


def compute_file_hash(
    file_path: Union[str, Path],
    algorithm: str = "sha256",
    chunk_size: int = 65536
) -> str:
    """Compute the hex digest of a file's full content."""
    try:
        hasher = HASH_ALGORITHMS[algorithm]()
    except KeyError:
        raise ValueError(f"Unknown hash algorithm: {algorithm}") from None

    try:
        with open(_long_path(file_path), 'rb') as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
    except OSError as e:
        raise FingerprintError(file_path, e) from e
    return hasher.hexdigest()


def file_exists(path: Union[str, Path]) -> bool:
    """Return True if anything can be stat'ed at path."""
    try:
        os.stat(_long_path(path))
    except OSError:
        return False
    return True


def directory_exists(path: Union[str, Path]) -> bool:
    """
    Return True if an entry exists at path.

    Only a missing entry counts as absent; any other stat failure is
    raised as TraversalError.
    """
    try:
        os.stat(_long_path(path))
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise TraversalError(path, e) from e
    return True


def is_directory(path: Union[str, Path]) -> bool:
    """Return True if path is a directory, following symlinks."""
    try:
        st = os.stat(_long_path(path))
    except OSError as e:
        raise TraversalError(path, e) from e
    return stat.S_ISDIR(st.st_mode)


def walk_tree(root: Union[str, Path]) -> Iterator[TreeEntry]:
    """
    Walk root depth-first, yielding a TreeEntry for every node.

    The root itself is yielded first and children are visited in lexical
    name order. Symlinked directories below the root are reported as
    directories but not descended into. The root is always descended, even
    when it is itself a symlink to a directory; an lstat-based walk such
    as Go's filepath.Walk would report it as a single entry instead. The
    first stat or listing failure raises TraversalError and ends the walk.

    Args:
        root: Directory to walk

    Yields:
        TreeEntry for each visited node
    """
    root = Path(root)
    stack = [root]

    while stack:
        path = stack.pop()
        is_dir = is_directory(path)
        yield TreeEntry(path=path, relative_path=path.relative_to(root), is_dir=is_dir)

        if not is_dir or (path != root and os.path.islink(path)):
            continue

        try:
            names = sorted(os.listdir(_long_path(path)))
        except OSError as e:
            raise TraversalError(path, e) from e

        _log.debug("Listing %s (%d entries)", display_path(path), len(names))
        # Reversed so the lexically first child is popped first
        stack.extend(path / name for name in reversed(names))
