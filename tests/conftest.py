"""Shared test fixtures."""

import tempfile
from pathlib import Path

import pytest

from dirdiff.models import SyncConfig

SUBDIRS = ("apps", "cluster", "domains", "servletEngine")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_trees(temp_dir):
    """Create matching src and target system-conf trees with empty subdirectories."""
    source = temp_dir / "src" / "system-conf"
    target = temp_dir / "target" / "system-conf"
    diff_dir = temp_dir / "proc"

    for root in (source, target):
        for subdir in SUBDIRS:
            (root / subdir).mkdir(parents=True)

    return source, target, diff_dir


@pytest.fixture
def sync_config(sample_trees):
    """Create a SyncConfig for the sample trees."""
    source, target, diff_dir = sample_trees
    return SyncConfig(source=source, target=target, diff_dir=diff_dir)
