"""Pytest fixtures for fsynth tests."""

import io
import os
import platform
import tempfile
from pathlib import Path
from typing import Dict, Generator, Optional

import pytest
from rich.console import Console

from fsynth.checksum import FileHasher
from fsynth.ui import RunTUI


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that run whole queues against a real filesystem")


# True when running as root, where permission bits do not block access
IS_ROOT = hasattr(os, "geteuid") and os.geteuid() == 0


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_files(temp_dir: Path) -> Dict[str, Path]:
    """Create a small tree of files with known content.

    Creates:
        - source.txt: "hello world"
        - empty.txt: 0 bytes
        - binary.bin: 20KB spanning several hash chunks
        - sub/: empty directory
        - full/inner.txt: non-empty directory

    Returns:
        Dictionary mapping short names to their paths.
    """
    files = {}

    source = temp_dir / "source.txt"
    source.write_text("hello world")
    files["source"] = source

    empty = temp_dir / "empty.txt"
    empty.touch()
    files["empty"] = empty

    binary = temp_dir / "binary.bin"
    binary.write_bytes(bytes(range(256)) * 80)
    files["binary"] = binary

    sub = temp_dir / "sub"
    sub.mkdir()
    files["sub"] = sub

    full = temp_dir / "full"
    full.mkdir()
    (full / "inner.txt").write_text("inner")
    files["full"] = full

    return files


@pytest.fixture
def restricted_file(temp_dir: Path) -> Generator[Optional[Path], None, None]:
    """Create a file with no read permissions.

    Yields:
        Path to the restricted file, or None where permission bits are not
        enforced (Windows, or running as root).
    """
    if platform.system() == "Windows" or IS_ROOT:
        yield None
        return

    restricted = temp_dir / "restricted.txt"
    restricted.write_text("secret content")
    original_mode = restricted.stat().st_mode
    os.chmod(restricted, 0o000)
    try:
        yield restricted
    finally:
        # Restore permissions for cleanup
        os.chmod(restricted, original_mode)


@pytest.fixture
def symlinks_supported(temp_dir: Path) -> bool:
    """True if the platform lets us create symlinks in temp_dir."""
    probe = temp_dir / ".probe_link"
    try:
        probe.symlink_to(temp_dir)
    except (OSError, NotImplementedError):
        return False
    probe.unlink()
    return True


@pytest.fixture
def hasher() -> FileHasher:
    return FileHasher()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def tui(console_output: io.StringIO) -> RunTUI:
    """RunTUI writing to a StringIO without terminal styling."""
    console = Console(file=console_output, force_terminal=False, width=200)
    return RunTUI(console=console)


def snapshot_tree(path: Path) -> Dict[str, object]:
    """Capture files (bytes), directories and symlinks (link values) under path."""
    snapshot: Dict[str, object] = {}
    for root, dirs, files in os.walk(path):
        root_path = Path(root)
        for name in dirs + files:
            entry = root_path / name
            rel = str(entry.relative_to(path))
            if entry.is_symlink():
                snapshot[rel] = ("link", os.readlink(entry))
            elif entry.is_dir():
                snapshot[rel] = ("dir", None)
            else:
                snapshot[rel] = ("file", entry.read_bytes())
    return snapshot


@pytest.fixture
def tree_snapshot():
    """Return the snapshot_tree helper for before/after comparisons."""
    return snapshot_tree
