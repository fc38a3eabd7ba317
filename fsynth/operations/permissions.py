"""Permission-mode and attribute-preserving copy helpers used by operations."""

import os
import shutil
import stat
from pathlib import Path
from typing import Optional, Tuple, Union

Mode = Union[int, str]


def parse_mode(mode: Mode) -> int:
    """
    Convert a permission mode to an integer.

    Accepts integers (``0o644``) and octal strings (``"644"``, ``"0644"``,
    ``"0o644"``).

    Raises:
        ValueError: If the mode is not valid octal or is outside 0o0-0o7777.
    """
    if isinstance(mode, bool):
        raise ValueError(f"Invalid permission mode: {mode!r}")
    if isinstance(mode, int):
        value = mode
    else:
        text = str(mode).strip().lower()
        if text.startswith("0o"):
            text = text[2:]
        try:
            value = int(text, 8)
        except ValueError:
            raise ValueError(f"Invalid permission mode: {mode!r}")
    if not 0 <= value <= 0o7777:
        raise ValueError(f"Permission mode out of range: {mode!r}")
    return value


def get_mode(path: Union[str, Path]) -> Optional[str]:
    """Return the permission bits of path as an octal string like '644'."""
    try:
        return format(stat.S_IMODE(os.stat(path).st_mode), "o")
    except OSError:
        return None


def set_mode(path: Union[str, Path], mode: Mode) -> Tuple[bool, Optional[str]]:
    """Apply a permission mode to path, returning (ok, error)."""
    try:
        value = parse_mode(mode)
    except ValueError as e:
        return False, str(e)
    try:
        os.chmod(path, value)
    except OSError as e:
        return False, f"Failed to set mode {format(value, 'o')} on '{path}': {e}"
    return True, None


def is_writable(path: Union[str, Path]) -> bool:
    """True if the current user may write to path."""
    return os.access(path, os.W_OK)


def is_readable(path: Union[str, Path]) -> bool:
    """True if the current user may read path."""
    return os.access(path, os.R_OK)


def copy_with_attributes(
    source: Union[str, Path], target: Union[str, Path], preserve_attributes: bool = False
) -> None:
    """
    Copy file bytes from source to target, overwriting target.

    With preserve_attributes the permission bits and timestamps are copied
    too (``shutil.copy2``); otherwise only content is copied.

    Raises:
        OSError: If the copy fails.
    """
    if preserve_attributes:
        shutil.copy2(source, target)
    else:
        shutil.copyfile(source, target)
