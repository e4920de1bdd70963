"""Filesystem helpers."""

import os
import shutil
import stat
import sys
from pathlib import Path
from typing import Union

from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


def _make_writable_and_retry(func, path, _exc):
    """rmtree error handler: git marks object files read-only, so retry once writable."""
    try:
        os.chmod(path, stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
        func(path)
    except OSError as e:
        logger.warning(f"Could not delete {path}: {e}")


def _rmtree(path: Path) -> None:
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_make_writable_and_retry)
    else:
        shutil.rmtree(path, onerror=_make_writable_and_retry)


def delete_by_force(path: Union[str, Path], keep_folder: bool = False) -> None:
    """Recursively delete ``path``, tolerating entries that refuse to go.

    Args:
        path: Directory to wipe
        keep_folder: If True, only the contents are removed and ``path`` itself stays
    """
    target = Path(path)
    if not target.exists():
        return

    if not keep_folder:
        _rmtree(target)
        return

    for entry in target.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            _rmtree(entry)
            continue
        try:
            if not entry.is_symlink():
                entry.chmod(stat.S_IWRITE | stat.S_IREAD)
            entry.unlink()
        except OSError as e:
            logger.warning(f"Could not delete {entry}: {e}")
