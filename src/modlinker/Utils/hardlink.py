"""
hardlink.py
Create hard links through a single, OS-agnostic entry point.

create_hard_link(existing, new) never overwrites: if *new* already exists
the call fails and the existing file is left untouched.  The overlay
deployment relies on this to let the first source to claim a path win.

The backend is chosen once, at import time:
  nt     - kernel32.CreateHardLinkW
  other  - os.link()
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

log = logging.getLogger(__name__)


def _link_posix(existing: Path, new: Path) -> None:
    os.link(existing, new)


def _link_nt(existing: Path, new: Path) -> None:
    import ctypes

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    if not kernel32.CreateHardLinkW(str(new), str(existing), None):
        err = ctypes.get_last_error()
        raise OSError(0, ctypes.FormatError(err), str(new), err)


def _select_backend() -> Callable[[Path, Path], None]:
    return _link_nt if os.name == "nt" else _link_posix


_backend = _select_backend()


def create_hard_link(existing: Path, new: Path) -> bool:
    """Link *new* to *existing*.  Returns False (and logs why) on failure."""
    try:
        _backend(existing, new)
    except OSError as e:
        log.warning("Could not create hard link %s -> %s: %s", new, existing, e)
        return False
    return True


def _nearest_existing(path: Path) -> Path:
    path = path.absolute()
    while not path.exists() and path.parent != path:
        path = path.parent
    return path


def same_volume(a: Path, b: Path) -> bool:
    """True if *a* and *b* live on the same filesystem.

    Either path may not exist yet; its nearest existing ancestor is used.
    """
    return (_nearest_existing(a).stat().st_dev
            == _nearest_existing(b).stat().st_dev)
