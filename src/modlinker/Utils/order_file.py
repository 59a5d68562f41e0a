"""
order_file.py
Read and write a plain-text order file (mods.txt or plugins.txt).

Format (one entry per line):
  *Name   - active entry
  Name    - inactive entry (no prefix)

Order in the file is priority order: line 0 is the lowest priority.
A '*' cannot appear in a Windows filename, so a single leading '*' is the
only activity marker.  Nothing else on the line is interpreted.

There is no locking.  The last writer wins; callers serialise access.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from modlinker.Utils.collection import Entry

ACTIVE_MARKER = "*"


def parse_order_token(token: str) -> tuple[str, bool]:
    """Split a line into (name, is_active), stripping one leading '*'."""
    if token.startswith(ACTIVE_MARKER):
        return token[len(ACTIVE_MARKER):], True
    return token, False


def format_order_token(name: str, is_active: bool) -> str:
    return f"{ACTIVE_MARKER}{name}" if is_active else name


def read_order(path: Path) -> list[tuple[str, bool]]:
    """
    Parse the order file and return (name, is_active) pairs in file order.
    A missing file is not an error: an empty list is returned.  Bytes that
    are not UTF-8 decode to U+FFFD, so such names no longer match anything
    on disk and drop out on reconcile.
    """
    if not path.is_file():
        return []
    return [
        parse_order_token(line)
        for line in path.read_text(encoding="utf-8", errors="replace").splitlines()
    ]


def write_order(path: Path, entries: Iterable[Entry | tuple[str, bool]]) -> None:
    """
    Overwrite the order file with *entries*, creating it if needed.
    Entries may be Entry objects or (name, is_active) pairs.
    """
    lines = []
    for e in entries:
        if isinstance(e, Entry):
            lines.append(format_order_token(e.name, e.is_active))
        else:
            name, active = e
            lines.append(format_order_token(name, active))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines), encoding="utf-8")
