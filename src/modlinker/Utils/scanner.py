"""
scanner.py
Report what currently exists on disk.  Never consults an order file.

scan_plugins() lists root-level plugin files one extension group at a time
(.esm, then .esp, then .esl), each group sorted alphabetically.  A plugin's
position in the scan is therefore decided by its extension first and its
name second.

scan_mods() lists the immediate subdirectories of the mods root, and
mod_folder() maps a mod name back to its folder whatever its casing.
"""

from __future__ import annotations

from pathlib import Path

PLUGIN_EXTENSIONS: tuple[str, ...] = (".esm", ".esp", ".esl")


def _alphabetical(name: str) -> tuple[str, str]:
    return name.casefold(), name


def scan_plugins(directory: Path) -> list[str]:
    """Return plugin filenames directly under *directory*.

    Returns [] when the directory does not exist.
    """
    if not directory.is_dir():
        return []
    files = [p.name for p in directory.iterdir() if p.is_file()]
    found: list[str] = []
    for ext in PLUGIN_EXTENSIONS:
        group = [name for name in files if name.lower().endswith(ext)]
        found.extend(sorted(group, key=_alphabetical))
    return found


def scan_mods(mods_root: Path) -> list[str]:
    """Return mod folder names under *mods_root*, creating it if absent."""
    mods_root.mkdir(parents=True, exist_ok=True)
    names = [p.name for p in mods_root.iterdir() if p.is_dir()]
    return sorted(names, key=_alphabetical)


def mod_folder(mods_root: Path, name: str) -> Path:
    """Return the folder under *mods_root* that holds mod *name*.

    Mod names match folders case-insensitively, but the name kept in
    mods.txt may not have the folder's casing.  On a case-sensitive
    filesystem the folder on disk is looked up; a name with no folder
    resolves to mods_root / name.
    """
    path = mods_root / name
    if path.is_dir() or not mods_root.is_dir():
        return path
    key = name.lower()
    for p in mods_root.iterdir():
        if p.is_dir() and p.name.lower() == key:
            return p
    return path
