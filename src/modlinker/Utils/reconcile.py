"""
reconcile.py
Merge a persisted order file with what is actually on disk.

The same algorithm serves mods and plugins:
  1. Load the order file (a missing file is an empty list).
  2. Scan the filesystem for the names that really exist.
  3. Candidates = order-file entries followed by scanned names, so entries
     already in the file keep their priority and new items land at the end.
  4. Drop candidates that no longer exist on disk.
  5. Drop case-insensitive duplicates, keeping the first occurrence.
  6. (Plugins only) drop reserved core plugins the game manages itself.
  7. Rebuild the collection and write the corrected order file back.

None of the dropped entries are errors; the rewritten file simply reflects
reality on every load.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from modlinker.Utils.collection import ModEntry, OrderedCollection, PluginEntry
from modlinker.Utils.order_file import read_order, write_order
from modlinker.Utils.scanner import mod_folder, scan_mods, scan_plugins

log = logging.getLogger(__name__)


def merge_order(
    persisted: Iterable[tuple[str, bool]],
    existing: Sequence[str],
    reserved: Iterable[str] = (),
) -> list[tuple[str, bool]]:
    """Return the reconciled (name, is_active) list.

    persisted - entries from the order file, in file order
    existing  - names found on disk, in scan order; scanned names are
                inactive unless the order file says otherwise
    reserved  - names that must never appear in the result
    """
    existing_lower = {name.lower() for name in existing}
    reserved_lower = {name.lower() for name in reserved}

    candidates = list(persisted) + [(name, False) for name in existing]

    merged: list[tuple[str, bool]] = []
    seen: set[str] = set()
    for name, active in candidates:
        key = name.lower()
        if not name or key not in existing_lower:
            log.debug("Dropping stale entry %r", name)
            continue
        if key in seen:
            continue
        seen.add(key)
        if key in reserved_lower:
            log.debug("Excluding reserved plugin %r", name)
            continue
        merged.append((name, active))
    return merged


# ---------------------------------------------------------------------------
# Mods
# ---------------------------------------------------------------------------

def reconcile_mods(
    mods: OrderedCollection[ModEntry],
    order_path: Path,
    mods_root: Path,
) -> OrderedCollection[ModEntry]:
    """Rebuild *mods* from mods.txt and the folders under *mods_root*."""
    merged = merge_order(read_order(order_path), scan_mods(mods_root))
    mods.replace(ModEntry(name, active) for name, active in merged)
    write_order(order_path, mods)
    log.debug("Reconciled %d mod(s) from %s", len(mods), order_path)
    return mods


# ---------------------------------------------------------------------------
# Plugins
# ---------------------------------------------------------------------------

def existing_plugins(
    data_dir: Path,
    mods_root: Path,
    active_mods: Iterable[str],
) -> list[str]:
    """Plugins in the base game's data folder followed by those of each active mod."""
    found = scan_plugins(data_dir)
    for mod_name in active_mods:
        found.extend(scan_plugins(mod_folder(mods_root, mod_name)))
    return found


def reconcile_plugins(
    plugins: OrderedCollection[PluginEntry],
    order_path: Path,
    data_dir: Path,
    mods_root: Path,
    active_mods: Iterable[str],
    reserved: Iterable[str] = (),
) -> OrderedCollection[PluginEntry]:
    """Rebuild *plugins* from plugins.txt, the base data folder and active mods.

    Run reconcile_mods() first: which plugins exist depends on which mods
    are active.
    """
    existing = existing_plugins(data_dir, mods_root, active_mods)
    merged = merge_order(read_order(order_path), existing, reserved)
    plugins.replace(PluginEntry(name, active) for name, active in merged)
    write_order(order_path, plugins)
    log.debug("Reconciled %d plugin(s) from %s", len(plugins), order_path)
    return plugins
