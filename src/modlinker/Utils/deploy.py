"""
deploy.py
Build a composed game directory out of hard links.

Hard links never overwrite an existing destination, so the order in which
sources are linked *is* the conflict policy: the first source to place a
file at a relative path keeps it, and later sources only fill gaps.

Typical deploy workflow:
  1. clear_target(target)                      - drop the previous overlay
  2. deploy_overlay(base, mods, target, ...)   - mods first (highest priority
                                                 first), then the base game

Skipping step 1 leaves stale links from the last deploy in place, and they
silently win over the new composition.
"""

from __future__ import annotations

import logging
import shutil
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from modlinker.Utils.hardlink import create_hard_link, same_volume

log = logging.getLogger(__name__)


class CrossVolumeError(RuntimeError):
    """A source and the deploy target are on different filesystems."""


@dataclass
class DeployResult:
    linked: int = 0
    failed: list[Path] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def add(self, linked: int, failed: list[Path]) -> None:
        self.linked += linked
        self.failed.extend(failed)


def clear_target(target: Path) -> None:
    """Delete a previously deployed overlay, if any."""
    if target.exists():
        shutil.rmtree(target)


def link_tree(source: Path, target: Path, log_fn=None) -> tuple[int, list[Path]]:
    """Hard-link every file under *source* to the same relative path in *target*.

    Walks breadth-first.  A file whose destination already exists (or that
    fails for any other OS reason) is logged and skipped; the walk goes on.

    Returns (linked, failed) where failed holds the destinations not placed.
    """
    _log = log_fn or (lambda _: None)
    linked = 0
    failed: list[Path] = []

    if not source.is_dir():
        _log(f"  WARN: source not found - {source}")
        return linked, failed

    # target may sit inside source, and directory symlinks may loop back;
    # each real directory is walked at most once and target never
    visited = {source.resolve(), target.resolve()}
    pending: deque[Path] = deque([source])
    while pending:
        directory = pending.popleft()
        subdirs: list[Path] = []
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                real = entry.resolve()
                if real not in visited:
                    visited.add(real)
                    subdirs.append(entry)
                continue
            rel = entry.relative_to(source)
            dst = target / rel
            dst.parent.mkdir(parents=True, exist_ok=True)
            if create_hard_link(entry, dst):
                linked += 1
            else:
                failed.append(dst)
                _log(f"  WARN: could not link {rel}")
        pending.extend(subdirs)

    return linked, failed


def check_same_volume(sources: Sequence[Path], target: Path) -> None:
    """Raise CrossVolumeError unless every source can be hard-linked into target."""
    for src in sources:
        if not same_volume(src, target):
            raise CrossVolumeError(
                f"{src} and {target} are on different volumes; "
                "hard links cannot cross filesystems."
            )


def deploy_overlay(
    base_source: Path,
    mod_sources: Sequence[Path],
    target: Path,
    mod_subdir: str = "",
    log_fn=None,
) -> DeployResult:
    """Link *mod_sources* (in the order given) and then *base_source* into *target*.

    base_source - the vanilla game directory, linked last to fill the gaps
    mod_sources - mod folders, highest priority first
    target      - destination directory; should not exist (see clear_target)
    mod_subdir  - subfolder of target that mod files install into
                  (e.g. "Data" for Bethesda games); "" for the target root

    Raises CrossVolumeError before anything is created when a source is on
    a different filesystem from the target.
    """
    _log = log_fn or (lambda _: None)

    check_same_volume([base_source, *mod_sources], target)

    result = DeployResult()
    mod_target = target / mod_subdir if mod_subdir else target

    for src in mod_sources:
        _log(f"Linking {src.name} ...")
        result.add(*link_tree(src, mod_target, log_fn=_log))

    _log(f"Linking base game from {base_source} ...")
    result.add(*link_tree(base_source, target, log_fn=_log))

    if result.failed:
        log.warning("%d file(s) could not be linked into %s",
                    result.failed_count, target)
    _log(f"Deploy complete: {result.linked} linked, {result.failed_count} skipped.")
    return result
