"""
unpack.py
Extract a mod archive into its own folder under the mods root.

The 7-Zip command-line tool is preferred when it is on PATH
(7z on Windows and most distros, 7zz / 7zzs for the upstream Linux builds).
Without it, the archive is opened in-process:
  .zip          - zipfile
  .7z           - py7zr
  .rar          - rarfile (needs an unrar backend of its own)
  .tar, .tar.*  - tarfile

The caller re-runs reconciliation once this returns; the new folder is
picked up as an inactive mod at the end of the mod order.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tarfile
import zipfile
from pathlib import Path

import py7zr
import rarfile

log = logging.getLogger(__name__)

_SEVEN_ZIP_NAMES = ("7z", "7zz", "7zzs")
_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tar.xz")


class ExternalProcessError(RuntimeError):
    """An external tool (archiver or game) failed or is not available."""


def find_seven_zip() -> str | None:
    """Return the path of the first 7-Zip executable on PATH, or None."""
    for name in _SEVEN_ZIP_NAMES:
        found = shutil.which(name)
        if found:
            return found
    return None


def mod_name_for_archive(archive: Path) -> str:
    """Folder name for an archive: its filename without the archive extension(s)."""
    name = archive.name
    lower = name.lower()
    for suffix in _TAR_SUFFIXES:
        if lower.endswith(suffix):
            return name[: -len(suffix)]
    return archive.stem


def _extract_with_seven_zip(tool: str, archive: Path, dest: Path) -> None:
    try:
        proc = subprocess.run(
            [tool, "x", str(archive), f"-o{dest}", "-y"],
            capture_output=True, text=True,
        )
    except OSError as e:
        raise ExternalProcessError(f"Could not start {tool}: {e}") from e
    if proc.returncode != 0:
        raise ExternalProcessError(
            f"{Path(tool).name} exited with code {proc.returncode} "
            f"extracting {archive.name}: {proc.stderr.strip()}"
        )


def _extract_in_process(archive: Path, dest: Path) -> None:
    lower = archive.name.lower()
    try:
        if lower.endswith(".zip"):
            with zipfile.ZipFile(archive, "r") as zf:
                zf.extractall(dest)
        elif lower.endswith(".7z"):
            with py7zr.SevenZipFile(archive, "r") as zf:
                zf.extractall(dest)
        elif lower.endswith(".rar"):
            with rarfile.RarFile(archive, "r") as rf:
                rf.extractall(dest)
        elif lower.endswith(_TAR_SUFFIXES):
            with tarfile.open(archive, "r:*") as tf:
                tf.extractall(dest, filter="data")
        else:
            raise ExternalProcessError(f"Unsupported archive format: {archive.name}")
    except (OSError, zipfile.BadZipFile, tarfile.TarError,
            py7zr.Bad7zFile, rarfile.Error) as e:
        raise ExternalProcessError(f"Could not extract {archive.name}: {e}") from e


def extract_archive(archive: Path, dest: Path, use_seven_zip: bool | None = None) -> None:
    """Extract *archive* into *dest*.

    use_seven_zip - True forces the 7-Zip binary, False forces in-process
                    extraction, None uses 7-Zip when it is installed.
    Raises ExternalProcessError on any failure.
    """
    tool = find_seven_zip() if use_seven_zip is not False else None
    if use_seven_zip and tool is None:
        raise ExternalProcessError("7-Zip was not found on PATH.")
    dest.mkdir(parents=True, exist_ok=True)
    if tool is not None:
        _extract_with_seven_zip(tool, archive, dest)
    else:
        _extract_in_process(archive, dest)


def install_archive(
    archive: Path,
    mods_root: Path,
    use_seven_zip: bool | None = None,
    log_fn=None,
) -> Path:
    """Unpack *archive* into <mods_root>/<archive name>/ and return that folder.

    Files already in the folder are overwritten.  If extraction fails and the
    folder did not exist beforehand, it is removed again.
    """
    _log = log_fn or (lambda _: None)
    if not archive.is_file():
        raise FileNotFoundError(f"Archive not found: {archive}")

    mod_dir = mods_root / mod_name_for_archive(archive)
    created = not mod_dir.exists()
    _log(f"Extracting {archive.name} -> {mod_dir.name}/ ...")
    try:
        extract_archive(archive, mod_dir, use_seven_zip=use_seven_zip)
    except ExternalProcessError:
        if created:
            shutil.rmtree(mod_dir, ignore_errors=True)
        raise
    log.info("Installed %s into %s", archive.name, mod_dir)
    return mod_dir
