"""
base_game.py
Abstract base class that all game handlers must subclass.

A handler knows the game's identity (name, executable, core plugins) and
owns its paths.json, the small config document the user fills in once:
  game_path          - the vanilla game install (linked last on deploy)
  plugin_order_file  - the plugins.txt the game reads
  manager_dir        - where Mods/, mods.txt and the Game/ overlay live
                       (defaults to the current working directory)
"""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from modlinker.Utils.config_paths import get_game_config_path
from modlinker.Utils.unpack import ExternalProcessError

log = logging.getLogger(__name__)


class BaseGame(ABC):

    def __init__(self, paths_file: Path | None = None):
        self._paths_file = paths_file or get_game_config_path(self.name)
        self._game_path: Path | None = None
        self._plugin_order_file: Path | None = None
        self._manager_dir: Path | None = None
        self.load_paths()

    # -----------------------------------------------------------------------
    # Identity
    # -----------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable display name, e.g. 'Skyrim Special Edition'."""

    @property
    @abstractmethod
    def exe_name(self) -> str:
        """Executable launched from the deployed overlay, e.g. 'SkyrimSE.exe'."""

    @property
    def core_plugins(self) -> frozenset[str]:
        """
        Lowercase plugin names the game always loads by itself.  They never
        appear in the managed plugin list.
        """
        return frozenset()

    @property
    def data_folder(self) -> str:
        """Subfolder of the install that mods and plugins live in."""
        return "Data"

    @property
    def override_files(self) -> list[str]:
        """Files removed from the overlay after deploy because they would
        override the managed load order."""
        return []

    # -----------------------------------------------------------------------
    # Paths
    # -----------------------------------------------------------------------

    def get_game_path(self) -> Path | None:
        return self._game_path

    def get_plugin_order_path(self) -> Path | None:
        return self._plugin_order_file

    def get_manager_dir(self) -> Path:
        return self._manager_dir or Path.cwd()

    def get_data_source_path(self) -> Path | None:
        """The vanilla Data/ folder scanned for base-game plugins."""
        if self._game_path is None:
            return None
        return self._game_path / self.data_folder

    def get_mods_path(self) -> Path:
        return self.get_manager_dir() / "Mods"

    def get_mod_order_path(self) -> Path:
        return self.get_manager_dir() / "mods.txt"

    def get_target_path(self) -> Path:
        """Where the hard-link overlay is built and the game is launched from."""
        return self.get_manager_dir() / "Game"

    def require_configured(self) -> None:
        """Raise RuntimeError unless the paths reconciliation needs are set."""
        if self._game_path is None:
            raise RuntimeError("Game path is not configured.")
        if self._plugin_order_file is None:
            raise RuntimeError("Plugin order file is not configured.")

    # -----------------------------------------------------------------------
    # Configuration persistence
    # -----------------------------------------------------------------------

    def load_paths(self) -> bool:
        """Load paths.json.  Returns True when the handler is fully configured."""
        self._game_path = None
        self._plugin_order_file = None
        self._manager_dir = None
        if not self._paths_file.is_file():
            return False
        try:
            data = json.loads(self._paths_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Ignoring unreadable %s: %s", self._paths_file, e)
            return False
        if not isinstance(data, dict):
            return False
        raw = data.get("game_path", "")
        if raw:
            self._game_path = Path(raw)
        raw_order = data.get("plugin_order_file", "")
        if raw_order:
            self._plugin_order_file = Path(raw_order)
        raw_mgr = data.get("manager_dir", "")
        if raw_mgr:
            self._manager_dir = Path(raw_mgr)
        return self._game_path is not None and self._plugin_order_file is not None

    def save_paths(self) -> None:
        self._paths_file.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "game_path":         str(self._game_path)         if self._game_path         else "",
            "plugin_order_file": str(self._plugin_order_file) if self._plugin_order_file else "",
            "manager_dir":       str(self._manager_dir)       if self._manager_dir       else "",
        }
        self._paths_file.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def set_game_path(self, path: Path | str | None) -> None:
        self._game_path = Path(path) if path else None
        self.save_paths()

    def set_plugin_order_path(self, path: Path | str | None) -> None:
        self._plugin_order_file = Path(path) if path else None
        self.save_paths()

    def set_manager_dir(self, path: Path | str | None) -> None:
        self._manager_dir = Path(path) if path else None
        self.save_paths()

    # -----------------------------------------------------------------------
    # Launch
    # -----------------------------------------------------------------------

    def remove_override_files(self, target: Path, log_fn=None) -> int:
        """Delete override_files from a deployed overlay.  Returns how many were removed."""
        _log = log_fn or (lambda _: None)
        removed = 0
        for name in self.override_files:
            path = target / name
            if path.is_file():
                path.unlink()
                removed += 1
                _log(f"  Removed {name} (overrides the plugin order).")
        return removed

    def launch(self, target: Path) -> subprocess.Popen:
        """Start the game from the deployed overlay with *target* as working directory."""
        exe = target / self.exe_name
        if not exe.is_file():
            raise ExternalProcessError(f"{self.exe_name} not found in {target}")
        try:
            return subprocess.Popen([str(exe)], cwd=str(target))
        except OSError as e:
            raise ExternalProcessError(f"Could not start {self.exe_name}: {e}") from e
