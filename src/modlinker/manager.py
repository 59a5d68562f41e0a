"""
manager.py
The reconciliation / deployment context for one game.

ModManager owns the mod and plugin collections.  Every operation that
rebuilds or mutates a collection runs under one lock, so readers never see
a collection half way through a rebuild.  Operations are synchronous and
block on filesystem work; a front end that needs to stay responsive runs
them on a worker thread and reports back through app_log().

Startup:
  manager = ModManager(SkyrimSE())
  manager.load()          # mods first, then plugins
"""

from __future__ import annotations

import subprocess
import threading
from pathlib import Path

from modlinker.Games.base_game import BaseGame
from modlinker.Utils.app_log import app_log
from modlinker.Utils.collection import ModEntry, OrderedCollection, PluginEntry
from modlinker.Utils.deploy import (
    DeployResult, check_same_volume, clear_target, deploy_overlay,
)
from modlinker.Utils.order_file import write_order
from modlinker.Utils.reconcile import reconcile_mods, reconcile_plugins
from modlinker.Utils.scanner import mod_folder, scan_plugins
from modlinker.Utils.unpack import install_archive


class ModManager:

    def __init__(self, game: BaseGame, log_fn=None):
        self.game = game
        self.mods: OrderedCollection[ModEntry] = OrderedCollection()
        self.plugins: OrderedCollection[PluginEntry] = OrderedCollection()
        self._lock = threading.RLock()
        self._log = log_fn or app_log

    # -----------------------------------------------------------------------
    # Reconciliation
    # -----------------------------------------------------------------------

    def load(self) -> None:
        """Reconcile mods, then plugins (plugins depend on which mods are active)."""
        self.game.require_configured()
        with self._lock:
            self.reload_mods()
            self.reload_plugins()

    def reload_mods(self) -> None:
        with self._lock:
            reconcile_mods(self.mods, self.game.get_mod_order_path(),
                           self.game.get_mods_path())

    def reload_plugins(self) -> None:
        self.game.require_configured()
        with self._lock:
            reconcile_plugins(
                self.plugins,
                self.game.get_plugin_order_path(),
                self.game.get_data_source_path(),
                self.game.get_mods_path(),
                [m.name for m in self.mods.active()],
                self.game.core_plugins,
            )

    def mod_plugins(self, mod_name: str) -> list[str]:
        """Plugin files shipped directly inside a mod's folder."""
        return scan_plugins(mod_folder(self.game.get_mods_path(), mod_name))

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def save_mods(self) -> None:
        with self._lock:
            write_order(self.game.get_mod_order_path(), self.mods)

    def save_plugins(self) -> None:
        self.game.require_configured()
        with self._lock:
            write_order(self.game.get_plugin_order_path(), self.plugins)

    def set_mod_active(self, name: str, active: bool) -> None:
        """Toggle a mod, persist mods.txt and refresh the plugin list."""
        with self._lock:
            self.mods.set_active(name, active)
            self.save_mods()
            self.reload_plugins()

    def set_plugin_active(self, name: str, active: bool) -> None:
        with self._lock:
            self.plugins.set_active(name, active)
            self.save_plugins()

    def move_mod(self, name: str, priority: int) -> int:
        with self._lock:
            new = self.mods.move(name, priority)
            self.save_mods()
            return new

    def move_plugin(self, name: str, priority: int) -> int:
        with self._lock:
            new = self.plugins.move(name, priority)
            self.save_plugins()
            return new

    # -----------------------------------------------------------------------
    # Install
    # -----------------------------------------------------------------------

    def install_mod(self, archive: Path, use_seven_zip: bool | None = None) -> Path:
        """Unpack an archive into the mods folder, then reconcile again."""
        mod_dir = install_archive(archive, self.game.get_mods_path(),
                                  use_seven_zip=use_seven_zip, log_fn=self._log)
        self.load()
        return mod_dir

    # -----------------------------------------------------------------------
    # Deployment
    # -----------------------------------------------------------------------

    def deploy_sources(self) -> list[Path]:
        """Active mod folders, highest priority first."""
        mods_root = self.game.get_mods_path()
        with self._lock:
            return [mod_folder(mods_root, m.name)
                    for m in reversed(self.mods.active())]

    def deploy(self) -> DeployResult:
        """Rebuild the overlay from scratch.

        Raises CrossVolumeError (before touching the old overlay) when the
        game or a mod folder is on a different filesystem from the overlay.
        """
        self.game.require_configured()
        base = self.game.get_game_path()
        target = self.game.get_target_path()

        with self._lock:
            sources = self.deploy_sources()
            check_same_volume([base, *sources], target)

            self._log(f"Clearing {target} ...")
            clear_target(target)
            result = deploy_overlay(base, sources, target,
                                    mod_subdir=self.game.data_folder,
                                    log_fn=self._log)
            self.game.remove_override_files(target, log_fn=self._log)
        if result.failed:
            self._log(f"WARN: {result.failed_count} file(s) could not be linked.")
        return result

    def run_game(self) -> subprocess.Popen:
        """Deploy, then launch the game from the overlay."""
        self.deploy()
        return self.game.launch(self.game.get_target_path())
