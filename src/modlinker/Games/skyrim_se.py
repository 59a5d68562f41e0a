"""
skyrim_se.py
Game handler for Skyrim Special Edition / Anniversary Edition.

Mod structure:
  Mods install into <overlay>/Data/
  Staged mods live in <manager_dir>/Mods/
"""

from modlinker.Games.base_game import BaseGame

_CORE_PLUGINS = frozenset({
    "skyrim.esm",
    "update.esm",
    "dawnguard.esm",
    "hearthfires.esm",
    "dragonborn.esm",
})


class SkyrimSE(BaseGame):

    @property
    def name(self) -> str:
        return "Skyrim Special Edition"

    @property
    def exe_name(self) -> str:
        return "SkyrimSE.exe"

    @property
    def core_plugins(self) -> frozenset[str]:
        return _CORE_PLUGINS

    @property
    def override_files(self) -> list[str]:
        # Skyrim.ccc lists Creation Club plugins and takes precedence over plugins.txt
        return ["Skyrim.ccc"]
