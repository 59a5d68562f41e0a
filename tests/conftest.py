"""Shared fixtures: a fake game install, a manager directory and a configured handler."""

from pathlib import Path

import pytest

from modlinker.Games.skyrim_se import SkyrimSE
from modlinker.manager import ModManager
from modlinker.Utils.app_log import set_app_log


def write_files(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def _no_app_log():
    set_app_log(None)
    yield
    set_app_log(None)


@pytest.fixture
def game_dir(tmp_path):
    root = tmp_path / "Skyrim"
    write_files(root, {
        "SkyrimSE.exe": "exe",
        "Skyrim.ccc": "ccc",
        "Data/Skyrim.esm": "vanilla",
        "Data/Update.esm": "vanilla",
        "Data/Unofficial Patch.esp": "vanilla",
        "Data/textures/a.dds": "base texture",
    })
    return root


@pytest.fixture
def skyrim(tmp_path, game_dir):
    game = SkyrimSE(paths_file=tmp_path / "config" / "paths.json")
    game.set_game_path(game_dir)
    game.set_plugin_order_path(tmp_path / "AppData" / "plugins.txt")
    game.set_manager_dir(tmp_path / "manager")
    return game


@pytest.fixture
def manager(skyrim):
    return ModManager(skyrim, log_fn=lambda _: None)


def add_mod(game, name: str, files: dict[str, str]) -> Path:
    mod_dir = game.get_mods_path() / name
    mod_dir.mkdir(parents=True, exist_ok=True)
    write_files(mod_dir, files)
    return mod_dir
