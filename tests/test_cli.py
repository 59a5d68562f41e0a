from modlinker.__main__ import main

from conftest import write_files


def _setup(tmp_path, game_dir):
    paths = tmp_path / "paths.json"
    rc = main([
        "--paths-file", str(paths), "setup",
        "--game-path", str(game_dir),
        "--plugin-order-file", str(tmp_path / "plugins.txt"),
        "--manager-dir", str(tmp_path / "mgr"),
    ])
    assert rc == 0
    return paths


def test_setup_and_list(tmp_path, game_dir, capsys):
    paths = _setup(tmp_path, game_dir)
    write_files(tmp_path / "mgr" / "Mods", {"SkyUI/SkyUI_SE.esp": ""})

    assert main(["--paths-file", str(paths), "enable", "SkyUI"]) == 0
    out = capsys.readouterr().out
    assert "[x] SkyUI" in out
    assert "[ ] SkyUI_SE.esp" in out
    assert (tmp_path / "mgr" / "mods.txt").read_text(encoding="utf-8") == "*SkyUI"


def test_unknown_entry(tmp_path, game_dir, capsys):
    paths = _setup(tmp_path, game_dir)
    assert main(["--paths-file", str(paths), "enable", "Nothing"]) == 1
    assert "no such entry" in capsys.readouterr().err


def test_unconfigured(tmp_path, capsys):
    assert main(["--paths-file", str(tmp_path / "paths.json"), "list"]) == 1
    assert "not configured" in capsys.readouterr().err


def test_deploy(tmp_path, game_dir):
    paths = _setup(tmp_path, game_dir)
    assert main(["--paths-file", str(paths), "deploy"]) == 0
    assert (tmp_path / "mgr" / "Game" / "Data" / "Skyrim.esm").is_file()
