"""
Command-line front end:
  python -m modlinker setup --game-path "D:/Games/Skyrim" --plugin-order-file plugins.txt
  python -m modlinker list                   # show mod and plugin order
  python -m modlinker enable "SkyUI"         # activate a mod
  python -m modlinker move "SkyUI" 0         # move a mod to priority 0
  python -m modlinker install SkyUI.7z       # unpack into Mods/
  python -m modlinker deploy                 # rebuild the Game/ overlay
  python -m modlinker run                    # deploy and launch the game
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from modlinker.Games import GAMES
from modlinker.manager import ModManager
from modlinker.Utils.app_log import set_app_log
from modlinker.Utils.deploy import CrossVolumeError
from modlinker.Utils.unpack import ExternalProcessError


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="modlinker",
        description="Manage mod and plugin order and deploy mods through hard links.",
    )
    ap.add_argument("--game", default="Skyrim Special Edition", choices=sorted(GAMES),
                    help="Game to manage")
    ap.add_argument("--paths-file", type=Path,
                    help="Use this paths.json instead of the one in the config directory")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    setup = sub.add_parser("setup", help="Set the game, plugin order and manager paths")
    setup.add_argument("--game-path", type=Path)
    setup.add_argument("--plugin-order-file", type=Path)
    setup.add_argument("--manager-dir", type=Path)

    sub.add_parser("list", help="Show the reconciled mod and plugin order")

    for cmd, what in (("enable", "mod"), ("disable", "mod"),
                      ("enable-plugin", "plugin"), ("disable-plugin", "plugin")):
        p = sub.add_parser(cmd, help=f"{cmd.split('-')[0].capitalize()} a {what}")
        p.add_argument("name")

    for cmd, what in (("move", "mod"), ("move-plugin", "plugin")):
        p = sub.add_parser(cmd, help=f"Move a {what} to a new priority")
        p.add_argument("name")
        p.add_argument("priority", type=int)

    install = sub.add_parser("install", help="Unpack a mod archive into the mods folder")
    install.add_argument("archive", type=Path)

    sub.add_parser("deploy", help="Rebuild the hard-link overlay")
    sub.add_parser("run", help="Deploy, then launch the game")
    return ap


def _print_order(manager: ModManager) -> None:
    print(f"Mods ({len(manager.mods)}):")
    for idx, m in enumerate(manager.mods):
        print(f"  {idx:>4}  [{'x' if m.is_active else ' '}] {m.name}")
    print(f"Plugins ({len(manager.plugins)}):")
    for idx, p in enumerate(manager.plugins):
        print(f"  {idx:>4}  [{'x' if p.is_active else ' '}] {p.name}")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    set_app_log(print)

    game = GAMES[args.game](args.paths_file)

    if args.command == "setup":
        if args.game_path is not None:
            game.set_game_path(args.game_path.resolve())
        if args.plugin_order_file is not None:
            game.set_plugin_order_path(args.plugin_order_file.resolve())
        if args.manager_dir is not None:
            game.set_manager_dir(args.manager_dir.resolve())
        print(f"Game path:         {game.get_game_path() or '(not set)'}")
        print(f"Plugin order file: {game.get_plugin_order_path() or '(not set)'}")
        print(f"Manager directory: {game.get_manager_dir()}")
        return 0

    manager = ModManager(game)
    try:
        manager.load()
        if args.command in ("enable", "disable"):
            manager.set_mod_active(args.name, args.command == "enable")
        elif args.command in ("enable-plugin", "disable-plugin"):
            manager.set_plugin_active(args.name, args.command == "enable-plugin")
        elif args.command == "move":
            manager.move_mod(args.name, args.priority)
        elif args.command == "move-plugin":
            manager.move_plugin(args.name, args.priority)
        elif args.command == "install":
            mod_dir = manager.install_mod(args.archive.resolve())
            print(f"Installed {mod_dir.name}")
        elif args.command == "deploy":
            manager.deploy()
        elif args.command == "run":
            manager.run_game()
            return 0
        if args.command in ("list", "enable", "disable", "enable-plugin",
                            "disable-plugin", "move", "move-plugin"):
            _print_order(manager)
    except KeyError as e:
        print(f"Error: no such entry: {e.args[0]}", file=sys.stderr)
        return 1
    except (CrossVolumeError, ExternalProcessError, FileNotFoundError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
