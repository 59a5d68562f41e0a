"""Game handlers, keyed by display name."""

from modlinker.Games.base_game import BaseGame
from modlinker.Games.skyrim_se import SkyrimSE

GAMES: dict[str, type[BaseGame]] = {
    "Skyrim Special Edition": SkyrimSE,
}

__all__ = ["BaseGame", "GAMES", "SkyrimSE"]
