"""Rendering a game state to an image.

Read-only: nothing here feeds back into the simulation.
"""

from typing import TYPE_CHECKING

from PIL.Image import Image
from PIL.Image import new as img_new
from PIL.ImageDraw import Draw
from PIL.ImageFont import load_default

from .geometry import SCREEN_TILE_SIZE
from .tiles import Tile

if TYPE_CHECKING:
    from pacman_sim.data.models import Palette
    from pacman_sim.state.game import GameState

GAME_SIZE: tuple[int, int] = (250, 250)
BOARD_OFFSET: tuple[int, int] = (15, 15)
MOB_SIZE: tuple[int, int] = (7, 7)

LIVES_POS: tuple[int, int] = (148, 198)
LIVES_X_STEP: int = 16
LIVES_SIZE: tuple[int, int] = (2, 9)
SCORE_POS: tuple[int, int] = (LIVES_POS[0] - LIVES_X_STEP * 3 - 48, 197)

BBoxInt = tuple[int, int, int, int]
"""Bounding box: (left, upper, right, lower)."""


def _rect(x: int, y: int, w: int, h: int) -> BBoxInt:
    """Bounding box of a w*h rectangle at (x, y), inclusive of its edges."""
    return (x, y, x + w - 1, y + h - 1)


def tile_color(tile: Tile, palette: "Palette") -> tuple[int, int, int]:
    """Color a tile is drawn with."""
    match tile:
        case Tile.PELLET:
            return palette.pellet_color
        case Tile.POWER_PELLET:
            return palette.power_pellet_color
        case Tile.WALL:
            return palette.fg_color
        case Tile.TELEPORT:
            return palette.teleport_color
        case Tile.EMPTY | Tile.HOUSE:
            return palette.bg_color
        case _:
            raise ValueError(f"Unknown tile: {tile!r}")


def render_state(state: "GameState") -> Image:
    """Draw the board, mobs, score and lives."""
    palette = state.config.palette
    img = img_new(mode="RGB", size=GAME_SIZE, color=palette.bg_color)
    if state.lives < 0:
        return img  # game over: blank screen
    d = Draw(img)

    tile_w, tile_h = SCREEN_TILE_SIZE
    offset_x, offset_y = BOARD_OFFSET
    for ty, row in enumerate(state.board.tiles):
        for tx, tile in enumerate(row):
            d.rectangle(
                _rect(offset_x + tx * tile_w, offset_y + ty * tile_h, tile_w, tile_h),
                fill=tile_color(tile, palette),
            )

    # Mobs are drawn one pixel up and left of their position
    px, py = state.player.position.to_screen()
    d.rectangle(
        _rect(offset_x + px - 1, offset_y + py - 1, *MOB_SIZE),
        fill=palette.player_color,
    )
    for enemy in state.enemies:
        ex, ey = enemy.position.to_screen()
        color = palette.vulnerable_color if enemy.vulnerable else palette.enemy_color
        d.rectangle(_rect(offset_x + ex - 1, offset_y + ey - 1, *MOB_SIZE), fill=color)

    d.text(SCORE_POS, str(state.score), fill=palette.fg_color, font=load_default())
    for i in range(state.lives):
        d.rectangle(
            _rect(LIVES_POS[0] - i * LIVES_X_STEP, LIVES_POS[1], *LIVES_SIZE),
            fill=palette.player_color,
        )
    return img
