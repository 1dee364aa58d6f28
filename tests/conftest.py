"""Shared fixtures: small hand-made boards and configs."""

from typing import Callable

import pytest

from pacman_sim.board.geometry import Direction, TilePoint
from pacman_sim.data.models import GameConfig
from pacman_sim.mobs.ai import Input, RandomWalkAI
from pacman_sim.state.game import GameState

# A loop with two junctions (3,1) and (3,3), and a sealed pocket at (7,1)
LOOP_BOARD = [
    "#########",
    "#=eeep#e#",
    "#e#e#e###",
    "#eeee=###",
    "#########",
]

# A straight corridor, with a power pellet at (2,1) and a sealed pocket at (7,1)
CORRIDOR_BOARD = [
    "#########",
    "#ep===#e#",
    "#########",
]

# A corridor with teleports at both ends, and a sealed pellet at (1,3)
# so the level never completes
TELEPORT_BOARD = [
    "#######",
    "teeeeet",
    "#######",
    "#=#####",
    "#######",
]

POCKET = TilePoint(tx=7, ty=1)


def enemy_at(tx: int, ty: int, direction: Direction = Direction.LEFT) -> RandomWalkAI:
    """Random-walk enemy starting at the given tile."""
    return RandomWalkAI(start=TilePoint(tx=tx, ty=ty), start_dir=direction, dir=direction)


def make_config(
    board: list[str], player_start: tuple[int, int], **kwargs
) -> GameConfig:
    """Config for a test board."""
    tx, ty = player_start
    return GameConfig(board=board, player_start=TilePoint(tx=tx, ty=ty), **kwargs)


def tick_until(
    state: GameState,
    buttons: Input,
    done: Callable[[GameState], bool],
    limit: int = 500,
) -> int:
    """Update with fixed input until `done`; returns ticks taken."""
    for i in range(limit):
        state.update(buttons)
        if done(state):
            return i + 1
    raise AssertionError(f"Condition not reached within {limit} ticks")


@pytest.fixture
def loop_config() -> GameConfig:
    """Loop board, player at (2,1) and one enemy sealed in its pocket."""
    return make_config(
        LOOP_BOARD,
        (2, 1),
        enemies=[enemy_at(POCKET.tx, POCKET.ty)],
        vulnerable_time=300,
    )


@pytest.fixture
def corridor_config() -> GameConfig:
    """Corridor board, player starting on the power pellet, enemy sealed away."""
    return make_config(
        CORRIDOR_BOARD,
        (2, 1),
        enemies=[enemy_at(POCKET.tx, POCKET.ty)],
        vulnerable_time=3,
    )
