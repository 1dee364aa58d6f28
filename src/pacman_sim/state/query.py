"""Read-only queries over a game state."""

from typing import Any, Callable

from pydantic import ValidationError

from pacman_sim.board.geometry import TilePoint, WorldPoint
from pacman_sim.exceptions import BadArgument, NoSuchQuery
from pacman_sim.mobs.mob import Mob
from .game import GameState

XY = tuple[int, int]


def _get_enemy(state: GameState, index: Any) -> Mob:
    """Select an enemy by index."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise BadArgument(f"Enemy index must be an integer, got: {index!r}")
    if not (0 <= index < len(state.enemies)):
        raise BadArgument(
            f"No enemy with index {index}, there are {len(state.enemies)}"
        )
    return state.enemies[index]


def _xy(tp: TilePoint) -> XY:
    return (tp.tx, tp.ty)


def world_to_tile(state: GameState, point: WorldPoint | dict) -> XY:
    """Tile containing a world point."""
    try:
        wp = WorldPoint.model_validate(point)
    except ValidationError as ve:
        raise BadArgument(f"Not a world point: {point!r}") from ve
    return _xy(wp.to_tile())


def tile_to_world(state: GameState, point: TilePoint | dict) -> XY:
    """World point of a tile's corner."""
    try:
        tp = TilePoint.model_validate(point)
    except ValidationError as ve:
        raise BadArgument(f"Not a tile point: {point!r}") from ve
    wp = tp.to_world()
    return (wp.x, wp.y)


def num_uncollected(state: GameState) -> int:
    """Number of pellets and power pellets left on the board."""
    return state.board.num_collectable()


def vulnerable_mode(state: GameState) -> bool:
    """Whether the vulnerability window is open."""
    return state.vulnerable_mode


def num_enemies(state: GameState) -> int:
    """Number of enemies."""
    return len(state.enemies)


def enemy_tiles(state: GameState) -> list[XY]:
    """Tiles of all enemies."""
    return [_xy(e.tile) for e in state.enemies]


def enemy_tile(state: GameState, index: Any) -> XY:
    """Tile of one enemy."""
    return _xy(_get_enemy(state, index).tile)


def enemy_vulnerable(state: GameState, index: Any) -> bool:
    """Whether one enemy can be caught."""
    return _get_enemy(state, index).vulnerable


def enemy_immobilized(state: GameState, index: Any) -> bool:
    """Whether one enemy is frozen."""
    return _get_enemy(state, index).immobilized_timer > 0


def player_tile(state: GameState) -> XY:
    """Tile of the player."""
    return _xy(state.player.tile)


_NO_ARG: dict[str, Callable[[GameState], Any]] = {
    "num_uncollected": num_uncollected,
    "vulnerable_mode": vulnerable_mode,
    "num_enemies": num_enemies,
    "enemy_tiles": enemy_tiles,
    "player_tile": player_tile,
    "score": lambda s: s.score,
    "lives": lambda s: s.lives,
    "level": lambda s: s.level,
}
_WITH_ARG: dict[str, Callable[[GameState, Any], Any]] = {
    "world_to_tile": world_to_tile,
    "tile_to_world": tile_to_world,
    "enemy_tile": enemy_tile,
    "enemy_vulnerable": enemy_vulnerable,
    "enemy_immobilized": enemy_immobilized,
}

QUERY_NAMES: list[str] = sorted(list(_NO_ARG) + list(_WITH_ARG))


def run_query(state: GameState, name: str, arg: Any = None) -> Any:
    """Run a query by name."""
    if name in _NO_ARG:
        return _NO_ARG[name](state)
    if name in _WITH_ARG:
        return _WITH_ARG[name](state, arg)
    raise NoSuchQuery(name)
