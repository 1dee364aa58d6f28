"""Coordinate systems: tiles, world (sub-tile) points and screen pixels."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

SCREEN_TILE_SIZE: tuple[int, int] = (4, 5)
"""Size of a tile on screen, in pixels."""

WORLD_SCALE: int = 16
"""World units per screen pixel."""

WORLD_TILE_SIZE: tuple[int, int] = (
    SCREEN_TILE_SIZE[0] * WORLD_SCALE,
    SCREEN_TILE_SIZE[1] * WORLD_SCALE,
)
"""Size of a tile in world units."""


class Direction(str, Enum):
    """Direction of travel on the grid."""

    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def delta(self) -> tuple[int, int]:
        """Tile offset (dx, dy) of one step; y grows downwards."""
        return _DIRECTION_DELTAS[self]


_DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class WorldPoint(BaseModel):
    """Sub-tile position, used for smooth movement between tiles."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int

    def to_tile(self) -> "TilePoint":
        """Tile containing this point.

        Floors toward negative infinity, so (-1, -1) is in tile (-1, -1).
        """
        return TilePoint(
            tx=self.x // WORLD_TILE_SIZE[0],
            ty=self.y // WORLD_TILE_SIZE[1],
        )

    def to_screen(self) -> tuple[int, int]:
        """Screen pixel coordinates (render-only)."""
        return int(self.x / WORLD_SCALE), int(self.y / WORLD_SCALE)

    def translate(self, dx: int, dy: int) -> "WorldPoint":
        """Point moved by the given deltas."""
        return WorldPoint(x=self.x + dx, y=self.y + dy)


class TilePoint(BaseModel):
    """Discrete grid coordinate: column `tx`, row `ty`."""

    model_config = ConfigDict(frozen=True)

    tx: int
    ty: int

    def to_world(self) -> WorldPoint:
        """World point at the top-left corner of this tile."""
        return WorldPoint(x=self.tx * WORLD_TILE_SIZE[0], y=self.ty * WORLD_TILE_SIZE[1])

    def translate(self, dx: int, dy: int) -> "TilePoint":
        """Tile moved by the given deltas."""
        return TilePoint(tx=self.tx + dx, ty=self.ty + dy)

    def step(self, direction: Direction) -> "TilePoint":
        """Neighbouring tile in the given direction."""
        dx, dy = direction.delta
        return self.translate(dx, dy)

    def manhattan_dist(self, other: "TilePoint") -> int:
        """Manhattan distance to another tile."""
        return abs(self.tx - other.tx) + abs(self.ty - other.ty)
