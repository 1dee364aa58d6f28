"""Board definition: tiles, junctions and pellets."""

import logging
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel, field_serializer, field_validator

from pacman_sim.exceptions import InvalidTileCode, MalformedGrid
from .geometry import Direction, TilePoint

logger = logging.getLogger(__name__)


class Tile(str, Enum):
    """Tile type."""

    WALL = "WALL"
    PELLET = "PELLET"
    POWER_PELLET = "POWER_PELLET"
    EMPTY = "EMPTY"  # never had a pellet, or it was collected
    TELEPORT = "TELEPORT"
    HOUSE = "HOUSE"  # looks empty, but is not walkable

    @property
    def code(self) -> str:
        """Board character for this tile."""
        return _TILE_TO_CODE[self]

    @property
    def walkable(self) -> bool:
        """Whether mobs may stand on this tile."""
        return self not in (Tile.WALL, Tile.HOUSE)

    @property
    def collectable(self) -> bool:
        """Whether this tile still holds a pellet or power pellet."""
        return self in (Tile.PELLET, Tile.POWER_PELLET)


TILE_CODES: dict[str, Tile] = {
    "#": Tile.WALL,
    "=": Tile.PELLET,
    "p": Tile.POWER_PELLET,
    "e": Tile.EMPTY,
    "h": Tile.HOUSE,
    "t": Tile.TELEPORT,
}
"""Board text characters."""

_TILE_TO_CODE: dict[Tile, str] = {v: k for k, v in TILE_CODES.items()}


class Board(BaseModel):
    """Rectangular grid of tiles, rows first, then columns."""

    tiles: list[list[Tile]]
    width: int
    height: int
    junctions: frozenset[int] = frozenset()

    @field_validator("tiles", mode="before")
    @classmethod
    def _parse_rows(cls, v: Any) -> Any:
        """Accept rows given as text (as written by snapshots)."""
        if isinstance(v, list) and all(isinstance(row, str) for row in v):
            res: list[list[Tile]] = []
            for row in v:
                try:
                    res.append([TILE_CODES[c] for c in row])
                except KeyError as ke:
                    raise ValueError(f"Unknown tile code in row {row!r}") from ke
            return res
        return v

    @field_serializer("tiles", when_used="json")
    def _ser_rows(self, tiles: list[list[Tile]]) -> list[str]:
        """Write rows as text."""
        return ["".join(t.code for t in row) for row in tiles]

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Board":
        """Parse a board from rows of tile characters.

        Junctions are computed once, here.
        """
        tiles: list[list[Tile]] = []
        for row_i, line in enumerate(lines):
            row: list[Tile] = []
            for col_i, c in enumerate(line):
                try:
                    row.append(TILE_CODES[c])
                except KeyError:
                    raise InvalidTileCode(c, row_i, col_i) from None
            tiles.append(row)

        if len(tiles) == 0:
            raise MalformedGrid("Board has no rows.")
        width = len(tiles[0])
        if width == 0:
            raise MalformedGrid("Board has empty rows.")
        for row_i, row in enumerate(tiles):
            if len(row) != width:
                raise MalformedGrid(
                    f"Row {row_i} has length {len(row)}, expected {width}"
                )

        board = cls(tiles=tiles, width=width, height=len(tiles))
        board.junctions = board.compute_junctions()
        logger.debug(
            f"Parsed {board.width}x{board.height} board "
            f"with {len(board.junctions)} junctions"
        )
        return board

    def to_lines(self) -> list[str]:
        """Convert back to rows of tile characters."""
        return ["".join(t.code for t in row) for row in self.tiles]

    # Addressing

    def in_bounds(self, tile: TilePoint) -> bool:
        """Whether the tile lies on the board."""
        return 0 <= tile.tx < self.width and 0 <= tile.ty < self.height

    def tile_id(self, tile: TilePoint) -> int | None:
        """Linear id (row * width + col) of a tile, or None if off-board."""
        if not self.in_bounds(tile):
            return None
        return tile.ty * self.width + tile.tx

    def lookup_position(self, tile_id: int) -> TilePoint:
        """Tile for a linear id."""
        return TilePoint(tx=tile_id % self.width, ty=tile_id // self.width)

    def get_tile(self, tile: TilePoint) -> Tile:
        """Get the tile at some position.

        Off-board positions are treated as empty (thus walkable).
        """
        if not self.in_bounds(tile):
            return Tile.EMPTY
        return self.tiles[tile.ty][tile.tx]

    def can_move(self, position: TilePoint, direction: Direction) -> TilePoint | None:
        """Neighbouring tile in `direction`, if it is walkable."""
        tp = position.step(direction)
        if self.get_tile(tp).walkable:
            return tp
        return None

    # Junctions

    def is_corner(self, tx: int, ty: int) -> bool:
        """Whether the position is one of the four grid corners."""
        return (tx in (0, self.width - 1)) and (ty in (0, self.height - 1))

    def compute_junctions(self) -> frozenset[int]:
        """Compute junction ids from the current tiles.

        A walkable tile is a junction if it has more than two walkable
        neighbours, or if it is a grid corner.
        """
        res: set[int] = set()
        for y, row in enumerate(self.tiles):
            for x, cell in enumerate(row):
                if not cell.walkable:
                    continue
                neighbors = [(x + 1, y), (x, y + 1), (x - 1, y), (x, y - 1)]
                n_walkable = sum(
                    1
                    for nx, ny in neighbors
                    if self.get_tile(TilePoint(tx=nx, ty=ny)).walkable
                )
                if n_walkable > 2 or self.is_corner(x, y):
                    res.add(y * self.width + x)
        return frozenset(res)

    def is_junction(self, tile: TilePoint) -> bool:
        """Whether the tile is a junction."""
        return self.get_junction_id(tile) is not None

    def get_junction_id(self, tile: TilePoint) -> int | None:
        """Junction id of the tile, or None if it isn't a junction."""
        num = self.tile_id(tile)
        if num is not None and num in self.junctions:
            return num
        return None

    # Pellets

    def _collect(self, tile: TilePoint, kind: Tile) -> bool:
        """Empty the tile if it is of the given kind."""
        if self.get_tile(tile) != kind or not self.in_bounds(tile):
            return False
        self.tiles[tile.ty][tile.tx] = Tile.EMPTY
        return True

    def collect_pellet(self, tile: TilePoint) -> bool:
        """Collect a pellet. Returns True if the tile changed."""
        return self._collect(tile, Tile.PELLET)

    def collect_power_pellet(self, tile: TilePoint) -> bool:
        """Collect a power pellet. Returns True if the tile changed."""
        return self._collect(tile, Tile.POWER_PELLET)

    def num_collectable(self) -> int:
        """Number of tiles that still hold a pellet or power pellet."""
        return sum(1 for row in self.tiles for t in row if t.collectable)

    def board_complete(self) -> bool:
        """Whether every pellet and power pellet is collected."""
        for row in self.tiles:
            for tile in row:
                if tile.collectable:
                    return False
        return True
