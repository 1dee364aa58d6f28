"""Movement logic for mobs (player and enemies)."""

import logging
from random import Random
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from pacman_sim.board.geometry import Direction, TilePoint
from pacman_sim.board.tiles import Board

if TYPE_CHECKING:
    from .mob import Mob

logger = logging.getLogger(__name__)


class Input(BaseModel):
    """One sample of player controls."""

    model_config = ConfigDict(frozen=True)

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    button1: bool = False
    button2: bool = False

    @property
    def direction(self) -> Direction | None:
        """Requested direction; left, right, up, down take priority in that order."""
        if self.left:
            return Direction.LEFT
        elif self.right:
            return Direction.RIGHT
        elif self.up:
            return Direction.UP
        elif self.down:
            return Direction.DOWN
        return None

    @classmethod
    def from_direction(cls, direction: Direction | None) -> "Input":
        """Input holding a single direction (or nothing)."""
        if direction is None:
            return cls()
        return cls(**{direction.value.lower(): True})


RANDOM_WALK_ORDER: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)
"""Order in which directions are offered to the random choice."""


class PlayerAI(BaseModel):
    """Movement based on input commands."""

    kind: Literal["player"] = "player"

    def reset(self) -> None:
        """Nothing to reset."""

    def choose_next_tile(
        self,
        position: TilePoint,
        buttons: Input,
        board: Board,
        player: "Mob | None",
        rng: Random,
    ) -> TilePoint | None:
        """Tile the input points to, if it is walkable."""
        direction = buttons.direction
        if direction is None:
            return None
        target = position.step(direction)
        if board.get_tile(target).walkable:
            return target
        return None


class RandomWalkAI(BaseModel):
    """At every junction, choose a random legal direction.

    The enemy keeps its heading until it reaches the next junction, or is blocked.
    """

    kind: Literal["random_walk"] = "random_walk"
    start: TilePoint
    start_dir: Direction = Direction.UP
    dir: Direction = Direction.UP

    def reset(self) -> None:
        """Return to the starting heading."""
        self.dir = self.start_dir

    def choose_next_tile(
        self,
        position: TilePoint,
        buttons: Input,
        board: Board,
        player: "Mob | None",
        rng: Random,
    ) -> TilePoint | None:
        """Next tile along the heading, re-deciding at junctions and dead ends."""
        tp_default = board.can_move(position, self.dir)
        if board.is_junction(position) or tp_default is None:
            eligible: list[tuple[Direction, TilePoint]] = []
            for d in RANDOM_WALK_ORDER:
                tp = board.can_move(position, d)
                if tp is not None:
                    eligible.append((d, tp))
            if len(eligible) == 0:
                logger.debug(f"Enemy is boxed in at ({position.tx}, {position.ty})")
                return None
            d, tp = rng.choice(eligible)
            self.dir = d
            return tp
        return tp_default


MovementAI = Annotated[Union[PlayerAI, RandomWalkAI], Field(discriminator="kind")]
"""How a mob is controlled."""
