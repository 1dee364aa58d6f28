"""Mobs: the player and the enemies share the same movement machinery.

"Mob" is videogame slang for a mobile unit.
"""

from collections import deque
from random import Random

from pydantic import BaseModel, Field

from pacman_sim.board.geometry import TilePoint, WorldPoint
from pacman_sim.board.tiles import Board
from .ai import Input, MovementAI, PlayerAI


class BoardUpdate(BaseModel):
    """Changes to the board caused by the player in a single update."""

    pellets_collected: int = 0
    power_pellets_collected: int = 0

    def happened(self) -> bool:
        """Whether anything was collected."""
        return self.pellets_collected != 0 or self.power_pellets_collected != 0


class Mob(BaseModel):
    """A player or enemy unit."""

    ai: MovementAI
    position: WorldPoint
    speed: int
    step: TilePoint | None = None
    history: deque[int] = Field(default_factory=deque)  # junction ids, most recent first
    vulnerable: bool = False
    immobilized_timer: int = 0  # not relevant for the player
    teleported: bool = False  # still standing on the tile a teleport sent us to

    @classmethod
    def new_player(cls, position: TilePoint, speed: int) -> "Mob":
        """Create a player-controlled mob."""
        return cls(ai=PlayerAI(), position=position.to_world(), speed=speed)

    @property
    def is_player(self) -> bool:
        """Whether this mob is controlled by input."""
        return isinstance(self.ai, PlayerAI)

    @property
    def tile(self) -> TilePoint:
        """Tile currently occupied."""
        return self.position.to_tile()

    def start_tile(self, player_start: TilePoint) -> TilePoint:
        """Where this mob returns to when reset."""
        if isinstance(self.ai, PlayerAI):
            return player_start
        return self.ai.start

    def reset(self, player_start: TilePoint) -> None:
        """Return to the starting position and heading."""
        self.step = None
        self.ai.reset()
        self.position = self.start_tile(player_start).to_world()
        self.history.clear()
        self.teleported = False

    def teleport_to(self, tile: TilePoint) -> None:
        """Jump to a tile, cancelling any step in flight."""
        self.position = tile.to_world()
        self.step = None
        self.teleported = True

    def _reach(self, target: TilePoint, board: Board) -> None:
        """Bookkeeping once the step target is reached."""
        jid = board.get_junction_id(target)
        if jid is not None:
            self.history.appendleft(jid)

    def update(
        self,
        buttons: Input,
        board: Board,
        player: "Mob | None",
        history_limit: int,
        rng: Random,
    ) -> BoardUpdate | None:
        """Advance one tick.

        Moves toward the step target, picks a new target if there is none,
        then (for the player) collects whatever is on the current tile.
        Returns what the player collected, if anything.
        """
        if len(self.history) == 0:
            jid = board.get_junction_id(self.tile)
            if jid is not None:
                self.history.appendleft(jid)

        # Step toward the target
        target = self.step
        if target is not None:
            world_target = target.to_world()
            dx = world_target.x - self.position.x
            dy = world_target.y - self.position.y
            if dx == 0 and dy == 0:
                self._reach(target, board)
                self.step = None
            elif abs(dx) < self.speed and abs(dy) < self.speed:
                # Snap, so we don't overshoot
                self.position = world_target
                self._reach(target, board)
                self.step = None
            else:
                self.position = self.position.translate(
                    self.speed * _sign(dx), self.speed * _sign(dy)
                )

        # Not an elif: a mob that arrived may pick a new target right away
        if self.step is None:
            self.step = self.ai.choose_next_tile(self.tile, buttons, board, player, rng)

        if self.is_player:
            return self._collect(board)

        while len(self.history) > history_limit:
            self.history.pop()
        return None

    def _collect(self, board: Board) -> BoardUpdate | None:
        """Collect pellets on the current tile."""
        here = self.tile
        res = BoardUpdate()
        if board.collect_pellet(here):
            res.pellets_collected += 1
        if board.collect_power_pellet(here):
            res.power_pellets_collected += 1
        if not res.happened():
            return None
        # Keep only the leading junction, so nothing is credited twice
        if len(self.history) > 0:
            current = self.history[0]
            self.history.clear()
            self.history.appendleft(current)
        return res


def _sign(v: int) -> int:
    """Sign of an integer: -1, 0 or 1."""
    return (v > 0) - (v < 0)
