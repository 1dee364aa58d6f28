"""Game state and the per-tick update."""

import logging
from random import Random
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from pacman_sim.board.geometry import TilePoint
from pacman_sim.board.tiles import Board, Tile
from pacman_sim.data.models import GameConfig
from pacman_sim.mobs.ai import Input
from pacman_sim.mobs.mob import Mob

logger = logging.getLogger(__name__)


class Collision(BaseModel):
    """What happened when the player and an enemy share a tile."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["player_death", "enemy_catch"]
    enemy_id: int


class GameState(BaseModel):
    """Current state of a game, along with the config that created it.

    The state exclusively owns its board and mobs; use `clone` to checkpoint.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig
    rng: Random
    score: int = 0
    lives: int
    level: int = 1  # 1-based
    vulnerability_timer: int = 0
    enemies_caught_multiplier: int = 1
    lives_gained: int = 0  # lives awarded for passing score thresholds
    player: Mob
    enemies: list[Mob]
    board: Board

    @field_validator("rng", mode="before")
    @classmethod
    def _to_rng(cls, v: Any) -> Any:
        """Accept a seed or a saved generator state."""
        if isinstance(v, Random):
            return v
        if v is None or isinstance(v, int):
            return Random(v)
        if isinstance(v, (list, tuple)) and len(v) == 3:
            version, internal, gauss_next = v
            rng = Random()
            rng.setstate((version, tuple(internal), gauss_next))
            return rng
        raise ValueError(f"Cannot make a random generator from {v!r}")

    @field_serializer("rng")
    def _ser_rng(self, rng: Random) -> list:
        """Save the generator state."""
        version, internal, gauss_next = rng.getstate()
        return [version, list(internal), gauss_next]

    # Creation

    @classmethod
    def new_game(cls, config: GameConfig) -> "GameState":
        """Start a new game. Fails if the board can't be parsed."""
        board = Board.from_lines(config.board)
        for i, ai in enumerate(config.enemies):
            if not board.get_tile(ai.start).walkable:
                logger.warning(
                    f"Enemy {i} starts on a non-walkable tile "
                    f"({ai.start.tx}, {ai.start.ty}) and will not move."
                )

        player = Mob.new_player(config.player_start, config.player_speed)
        enemies = [
            Mob(
                ai=ai.model_copy(deep=True),
                position=ai.start.to_world(),
                speed=config.enemy_starting_speed,
            )
            for ai in config.enemies
        ]
        state = cls(
            config=config,
            rng=Random(config.seed),
            lives=config.start_lives,
            player=player,
            enemies=enemies,
            board=board,
        )
        state.reset()
        return state

    def clone(self) -> "GameState":
        """Fully independent copy, including the random generator."""
        return self.model_copy(deep=True)

    # Status

    @property
    def game_over(self) -> bool:
        """Whether the player has run out of lives."""
        return self.lives < 0

    @property
    def vulnerable_mode(self) -> bool:
        """Whether enemies can currently be caught."""
        return self.vulnerability_timer > 0

    # Resets

    def reset(self) -> None:
        """Reset the player and enemies, with staggered enemy release."""
        self.player.reset(self.config.player_start)
        for i in range(len(self.enemies)):
            self._reset_enemy(i, immobilized=i * self.config.start_immobilized_base)

    def _reset_enemy(self, enemy_id: int, immobilized: int) -> None:
        """Send an enemy back to its start, frozen for a while."""
        enemy = self.enemies[enemy_id]
        enemy.reset(self.config.player_start)
        enemy.vulnerable = False
        enemy.immobilized_timer = immobilized

    # Update helpers

    def check_enemy_player_collision(
        self, enemy: Mob, enemy_id: int
    ) -> Collision | None:
        """Determine whether an enemy and the player collide, and the outcome."""
        if self.player.tile != enemy.tile:
            return None
        if enemy.vulnerable:
            return Collision(kind="enemy_catch", enemy_id=enemy_id)
        return Collision(kind="player_death", enemy_id=enemy_id)

    def _collisions(self) -> list[Collision]:
        """All current collisions, by enemy index."""
        res: list[Collision] = []
        for i, e in enumerate(self.enemies):
            hit = self.check_enemy_player_collision(e, i)
            if hit is not None:
                res.append(hit)
        return res

    def _teleport_target(self, mob: Mob) -> TilePoint | None:
        """Mirrored tile on the opposite edge, if the mob should teleport now.

        A mob that was just teleported must leave the teleport tile first.
        """
        here = mob.tile
        if self.board.get_tile(here) != Tile.TELEPORT:
            mob.teleported = False
            return None
        if mob.teleported:
            return None
        return TilePoint(tx=self.board.width - 1 - here.tx, ty=here.ty)

    def _enemy_speed(self, enemy: Mob) -> int:
        """Speed of an enemy for this tick."""
        if enemy.immobilized_timer > 0:
            return 0
        if enemy.vulnerable:
            return self.config.enemy_vulnerable_speed
        return self.config.enemy_starting_speed

    def _catch_enemy(self, enemy_id: int) -> None:
        """Award the catch and send the enemy home."""
        award = self.config.score_increase_base_per_ghost_catch
        self.score += award * self.enemies_caught_multiplier
        logger.info(
            f"Caught enemy {enemy_id} "
            f"for {award} x {self.enemies_caught_multiplier} points"
        )
        self.enemies_caught_multiplier *= 2
        self._reset_enemy(enemy_id, immobilized=self.config.immobilized_time)

    # The update

    def update(self, buttons: Input) -> None:
        """Advance the game by one tick. The order of steps matters."""
        cfg = self.config
        pre_update_score = self.score

        # Move the player, collecting pellets
        change = self.player.update(
            buttons, self.board, None, cfg.history_limit, self.rng
        )
        if change is not None:
            self.score += change.pellets_collected * cfg.score_increase_per_pellet
            self.score += (
                change.power_pellets_collected * cfg.score_increase_per_power_pellet
            )
            if change.power_pellets_collected > 0:
                self.vulnerability_timer = cfg.vulnerable_time
                self.enemies_caught_multiplier = 1
                for e in self.enemies:
                    e.vulnerable = True

        # Cleared one tick after the timer runs out
        if self.vulnerability_timer == 0:
            for e in self.enemies:
                e.vulnerable = False

        target = self._teleport_target(self.player)
        if target is not None:
            self.player.teleport_to(target)

        if self.vulnerability_timer > 0:
            self.vulnerability_timer -= 1

        # Check collisions after the player moved
        changes = self._collisions()

        # Move enemies
        for e in self.enemies:
            e.speed = self._enemy_speed(e)
            if e.immobilized_timer > 0:
                e.immobilized_timer -= 1
            assert e.immobilized_timer >= 0
        for e in self.enemies:
            e.update(
                Input(),
                self.board,
                self.player.model_copy(deep=True),
                cfg.history_limit,
                self.rng,
            )

        # Check collisions again, so nobody runs through an enemy
        changes += self._collisions()
        teleports: list[tuple[Mob, TilePoint]] = []
        for e in self.enemies:
            target = self._teleport_target(e)
            if target is not None:
                teleports.append((e, target))
        for e, target in teleports:
            e.teleport_to(target)

        dead = False
        caught: set[int] = set()
        for hit in changes:
            if hit.kind == "player_death":
                dead = True
                break
            if hit.enemy_id in caught:
                continue
            caught.add(hit.enemy_id)
            self._catch_enemy(hit.enemy_id)

        # Only one life per tick
        if self.score >= (self.lives_gained + 1) * cfg.life_gain_threshold:
            self.lives += 1
            self.lives_gained += 1
            logger.info(f"Gained a life at {self.score} points")

        if dead:
            self.lives -= 1
            self.score = pre_update_score
            self.player.reset(cfg.player_start)
            logger.info(f"Player died, {self.lives} lives left")
        elif self.board.board_complete():
            assert self.board.compute_junctions() == self.board.junctions
            self.reset()
            self.level += 1
            # Would otherwise carry over into the next level
            self.vulnerability_timer = 0
            self.board = Board.from_lines(cfg.board)
            logger.info(f"Level complete, starting level {self.level}")
