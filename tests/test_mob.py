"""Tests for mob stepping and per-tick bookkeeping."""

from collections import deque
from random import Random

from pacman_sim.board.geometry import Direction, TilePoint, WorldPoint
from pacman_sim.board.tiles import Board, Tile
from pacman_sim.mobs.ai import Input
from pacman_sim.mobs.mob import BoardUpdate, Mob

from conftest import LOOP_BOARD, enemy_at


def _player_at(x: int, y: int, speed: int = 8) -> Mob:
    player = Mob.new_player(TilePoint(tx=0, ty=0), speed)
    player.position = WorldPoint(x=x, y=y)
    return player


def test_snaps_onto_close_target():
    board = Board.from_lines(LOOP_BOARD)
    target = TilePoint(tx=2, ty=1)
    player = _player_at(target.to_world().x + 5, target.to_world().y)
    player.step = target
    player.update(Input(), board, None, 5, Random(0))
    assert player.position == target.to_world()
    assert player.step is None


def test_moves_by_speed_toward_far_target():
    board = Board.from_lines(LOOP_BOARD)
    start = TilePoint(tx=2, ty=1).to_world()
    player = _player_at(start.x, start.y)
    player.step = TilePoint(tx=3, ty=1)
    player.update(Input(), board, None, 5, Random(0))
    assert player.position == WorldPoint(x=start.x + 8, y=start.y)
    assert player.step == TilePoint(tx=3, ty=1)


def test_reaching_junction_records_history_and_replans():
    board = Board.from_lines(LOOP_BOARD)
    junction = TilePoint(tx=3, ty=1)
    player = _player_at(junction.to_world().x - 6, junction.to_world().y)
    player.step = junction
    player.update(Input(right=True), board, None, 5, Random(0))
    assert player.position == junction.to_world()
    assert list(player.history) == [board.tile_id(junction)]
    # A new target is chosen in the same tick
    assert player.step == TilePoint(tx=4, ty=1)


def test_exact_arrival_clears_step():
    board = Board.from_lines(LOOP_BOARD)
    here = TilePoint(tx=2, ty=1)
    player = _player_at(here.to_world().x, here.to_world().y)
    player.step = here
    player.update(Input(), board, None, 5, Random(0))
    assert player.step is None
    assert player.position == here.to_world()


def test_player_collects_and_truncates_history():
    board = Board.from_lines(LOOP_BOARD)
    pellet = TilePoint(tx=1, ty=1)
    player = _player_at(pellet.to_world().x, pellet.to_world().y)
    player.history = deque([5, 6, 7])
    res = player.update(Input(), board, None, 5, Random(0))
    assert res == BoardUpdate(pellets_collected=1, power_pellets_collected=0)
    assert board.get_tile(pellet) == Tile.EMPTY
    assert list(player.history) == [5]
    # Nothing left to collect
    assert player.update(Input(), board, None, 5, Random(0)) is None


def test_player_collects_power_pellet():
    board = Board.from_lines(LOOP_BOARD)
    tp = TilePoint(tx=5, ty=1)
    player = _player_at(tp.to_world().x, tp.to_world().y)
    res = player.update(Input(), board, None, 5, Random(0))
    assert res == BoardUpdate(pellets_collected=0, power_pellets_collected=1)


def test_enemy_history_is_capped():
    board = Board.from_lines(LOOP_BOARD)
    ai = enemy_at(2, 1, Direction.RIGHT)
    enemy = Mob(ai=ai, position=ai.start.to_world(), speed=10)
    enemy.history = deque([1, 2, 3, 4])
    assert enemy.update(Input(), board, None, 2, Random(0)) is None
    assert list(enemy.history) == [1, 2]
    assert enemy.step == TilePoint(tx=3, ty=1)


def test_frozen_enemy_does_not_move():
    board = Board.from_lines(LOOP_BOARD)
    ai = enemy_at(2, 1, Direction.RIGHT)
    enemy = Mob(ai=ai, position=ai.start.to_world(), speed=0)
    enemy.step = TilePoint(tx=3, ty=1)
    enemy.update(Input(), board, None, 5, Random(0))
    assert enemy.position == ai.start.to_world()
    assert enemy.step == TilePoint(tx=3, ty=1)


def test_reset_returns_to_start():
    ai = enemy_at(3, 3, Direction.UP)
    enemy = Mob(ai=ai, position=WorldPoint(x=0, y=0), speed=10)
    enemy.ai.dir = Direction.DOWN
    enemy.step = TilePoint(tx=1, ty=1)
    enemy.history = deque([4])
    enemy.reset(TilePoint(tx=9, ty=9))
    assert enemy.tile == TilePoint(tx=3, ty=3)
    assert enemy.step is None
    assert len(enemy.history) == 0
    assert enemy.ai.dir == Direction.UP
    assert not enemy.is_player

    player = _player_at(0, 0)
    player.reset(TilePoint(tx=2, ty=1))
    assert player.tile == TilePoint(tx=2, ty=1)
    assert player.is_player
