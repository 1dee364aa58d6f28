"""Saving and loading game states as YAML snapshots."""

import logging
from pathlib import Path

from pydantic_yaml import parse_yaml_file_as, parse_yaml_raw_as, to_yaml_file, to_yaml_str

from .game import GameState

logger = logging.getLogger(__name__)


def state_to_yaml(state: GameState) -> str:
    """Snapshot a game state to a YAML string."""
    return to_yaml_str(state)


def state_from_yaml(raw: str) -> GameState:
    """Restore a game state from a YAML string."""
    return parse_yaml_raw_as(GameState, raw)


def save_state(state: GameState, path: Path | str) -> None:
    """Write a snapshot of the game state to a file."""
    path = Path(path)
    to_yaml_file(path, state)
    logger.info(f"Saved state at level {state.level} to {path!s}")


def load_state(path: Path | str) -> GameState:
    """Read a game state snapshot from a file."""
    return parse_yaml_file_as(GameState, Path(path))
