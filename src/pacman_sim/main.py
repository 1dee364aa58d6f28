"""Headless runner: plays random inputs and reports the outcome."""

import argparse
import logging
from pathlib import Path
from random import Random

from pacman_sim.board.geometry import Direction
from pacman_sim.board.images import render_state
from pacman_sim.data import default_config, load_config
from pacman_sim.mobs.ai import Input
from pacman_sim.state.game import GameState
from pacman_sim.state.persist import save_state

logger = logging.getLogger(__name__)

INPUT_CHOICES: list[Direction | None] = [None] + list(Direction)


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments."""
    p = argparse.ArgumentParser(description="Run a headless Pac-Man simulation.")
    p.add_argument("--config", type=Path, default=None, help="YAML game config.")
    p.add_argument("--ticks", type=int, default=1000, help="Ticks to simulate.")
    p.add_argument("--seed", type=int, default=None, help="Override the game seed.")
    p.add_argument(
        "--input-seed", type=int, default=0, help="Seed for the random inputs."
    )
    p.add_argument("--hold", type=int, default=20, help="Ticks to hold each input.")
    p.add_argument("--save-state", type=Path, default=None, help="Snapshot path.")
    p.add_argument("--image", type=Path, default=None, help="Final frame as PNG.")
    return p


def run(
    state: GameState, ticks: int, input_rng: Random, hold: int = 20
) -> GameState:
    """Play random inputs until out of ticks or lives."""
    buttons = Input()
    for tick in range(ticks):
        if state.game_over:
            logger.info(f"Game over after {tick} ticks")
            break
        if tick % max(hold, 1) == 0:
            buttons = Input.from_direction(input_rng.choice(INPUT_CHOICES))
        state.update(buttons)
    return state


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)

    config = default_config if args.config is None else load_config(args.config)
    if args.seed is not None:
        config = config.model_copy(update=dict(seed=args.seed))

    state = GameState.new_game(config)
    run(state, args.ticks, Random(args.input_seed), hold=args.hold)
    logger.info(
        f"Score {state.score}, level {state.level}, lives {state.lives}, "
        f"{state.board.num_collectable()} pellets left"
    )

    if args.save_state is not None:
        save_state(state, args.save_state)
    if args.image is not None:
        render_state(state).save(args.image)
        logger.info(f"Wrote frame to {args.image!s}")


if __name__ == "__main__":
    main()
