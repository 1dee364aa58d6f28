"""Configuration models."""

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, model_validator

from pacman_sim.board.geometry import TilePoint
from pacman_sim.mobs.ai import RandomWalkAI

Color = tuple[int, int, int]


class Palette(BaseModel):
    """Colors used by the renderer."""

    model_config = ConfigDict(frozen=True)

    bg_color: Color = (31, 41, 148)
    fg_color: Color = (242, 124, 124)  # maze walls
    player_color: Color = (245, 233, 66)
    pellet_color: Color = (252, 186, 3)
    power_pellet_color: Color = (245, 129, 66)
    teleport_color: Color = (200, 66, 245)
    enemy_color: Color = (255, 0, 0)
    vulnerable_color: Color = (66, 135, 245)


class GameConfig(BaseModel):
    """Startup record for new games.

    Read once when a game is created, never changed afterwards.
    """

    model_config = ConfigDict(frozen=True)

    seed: int | None = 13
    board: Annotated[list[str], Field(min_length=1, description="Rows of tile codes.")]
    player_start: TilePoint
    enemies: list[RandomWalkAI] = []

    start_lives: Annotated[int, Field(ge=0)] = 3
    history_limit: Annotated[int, Field(ge=0)] = 5

    # Speeds, in world units per tick
    player_speed: Annotated[int, Field(ge=0)] = 8
    enemy_starting_speed: Annotated[int, Field(ge=0)] = 10
    enemy_vulnerable_speed: Annotated[int, Field(ge=0)] = 5

    # Timers, in ticks
    vulnerable_time: Annotated[int, Field(ge=0)] = 300
    immobilized_time: Annotated[int, Field(ge=0)] = 100
    start_immobilized_base: Annotated[int, Field(ge=0)] = 100

    # Score
    life_gain_threshold: Annotated[int, Field(gt=0)] = 10000
    score_increase_per_pellet: int = 10
    score_increase_per_power_pellet: int = 50
    score_increase_base_per_ghost_catch: int = 200

    palette: Palette = Palette()

    @model_validator(mode="after")
    def _chk_starts(self) -> "GameConfig":
        """Ensure starting tiles lie on the board."""
        height = len(self.board)
        width = len(self.board[0])
        starts = [self.player_start] + [ai.start for ai in self.enemies]
        for tp in starts:
            if not (0 <= tp.tx < width and 0 <= tp.ty < height):
                raise ValueError(
                    f"Start ({tp.tx}, {tp.ty}) is outside the {width}x{height} board"
                )
        return self
