"""Set up the data."""

from pathlib import Path

from pydantic_yaml import parse_yaml_file_as

from .models import GameConfig, Palette

__all__ = ["data_path", "default_config", "load_config", "GameConfig", "Palette"]

data_path = Path(__file__).parent


def load_config(path: Path | str) -> GameConfig:
    """Load a game configuration from a YAML file."""
    return parse_yaml_file_as(GameConfig, Path(path))


default_config = load_config(data_path / "default_config.yaml")
