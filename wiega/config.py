"""
Configuration loader
"""
import logging
import os
import yaml
from pathlib import Path
from wiega.models import GameSettings


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/game.yaml"


def get_config_path() -> str:
    """Config path, overridable via WIEGA_CONFIG"""
    return os.environ.get("WIEGA_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> GameSettings:
    """
    Load game settings from YAML file

    Missing keys fall back to the GameSettings defaults.

    Args:
        config_path: Path to config file

    Returns:
        GameSettings object

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a mapping
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    settings = GameSettings(**data)
    logger.info(f"Loaded game settings from {config_path}")
    return settings
