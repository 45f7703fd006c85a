"""Tournament configuration management."""

import logging
from functools import lru_cache
from pathlib import Path

from .schemas import TournamentConfig
from .utils import load_json_safe

logger = logging.getLogger('softball.config')

CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'tournament_config.json'


@lru_cache(maxsize=1)
def get_config() -> TournamentConfig:
    """
    Load tournament configuration from data/tournament_config.json.

    Configuration is cached after first load. A missing or invalid file
    falls back to the built-in defaults so the engine always has a usable
    configuration.

    Returns:
        TournamentConfig object with validated settings

    Example:
        from softball.config import get_config
        config = get_config()
        print(f"Regulation innings: {config.regulation_innings}")
    """
    config = load_json_safe(CONFIG_PATH, schema=TournamentConfig)
    if config is None:
        logger.warning(f'No usable config at {CONFIG_PATH}, using defaults')
        config = TournamentConfig()
    return config


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
