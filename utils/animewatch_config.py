"""
Configuration utilities for loading, parsing, and writing AnimeWatch config files.
"""
import configparser
import logging
import os
from pathlib import Path
from typing import Dict, Any, Union

from models.resolution import Resolution
from utils.config.config_normalizer import ConfigNormalizer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "./config/animewatch_config.ini"
DEFAULT_DB_FILE = "./data/animewatch.db"
DEFAULT_SEARCH_URL = "https://nyaa.si/?page=rss&q={query}&c=0_0&f=0&u=HorribleSubs"
DEFAULT_SEASON_SELECTOR = ".shows-wrapper"
DEFAULT_POLL_INTERVAL = 60
DEFAULT_RETRY_BACKOFF = 10
DEFAULT_HTTP_TIMEOUT = 30

ConfigType = Union[configparser.ConfigParser, Dict[str, Dict[str, Any]]]


def load_configuration(path: str, normalize: bool = True) -> ConfigType:
    """
    Load the configuration file with optional normalization.

    Args:
        path (str): Path to the configuration file.
        normalize (bool): Whether to apply configuration normalization and environment overrides.

    Returns:
        Union[configparser.ConfigParser, Dict]: Loaded configuration parser or normalized dict.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found: {path}")

    parser = configparser.ConfigParser(interpolation=None)
    parser.read(path, encoding="utf-8")

    if not normalize:
        logger.debug(f"Loading raw configuration from: {path}")
        return parser

    normalized_config = ConfigNormalizer().normalize_and_override(parser)
    logger.info(f"Configuration loaded and normalized successfully from: {path}")
    return normalized_config


def write_configuration(config_dict: Dict[str, Dict[str, Any]], path: str) -> Path:
    """
    Write a config.ini file from a dictionary of config sections.

    Args:
        config_dict (dict): Dictionary of config sections and values.
        path (str): Destination path. Parent directories are created.

    Returns:
        Path: Path to the written config file.
    """
    config = configparser.ConfigParser(interpolation=None)
    for section, values in config_dict.items():
        config[section] = {key: str(value) for key, value in values.items()}

    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        config.write(f)

    logger.info(f"Configuration written to: {config_path}")
    return config_path


def get_config_section(config: ConfigType, section_name: str) -> Dict[str, Any]:
    """
    Get configuration section with case-insensitive lookup.

    Args:
        config: Configuration object (ConfigParser or normalized dict)
        section_name: Configuration section name

    Returns:
        Dict[str, Any]: Copy of the configuration section data

    Raises:
        ValueError: If section is not found
    """
    if config is None:
        raise ValueError("Configuration object cannot be None")

    if not isinstance(section_name, str) or not section_name.strip():
        raise ValueError("Section name must be a non-empty string")

    normalizer = ConfigNormalizer()
    canonical_name = normalizer.canonical_section(section_name.strip())

    if isinstance(config, configparser.ConfigParser):
        for name in config.sections():
            if normalizer.canonical_section(name) == canonical_name:
                return {key.lower(): value for key, value in config[name].items()}
    elif canonical_name in config:
        return dict(config[canonical_name])

    raise ValueError(f"Configuration section '{section_name}' not found")


def get_config_value(
    config: ConfigType,
    section: str,
    key: str,
    fallback: Any = None,
    value_type: type = str
) -> Any:
    """
    Get a configuration value with case-insensitive lookup and type conversion.

    Args:
        config: Configuration object (ConfigParser or normalized dict)
        section: Configuration section name
        key: Configuration key name
        fallback: Default value if not found
        value_type: Type to convert the value to (str, int, float, bool)

    Returns:
        Configuration value converted to specified type or fallback

    Raises:
        ValueError: If value cannot be converted and no fallback is given
    """
    if config is None:
        return fallback

    try:
        value = get_config_section(config, section).get(key.strip().lower())
    except ValueError:
        value = None

    if value is None or (isinstance(value, str) and not value.strip()):
        return fallback

    try:
        if value_type == bool and isinstance(value, str):
            return value.strip().lower() in ('true', '1', 'yes', 'on', 'enabled')
        if value_type == str:
            return str(value).strip()
        return value_type(value)
    except (ValueError, TypeError) as e:
        if fallback is not None:
            logger.warning(
                f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}. "
                f"Using fallback: {fallback}"
            )
            return fallback
        raise ValueError(
            f"Failed to convert config value [{section}].{key}='{value}' to {value_type.__name__}: {e}"
        )


def get_preferred_resolution(config: ConfigType) -> Resolution:
    """Return the configured preferred resolution (720p when unset)."""
    return Resolution.parse(get_config_value(config, "preferences", "resolution", fallback=Resolution.HD.value))


def build_default_configuration(
    feed_url: str,
    season_url: str,
    player_path: str,
    resolution: str,
    db_file: str = DEFAULT_DB_FILE,
) -> Dict[str, Dict[str, Any]]:
    """
    Build the section dictionary written by the setup wizard.

    Returns:
        dict: Configuration sections ready for write_configuration().
    """
    return {
        "feed": {
            "url": feed_url,
            "search_url": DEFAULT_SEARCH_URL,
            "poll_interval": DEFAULT_POLL_INTERVAL,
            "retry_backoff": DEFAULT_RETRY_BACKOFF,
            "timeout": DEFAULT_HTTP_TIMEOUT,
        },
        "season": {"url": season_url, "selector": DEFAULT_SEASON_SELECTOR},
        "player": {"path": player_path},
        "preferences": {"resolution": Resolution.parse(resolution).value},
        "database": {"type": "sqlite"},
        "sqlite": {"db_file": db_file},
    }
