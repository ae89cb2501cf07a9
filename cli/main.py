"""
Main entry point for the AnimeWatch CLI.
- Sets up the Click command group and context object.
- Dynamically loads all CLI commands from this directory.
"""
import os
import importlib
import click
import logging
import rich_click as rclick
from utils.animewatch_config import (
    load_configuration,
    get_config_value,
    get_preferred_resolution,
    DEFAULT_CONFIG_PATH,
    DEFAULT_SEARCH_URL,
    DEFAULT_SEASON_SELECTOR,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RETRY_BACKOFF,
    DEFAULT_HTTP_TIMEOUT,
)
from utils.config import validate_configuration
from utils.logging_config import setup_logging
from services.db_factory import create_db_service
from services.feed_service import FeedService
from services.season_service import SeasonService
from services.player_service import PlayerService

logger = logging.getLogger(__name__)

CONTEXT_KEYS = ("config", "db", "feed", "season", "player", "resolution", "dry_run")


def build_context(config: dict, config_path: str, dry_run: bool = False) -> dict:
    """
    Create the shared services from a normalized configuration.

    Args:
        config (dict): Normalized configuration.
        config_path (str): Path the configuration was read from.
        dry_run (bool): Open the database read-only and skip writes.

    Returns:
        dict: Context object shared by all subcommands.
    """
    timeout = get_config_value(config, "feed", "timeout", fallback=DEFAULT_HTTP_TIMEOUT, value_type=int)
    return {
        "config": config,
        "config_path": config_path,
        "db": create_db_service(config, read_only=dry_run),
        "feed": FeedService(
            get_config_value(config, "feed", "url"),
            get_config_value(config, "feed", "search_url", fallback=DEFAULT_SEARCH_URL),
            timeout=timeout,
        ),
        "season": SeasonService(
            get_config_value(config, "season", "url"),
            get_config_value(config, "season", "selector", fallback=DEFAULT_SEASON_SELECTOR),
            timeout=timeout,
        ),
        "player": PlayerService(get_config_value(config, "player", "path")),
        "resolution": get_preferred_resolution(config),
        "poll_interval": get_config_value(config, "feed", "poll_interval", fallback=DEFAULT_POLL_INTERVAL, value_type=int),
        "retry_backoff": get_config_value(config, "feed", "retry_backoff", fallback=DEFAULT_RETRY_BACKOFF, value_type=int),
        "dry_run": dry_run,
    }


@rclick.group()
@click.option('--logfile', '-l', type=click.Path(writable=True), help="Log to file")
@click.option('--verbose', '-v', count=True, help="Set verbosity level (-v = INFO, -vv = DEBUG)")
@click.option('--config', '-c', type=click.Path(), default=DEFAULT_CONFIG_PATH, show_default=True, help="Path to config file")
@click.option('--dry-run', is_flag=True, help="Run in dry-run mode (read-only database)")
@click.pass_context
def animewatch_cli(ctx: click.Context, verbose: int, logfile: str, config: str, dry_run: bool) -> None:
    """
    Track anime releases from an RSS feed and play subscribed episodes.

    Sets up the context object with configuration, database, feed, season listing and player
    services. All subcommands share this context.
    """
    # If the context object is already set, return it without reinitializing it
    if ctx.obj and all(k in ctx.obj for k in CONTEXT_KEYS):
        return

    if logfile and os.path.dirname(logfile):
        os.makedirs(os.path.dirname(logfile), exist_ok=True)

    setup_logging(verbosity=verbose, logfile=logfile)

    try:
        cfg = load_configuration(config)
    except FileNotFoundError as e:
        logger.warning(f"{e}")
        ctx.obj = {"config": None, "config_path": config, "dry_run": dry_run, "config_error": str(e)}
        return

    result = validate_configuration(cfg)
    if not result.is_valid:
        logger.warning(f"Configuration has {len(result.errors)} error(s)")
        ctx.obj = {
            "config": cfg,
            "config_path": config,
            "dry_run": dry_run,
            "config_error": "; ".join(str(error).splitlines()[0] for error in result.errors),
        }
        return

    ctx.obj = build_context(cfg, config, dry_run=dry_run)
    logger.info(f"Services initialized: {ctx.obj['db']}, {ctx.obj['feed']}, {ctx.obj['player']}")


# Dynamic discovery loop: auto-register all CLI commands in this directory
COMMAND_DIR = os.path.dirname(__file__)
for filename in sorted(os.listdir(COMMAND_DIR)):
    # Only import .py files that are not main.py or __init__.py
    if filename.endswith(".py") and filename not in {"main.py", "__init__.py"}:
        command_name = filename[:-3]
        module_name = f"cli.{command_name}"
        try:
            module = importlib.import_module(module_name)
            cli_function = getattr(module, command_name, None)
            if cli_function:
                animewatch_cli.add_command(cli_function)
            else:
                logger.debug(f"No command function found in {module_name}")
        except Exception as e:
            logger.debug(f"Failed to import {module_name}: {e}")

if __name__ == '__main__':
    animewatch_cli()
