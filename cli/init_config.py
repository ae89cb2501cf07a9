"""
CLI command that walks the user through creating a configuration file.
"""
import os
import click
import logging
from models.resolution import AVAILABLE_RESOLUTIONS, Resolution
from utils.animewatch_config import build_default_configuration, write_configuration, DEFAULT_CONFIG_PATH, DEFAULT_DB_FILE

logger = logging.getLogger(__name__)

@click.command("init-config")
@click.option("--feed-url", default=None, help="RSS feed URL")
@click.option("--season-url", default=None, help="Current season listing URL")
@click.option("--player-path", default=None, help="Path to the video player")
@click.option("--resolution", type=click.Choice(AVAILABLE_RESOLUTIONS), default=None, help="Preferred resolution")
@click.option("--db-file", default=DEFAULT_DB_FILE, show_default=True, help="SQLite database file")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file")
@click.pass_context
def init_config(ctx: click.Context, feed_url: str, season_url: str, player_path: str, resolution: str, db_file: str, force: bool) -> None:
    """Create a configuration file, prompting for any value not given as an option."""
    config_path = (ctx.obj or {}).get("config_path") or DEFAULT_CONFIG_PATH

    if os.path.exists(config_path) and not force:
        click.secho(f"❌ Configuration already exists at {config_path} (use --force to overwrite)", fg="red", bold=True)
        ctx.exit(1)

    click.secho("Welcome. Let's set up AnimeWatch!", fg="cyan", bold=True)
    feed_url = feed_url or click.prompt("RSS Feed URL")
    season_url = season_url or click.prompt("Current season URL")
    player_path = player_path or click.prompt("Path to video player")
    resolution = resolution or click.prompt(
        "Select show resolution",
        type=click.Choice(AVAILABLE_RESOLUTIONS),
        default=Resolution.HD.value,
    )

    values = build_default_configuration(feed_url, season_url, player_path, resolution, db_file=db_file)
    path = write_configuration(values, config_path)
    logger.info(f"Configuration wizard wrote {path}")
    click.secho(f"✅ Configuration written to {path}", fg="green")
    click.secho("💡 Next: animewatch init-db && animewatch seed-shows", fg="yellow")
