"""
CLI command to open a stored episode in the video player.
"""
import click
import logging
from services.player_service import play_episode
from utils.cli_helpers import get_service_from_context
from utils.errors import PlayerLaunchError

logger = logging.getLogger(__name__)

@click.command("play")
@click.argument("episode_id", type=int)
@click.pass_context
def play(ctx: click.Context, episode_id: int) -> None:
    """Open an episode by ID and mark it as watched."""
    db = get_service_from_context(ctx, "db")
    player = get_service_from_context(ctx, "player")

    if ctx.obj["dry_run"]:
        episode = db.get_episode_by_id(episode_id)
        label = episode.formatted_title() if episode else f"episode {episode_id}"
        click.secho(f"🧪 DRY RUN: Would open {label}", fg="yellow")
        return

    try:
        episode = play_episode(db, player, episode_id)
    except KeyError:
        click.secho(f"❌ No episode with ID {episode_id}", fg="red", bold=True)
        ctx.exit(1)
    except PlayerLaunchError as e:
        logger.error(f"Playback failed: {e}")
        click.secho(f"❌ {e}", fg="red", bold=True)
        ctx.exit(1)

    click.secho(f"[WATCHED: {episode.formatted_title()}]", fg="magenta", bold=True)
