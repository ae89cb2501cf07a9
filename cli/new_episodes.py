"""
CLI command to list unwatched episodes of subscribed shows.
"""
import click
import logging
from utils.cli_helpers import get_service_from_context, episodes_table, console

logger = logging.getLogger(__name__)

@click.command("new-episodes")
@click.pass_context
def new_episodes(ctx: click.Context) -> None:
    """List unwatched episodes in the preferred resolution."""
    db = get_service_from_context(ctx, "db")
    episodes = db.get_new_episodes(ctx.obj["resolution"])

    if not episodes:
        click.secho("No new episodes found", fg="red", bold=True)
        return

    console.print(episodes_table(episodes, title="New Episodes"))
