"""
CLI command to list a subscribed show's episodes in the preferred resolution.
"""
import click
import logging
from rich.markup import escape
from utils.cli_helpers import get_service_from_context, episodes_table, console
from utils.subscription_manager import resolve_shows

logger = logging.getLogger(__name__)

@click.command("list-episodes")
@click.argument("title")
@click.pass_context
def list_episodes(ctx: click.Context, title: str) -> None:
    """List the stored episodes of a subscribed show."""
    db = get_service_from_context(ctx, "db")
    resolution = ctx.obj["resolution"]

    try:
        show = resolve_shows(db, [title])[0]
    except KeyError:
        click.secho(f"❌ Unknown show: {title}", fg="red", bold=True)
        ctx.exit(1)

    if not show.subscribed:
        click.secho(f"❌ Not subscribed to {show.title}", fg="red", bold=True)
        ctx.exit(1)

    episodes = db.get_episodes_for_show(show.id, resolution)
    if not episodes:
        click.secho(f"No {resolution} episodes stored for {show.title}", fg="red", bold=True)
        return

    console.print(episodes_table(episodes, title=f"{escape(show.title)} \\[{resolution}]"))
