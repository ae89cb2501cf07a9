"""
CLI command to list shows, optionally filtered by subscription state.
"""
import click
import logging
from utils.cli_helpers import get_service_from_context, shows_table, console

logger = logging.getLogger(__name__)

@click.command("list-shows")
@click.option("--subscribed/--available", "subscribed", default=None, help="Only subscribed shows, or only shows available to subscribe to")
@click.pass_context
def list_shows(ctx: click.Context, subscribed) -> None:
    """List shows in the database."""
    db = get_service_from_context(ctx, "db")
    shows = db.get_shows(subscribed=subscribed)

    if not shows:
        if subscribed:
            click.secho("No shows found! Please subscribe first", fg="red", bold=True)
        else:
            click.secho("No shows found", fg="red", bold=True)
        return

    title = {True: "My Subscriptions", False: "Available Subscriptions"}.get(subscribed, "Shows")
    console.print(shows_table(shows, title=title))
