"""
CLI command to subscribe to shows and backfill their released episodes.
"""
import click
import logging
from services.notification_service import ConsoleNotifier
from utils.cli_helpers import get_service_from_context, console
from utils.errors import FeedError
from utils.subscription_manager import subscribe_and_backfill, resolve_shows

logger = logging.getLogger(__name__)

@click.command("subscribe")
@click.argument("titles", nargs=-1, required=True)
@click.pass_context
def subscribe(ctx: click.Context, titles) -> None:
    """Subscribe to one or more shows by title."""
    db = get_service_from_context(ctx, "db")
    feed = get_service_from_context(ctx, "feed")
    resolution = ctx.obj["resolution"]

    try:
        shows = resolve_shows(db, titles)
    except KeyError as e:
        click.secho(f"❌ Unknown show: {e.args[0]}", fg="red", bold=True)
        click.secho("💡 Run 'animewatch list-shows --available' to see the season's shows", fg="yellow")
        ctx.exit(1)

    if ctx.obj["dry_run"]:
        for show in shows:
            click.secho(f"🧪 DRY RUN: Would subscribe to {show.title}", fg="yellow")
        return

    notifier = ConsoleNotifier(console)
    failed = False
    for show in shows:
        try:
            records = subscribe_and_backfill(db, feed, show, resolution, notifier=notifier)
            click.secho(f"[SUBSCRIBED TO: {show.title}] {len(records)} episodes added", fg="magenta", bold=True)
        except FeedError as e:
            failed = True
            logger.error(f"Backfill for {show.title} failed: {e}")
            click.secho(f"⚠️  Subscribed to {show.title}, but fetching its episodes failed: {e}", fg="yellow")

    if failed:
        ctx.exit(1)
