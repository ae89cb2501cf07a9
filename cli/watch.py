"""
CLI command to watch the release feed in the foreground.
"""
import time
import click
import logging
from services.feed_watcher import FeedWatcher
from services.notification_service import ConsoleNotifier
from utils.cli_helpers import get_service_from_context, console
from utils.errors import FeedError

logger = logging.getLogger(__name__)

@click.command("watch")
@click.option("--once", is_flag=True, help="Poll the feed a single time and exit")
@click.option("--interval", type=int, default=None, help="Seconds between polls (overrides [feed] poll_interval)")
@click.pass_context
def watch(ctx: click.Context, once: bool, interval: int) -> None:
    """Poll the feed and announce new episodes of subscribed shows until interrupted."""
    db = get_service_from_context(ctx, "db")
    feed = get_service_from_context(ctx, "feed")

    if ctx.obj["dry_run"]:
        click.secho("🧪 DRY RUN: Would watch the feed for new episodes", fg="yellow")
        return

    watcher = FeedWatcher(
        db,
        feed,
        ctx.obj["resolution"],
        notifier=ConsoleNotifier(console),
        poll_interval=interval or ctx.obj.get("poll_interval", 60),
        retry_backoff=ctx.obj.get("retry_backoff", 10),
    )

    if once:
        try:
            records = watcher.run_once()
        except FeedError as e:
            click.secho(f"❌ {e}", fg="red", bold=True)
            ctx.exit(1)
        click.secho(f"✅ {len(records)} new episodes stored", fg="green")
        return

    click.secho(f"[WATCHING FEED every {watcher.poll_interval}s, Ctrl+C to stop]", fg="green", bold=True)
    watcher.start()
    try:
        while watcher.is_running:
            time.sleep(1)
            for error in watcher.drain_errors():
                click.secho(f"An error occurred in the feed watcher. Restarting - {error}", fg="red", bold=True)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        watcher.stop()
