"""
CLI command to stop tracking a show.
"""
import click
import logging
from utils.cli_helpers import get_service_from_context
from utils.subscription_manager import resolve_shows

logger = logging.getLogger(__name__)

@click.command("unsubscribe")
@click.argument("title")
@click.pass_context
def unsubscribe(ctx: click.Context, title: str) -> None:
    """Unsubscribe from a show. Stored episodes are kept."""
    db = get_service_from_context(ctx, "db")

    try:
        show = resolve_shows(db, [title])[0]
    except KeyError:
        click.secho(f"❌ Unknown show: {title}", fg="red", bold=True)
        ctx.exit(1)

    if ctx.obj["dry_run"]:
        click.secho(f"🧪 DRY RUN: Would unsubscribe from {show.title}", fg="yellow")
        return

    db.unsubscribe_from_show(show.id)
    click.secho(f"✅ Unsubscribed from {show.title}", fg="green")
