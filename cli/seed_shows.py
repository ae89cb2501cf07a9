"""
CLI command to add the current season's shows from the season listing.
"""
import click
import logging
from utils.cli_helpers import get_service_from_context
from utils.errors import SeasonListError
from utils.subscription_manager import seed_shows as seed_shows_from_listing

logger = logging.getLogger(__name__)

@click.command("seed-shows")
@click.pass_context
def seed_shows(ctx: click.Context) -> None:
    """Add the current season's shows to the database."""
    db = get_service_from_context(ctx, "db")
    season = get_service_from_context(ctx, "season")
    dry_run = ctx.obj["dry_run"]

    try:
        count = seed_shows_from_listing(db, season, dry_run=dry_run)
    except SeasonListError as e:
        logger.error(f"Seeding shows failed: {e}")
        click.secho(f"❌ {e}", fg="red", bold=True)
        ctx.exit(1)

    if dry_run:
        click.secho(f"🧪 DRY RUN: Found {count} shows in the season listing", fg="yellow")
    else:
        click.secho(f"✅ Added {count} new shows", fg="green")
