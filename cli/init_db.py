"""
CLI command to initialize the SQLite database.
"""
import click
import logging
from services.db_implementations.db_interface import DatabaseInterface
from utils.cli_helpers import get_service_from_context

logger = logging.getLogger(__name__)

@click.command("init-db")
@click.pass_context
def init_db(ctx):
    """Initialize the SQLite database."""
    db: DatabaseInterface = get_service_from_context(ctx, "db")

    if ctx.obj["dry_run"]:
        logger.info("DRY RUN: Would initialize the database (read-only mode)")
        click.secho("🧪 DRY RUN: Would initialize the database", fg="yellow")
        return

    db.initialize()
    logger.info("Database initialized successfully.")
    click.secho("✅ Database initialized", fg="green")
