"""
CLI command to copy the episode database into its backups directory.
"""
import click
import logging
from services.db_implementations.db_interface import DatabaseInterface
from utils.cli_helpers import get_service_from_context

logger = logging.getLogger(__name__)

@click.command('backup-db', help='Back up the shows and episodes database.')
@click.pass_context
def backup_db(ctx: click.Context) -> None:
    """Write a timestamped copy of the database next to it, under backups/."""
    db: DatabaseInterface = get_service_from_context(ctx, "db")

    if ctx.obj["dry_run"]:
        logger.info("[DRY RUN] Simulating database backup.")
        logger.info(f"[DRY RUN] Would copy {db} into its backups directory.")
        click.secho(f"🧪 DRY RUN: Would back up {db}", fg="yellow")
        return

    try:
        backup_path = db.backup_database()
    except FileNotFoundError as e:
        logger.error(f"Database backup failed: {e}")
        click.secho("❌ Nothing to back up yet. Run 'animewatch init-db' first.", fg="red", bold=True)
        return
    except Exception as e:
        logger.error(f"Database backup failed: {e}")
        click.secho(f"❌ Database backup failed: {e}", fg="red", bold=True)
        return

    logger.info(f"Database backup created successfully: {backup_path}")
    click.secho(f"✅ Backup written to {backup_path}", fg="green")
