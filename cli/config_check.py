"""
CLI command to validate the configuration file.
"""
import click
import logging
from utils.config import validate_configuration

logger = logging.getLogger(__name__)

@click.command("config-check")
@click.pass_context
def config_check(ctx: click.Context) -> None:
    """Validate the configuration and report problems."""
    obj = ctx.obj or {}
    config = obj.get("config")
    config_path = obj.get("config_path")

    if config is None:
        click.secho(f"❌ {obj.get('config_error', 'No configuration loaded')}", fg="red", bold=True)
        click.secho("💡 Try running: animewatch init-config", fg="yellow")
        ctx.exit(1)

    result = validate_configuration(config)
    for warning in result.warnings:
        click.secho(f"⚠️  {warning}", fg="yellow")

    if result.is_valid:
        click.secho(f"✅ Configuration is valid: {config_path}", fg="green")
        return

    click.secho(f"❌ Configuration has {len(result.errors)} error(s): {config_path}", fg="red", bold=True)
    for error in result.errors:
        click.secho(f"  {error}", fg="red")
    ctx.exit(1)
