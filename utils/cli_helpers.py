#!/usr/bin/env python3
"""
CLI helper utilities for consistent error handling, service lookup and table output.
"""

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typing import List, Optional, Any, Iterable

from models.episode import EpisodeRecord
from models.show import Show

console = Console()


def get_service_from_context(ctx: click.Context, service_name: str, required: bool = True) -> Optional[Any]:
    """
    Get a service from context with proper error handling.

    Args:
        ctx: Click context object
        service_name: Name of the service to retrieve
        required: Whether the service is required (affects error handling)

    Returns:
        Service instance or None if not available
    """
    obj = ctx.obj or {}
    service = obj.get(service_name)
    if service is None and required:
        if obj.get("config_error"):
            console.print(f"❌ Configuration error: {obj['config_error']}", style="red")
        else:
            console.print(f"❌ {service_name} not available. Please check your configuration.", style="red")
        console.print("💡 Try running: animewatch init-config", style="yellow")
        raise click.Abort()
    return service


def shows_table(shows: Iterable[Show], title: str = "Shows") -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Subscribed", justify="center")
    for show in shows:
        table.add_row(str(show.id), escape(show.title), "✓" if show.subscribed else "")
    return table


def episodes_table(episodes: List[EpisodeRecord], title: str = "Episodes") -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Episode", style="bold")
    table.add_column("Resolution")
    table.add_column("Watched", justify="center")
    for episode in episodes:
        table.add_row(str(episode.id), escape(episode.formatted_title()), episode.resolution.value, "✓" if episode.watched else "")
    return table
