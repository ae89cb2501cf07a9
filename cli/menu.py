"""
Interactive menu: browse subscriptions and episodes while the feed watcher runs in the background.
"""
import click
import logging
from typing import List, Optional, Sequence

from models.episode import EpisodeRecord
from services.feed_watcher import FeedWatcher
from services.notification_service import ConsoleNotifier
from services.player_service import play_episode
from utils.cli_helpers import get_service_from_context, console
from utils.errors import FeedError, PlayerLaunchError
from utils.subscription_manager import subscribe_and_backfill

logger = logging.getLogger(__name__)

BACK_SELECTION = "<< BACK"
MENU_SELECTIONS = ["Available Subscriptions", "My Subscriptions", "New Episodes", "Quit"]


def _print_choices(labels: Sequence[str]) -> None:
    for index, label in enumerate(labels, start=1):
        console.print(f"  [cyan]{index:>3}[/cyan]  {label}", highlight=False)


def _choose(labels: Sequence[str], prompt: str) -> Optional[int]:
    """Prompt for one entry; returns its index, or None for BACK."""
    _print_choices(list(labels) + [BACK_SELECTION])
    choice = click.prompt(prompt, type=click.IntRange(1, len(labels) + 1), default=len(labels) + 1)
    return None if choice == len(labels) + 1 else choice - 1


def _choose_many(labels: Sequence[str], prompt: str) -> List[int]:
    """Prompt for a comma separated list of entries; returns their indexes."""
    _print_choices(labels)
    raw = click.prompt(f"{prompt} (comma separated, empty to go back)", default="", show_default=False)
    indexes = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= len(labels):
            click.secho(f"Ignoring invalid selection: {part}", fg="yellow")
            continue
        if int(part) - 1 not in indexes:
            indexes.append(int(part) - 1)
    return indexes


def _open(ctx: click.Context, episode: EpisodeRecord) -> None:
    click.secho(f"[LOADING EPISODE: {episode.formatted_title()}]", fg="magenta", bold=True)
    try:
        play_episode(ctx.obj["db"], ctx.obj["player"], episode.id)
    except PlayerLaunchError as e:
        logger.error(f"Playback failed: {e}")
        click.secho(f"❌ Problem with opening episode: {e}", fg="red", bold=True)


def _available_subscriptions(ctx: click.Context, notifier: ConsoleNotifier) -> None:
    db = ctx.obj["db"]
    shows = db.get_shows(subscribed=False)
    if not shows:
        click.secho("No available subscriptions", fg="red", bold=True)
        return

    for index in _choose_many([show.title for show in shows], "Select subscriptions"):
        show = shows[index]
        click.secho(f"[SUBSCRIBED TO: {show.title}]", fg="magenta", bold=True)
        try:
            subscribe_and_backfill(db, ctx.obj["feed"], show, ctx.obj["resolution"], notifier=notifier)
        except FeedError as e:
            click.secho(f"❌ Fetching episodes for {show.title} failed: {e}", fg="red", bold=True)


def _my_subscriptions(ctx: click.Context) -> None:
    db = ctx.obj["db"]
    shows = db.get_shows(subscribed=True)
    if not shows:
        click.secho("No shows found! Please subscribe first", fg="red", bold=True)
        return

    while True:
        show_index = _choose([show.title for show in shows], "Choose a show")
        if show_index is None:
            return

        episodes = db.get_episodes_for_show(shows[show_index].id, ctx.obj["resolution"])
        if not episodes:
            click.secho("No episodes found", fg="red", bold=True)
            continue

        labels = [ep.formatted_title() + ("" if not ep.watched else "  (watched)") for ep in episodes]
        episode_index = _choose(labels, "Choose an episode")
        if episode_index is not None:
            _open(ctx, episodes[episode_index])


def _new_episodes(ctx: click.Context) -> None:
    episodes = ctx.obj["db"].get_new_episodes(ctx.obj["resolution"])
    if not episodes:
        click.secho("No new episodes found", fg="red", bold=True)
        return

    episode_index = _choose([ep.formatted_title() for ep in episodes], "Choose an episode")
    if episode_index is not None:
        _open(ctx, episodes[episode_index])


@click.command("menu")
@click.option("--no-watch", is_flag=True, help="Do not poll the feed in the background")
@click.pass_context
def menu(ctx: click.Context, no_watch: bool) -> None:
    """Interactive menu with the feed watcher running in the background."""
    db = get_service_from_context(ctx, "db")
    feed = get_service_from_context(ctx, "feed")
    get_service_from_context(ctx, "player")

    notifier = ConsoleNotifier(console)
    watcher = None
    if not no_watch and not ctx.obj["dry_run"]:
        watcher = FeedWatcher(
            db,
            feed,
            ctx.obj["resolution"],
            notifier=notifier,
            poll_interval=ctx.obj.get("poll_interval", 60),
            retry_backoff=ctx.obj.get("retry_backoff", 10),
        )
        watcher.start()

    handlers = {
        0: lambda: _available_subscriptions(ctx, notifier),
        1: lambda: _my_subscriptions(ctx),
        2: lambda: _new_episodes(ctx),
    }

    try:
        while True:
            if watcher is not None:
                for error in watcher.drain_errors():
                    click.secho(f"An error occurred in the feed watcher. Restarting - {error}", fg="red", bold=True)

            _print_choices(MENU_SELECTIONS)
            selection = click.prompt("Choose an option", type=click.IntRange(1, len(MENU_SELECTIONS)), default=1) - 1
            if MENU_SELECTIONS[selection] == "Quit":
                break
            try:
                handlers[selection]()
            except click.Abort:
                raise
            except Exception as e:
                logger.exception(f"Menu action failed: {e}")
                click.secho(f"An error occurred - {e}", fg="red", bold=True)
    except (click.Abort, EOFError, KeyboardInterrupt):
        click.echo()
    finally:
        if watcher is not None:
            watcher.stop()
