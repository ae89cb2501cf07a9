"""
New-episode notifications.
"""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from models.episode import Episode

logger = logging.getLogger(__name__)


class EpisodeOrigin(str, Enum):
    """Where a newly stored episode came from."""
    BACKFILL = "backfill"
    FEED = "feed"


@dataclass(frozen=True)
class NewEpisodeEvent:
    """A newly stored episode in the user's preferred resolution."""
    episode: Episode
    origin: EpisodeOrigin

    @property
    def headline(self) -> str:
        if self.origin is EpisodeOrigin.BACKFILL:
            return "EPISODE ADDED"
        return "NEW EPISODE ARRIVAL"

    def __str__(self) -> str:
        return f"[{self.headline}: {self.episode.title} - {self.episode.episode}]"


class ConsoleNotifier:
    """Prints new-episode events to the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def notify(self, event: NewEpisodeEvent) -> None:
        logger.info(f"Announcing {event}")
        self.console.print(
            f"[dim magenta]\\[{event.headline}:[/dim magenta]"
            f"[bold dim]{escape(event.episode.title)} - {escape(event.episode.episode)}[/bold dim]"
            f"[bold magenta]][/bold magenta]"
        )


class CollectingNotifier:
    """Keeps events in memory; safe to share between the watcher thread and the foreground."""

    def __init__(self):
        self._events: List[NewEpisodeEvent] = []
        self._lock = threading.Lock()

    def notify(self, event: NewEpisodeEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[NewEpisodeEvent]:
        with self._lock:
            return list(self._events)

    def drain(self) -> List[NewEpisodeEvent]:
        with self._lock:
            events, self._events = self._events, []
        return events
